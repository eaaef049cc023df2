"""GitHub API errors."""

import httpx


class GitHubError(Exception):
    """Base error for GitHub client failures."""


class GitHubAPIError(GitHubError):
    """Non-2xx response from the GitHub API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.api_message = message
        super().__init__(f"GitHub API error: {status_code} - {message}")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "GitHubAPIError":
        """Build the matching error, preferring the API's own message."""
        message = response.reason_phrase or "request failed"
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("message"):
            message = data["message"]

        error_cls = GitHubNotFoundError if response.status_code == 404 else cls
        return error_cls(response.status_code, message)


class GitHubNotFoundError(GitHubAPIError):
    """The requested path does not exist (404)."""
