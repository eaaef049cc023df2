"""GitHub contents API client."""

import logging
import os
import subprocess
from typing import Any
from urllib.parse import quote

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

from .exceptions import GitHubAPIError, GitHubError
from .models import ContentWriteResult, DeleteRequest, GitHubContent, UploadRequest

logger = logging.getLogger(__name__)

# Retry configuration
DEFAULT_MAX_RETRIES = 1  # total attempts; 1 disables retrying
DEFAULT_MIN_WAIT = 1  # seconds
DEFAULT_MAX_WAIT = 10  # seconds

# Only failures where the request never reached the server are retried,
# writes must not be replayed after a read/write timeout.
RETRYABLE_EXCEPTIONS = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
)


def get_token_from_gh_cli() -> str | None:
    """
    Get GitHub token from gh cli.

    Returns:
        Token string or None if gh cli not available/authenticated
    """
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0 and result.stdout.strip():
            logger.info("Using token from gh cli")
            return result.stdout.strip()
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.debug("gh cli not available: %s", e)
    return None


def get_token(
    token: str | None = None,
    use_gh_cli: bool = False,
    environ: dict[str, str] | None = None,
) -> str | None:
    """
    Get GitHub token from various sources.

    Priority:
    1. Explicitly provided token
    2. Environment variable GITHUB_TOKEN / GH_TOKEN
    3. gh cli (`gh auth token`) - only if use_gh_cli=True

    Args:
        token: Explicitly provided token
        use_gh_cli: Whether to use gh cli credentials (requires user consent)
        environ: Mapping to read instead of os.environ

    Returns:
        GitHub token or None
    """
    if token:
        logger.debug("Using explicitly provided token")
        return token

    env = os.environ if environ is None else environ
    env_token = env.get("GITHUB_TOKEN") or env.get("GH_TOKEN")
    if env_token:
        logger.info("Using token from environment variable")
        return env_token

    if use_gh_cli:
        return get_token_from_gh_cli()

    return None


def create_retry_decorator(max_retries: int = DEFAULT_MAX_RETRIES):
    """Create a retry decorator with specified max attempts."""
    return retry(
        retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
        stop=stop_after_attempt(max(1, max_retries)),
        wait=wait_exponential(multiplier=1, min=DEFAULT_MIN_WAIT, max=DEFAULT_MAX_WAIT),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def contents_endpoint(owner: str, repo: str, path: str) -> str:
    """Build the contents endpoint for a repository-relative path."""
    return f"/repos/{owner}/{repo}/contents/{quote(path.lstrip('/'), safe='/')}"


class GitHubClient:
    """GitHub REST API client for the repository contents endpoint."""

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
        use_gh_cli: bool = False,
        max_retries: int = DEFAULT_MAX_RETRIES,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token
            base_url: Custom base URL (defaults to GitHub API)
            timeout: Request timeout in seconds
            use_gh_cli: Use gh cli credentials (requires user consent)
            max_retries: Total connection attempts per request (default: 1)
            transport: Optional httpx transport, used by tests
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.transport = transport
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "imgbed-github-client",
        }

        resolved_token = get_token(token, use_gh_cli=use_gh_cli)

        if resolved_token:
            self.headers["Authorization"] = f"Bearer {resolved_token}"
            logger.debug("GitHub client initialized with token")
        else:
            logger.warning("GitHub client initialized without token (rate limited)")
        logger.debug("GitHub client ready, base_url=%s, max_retries=%d", self.base_url, max_retries)

    def _request(
        self, method: str, endpoint: str, **kwargs: Any
    ) -> httpx.Response:
        """Make HTTP request to GitHub API, raising GitHubAPIError on non-2xx."""
        url = f"{self.base_url}{endpoint}"

        @create_retry_decorator(self.max_retries)
        def do_request() -> httpx.Response:
            logger.debug("Request: %s %s", method, url)
            with httpx.Client(
                timeout=self.timeout, headers=self.headers, transport=self.transport
            ) as client:
                response = client.request(method, url, **kwargs)
            logger.debug(
                "Response: %s %s (status=%d)",
                method,
                endpoint,
                response.status_code,
            )
            return response

        try:
            response = do_request()
        except httpx.TransportError as e:
            logger.error("Request failed: %s %s: %s", method, endpoint, e)
            raise GitHubError(f"Network error talking to GitHub: {e}") from e

        if response.is_error:
            error = GitHubAPIError.from_response(response)
            logger.debug("API error on %s %s: %s", method, endpoint, error)
            raise error
        return response

    def get_contents(
        self, owner: str, repo: str, path: str = "", ref: str = "main"
    ) -> GitHubContent | list[GitHubContent]:
        """
        Get repository contents.

        Args:
            owner: Repository owner
            repo: Repository name
            path: Path in repository (empty for root)
            ref: Branch/tag/commit (default: main)

        Returns:
            A single GitHubContent for a file, a list for a directory
        """
        endpoint = contents_endpoint(owner, repo, path)
        params = {"ref": ref} if ref else {}
        logger.info("Fetching contents: %s/%s path=%s ref=%s", owner, repo, path, ref)
        response = self._request("GET", endpoint, params=params)
        data = response.json()

        if isinstance(data, dict):
            logger.debug("Single file response: %s", data.get("name"))
            return GitHubContent(**data)

        logger.debug("Directory listing: %d items", len(data))
        return [GitHubContent(**item) for item in data]

    def get_sha(self, owner: str, repo: str, path: str, ref: str = "main") -> str:
        """
        Get the current blob SHA of a file.

        Raises:
            GitHubNotFoundError: the path does not exist on ``ref``
            GitHubError: the path is a directory
        """
        contents = self.get_contents(owner, repo, path, ref)
        if isinstance(contents, list):
            raise GitHubError(f"Path is a directory, not a file: {path}")
        logger.debug("SHA for %s: %s", path, contents.sha)
        return contents.sha

    def put_contents(
        self, owner: str, repo: str, path: str, request: UploadRequest
    ) -> ContentWriteResult:
        """
        Create or update a file.

        Args:
            owner: Repository owner
            repo: Repository name
            path: Target file path in repository
            request: Commit message, base64 content and branch

        Returns:
            ContentWriteResult describing the written file and commit
        """
        endpoint = contents_endpoint(owner, repo, path)
        logger.info("Writing contents: %s/%s path=%s branch=%s", owner, repo, path, request.branch)
        response = self._request("PUT", endpoint, json=request.to_body())
        return ContentWriteResult(**response.json())

    def delete_contents(
        self, owner: str, repo: str, path: str, request: DeleteRequest
    ) -> ContentWriteResult:
        """
        Delete a file.

        The API rejects the request when ``request.sha`` is not the file's
        current SHA.
        """
        endpoint = contents_endpoint(owner, repo, path)
        logger.info("Deleting contents: %s/%s path=%s branch=%s", owner, repo, path, request.branch)
        response = self._request("DELETE", endpoint, json=request.to_body())
        return ContentWriteResult(**response.json())
