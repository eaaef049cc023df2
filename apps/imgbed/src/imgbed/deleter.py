"""Delete files from the repository by path or URL."""

import logging
import posixpath
import re
from collections.abc import Iterable
from urllib.parse import unquote, urlsplit

import click
from ghcontents import DeleteRequest, GitHubClient, GitHubError, GitHubNotFoundError

from .config import ClientConfig

logger = logging.getLogger(__name__)


class ImageDeleter:
    """Remove repository files addressed by relative path or public URL."""

    def __init__(self, config: ClientConfig, client: GitHubClient | None = None):
        self.config = config
        self.client = client or GitHubClient(token=config.token)

        owner = re.escape(config.owner)
        repo = re.escape(config.repo)
        branch = re.escape(config.branch)
        self._raw_pattern = re.compile(rf"raw\.githubusercontent\.com/{owner}/{repo}/{branch}/(.+)")
        self._cdn_pattern = re.compile(rf"cdn\.jsdelivr\.net/gh/{owner}/{repo}(?:@{branch})?/(.+)")

    def parse_path(self, value: str) -> str:
        """
        Resolve a URL or path to a repository-relative path.

        Supports:
        1. raw URL: https://raw.githubusercontent.com/<owner>/<repo>/<branch>/path/to/file.png
        2. CDN URL: https://cdn.jsdelivr.net/gh/<owner>/<repo>@<branch>/path/to/file.png
        3. relative path: path/to/file.png (returned unchanged)

        Other URLs fall back to taking whatever follows ``<branch>/`` after the
        repository name, which is only a guess.
        """
        if not value.startswith("http"):
            return value

        # query strings (e.g. ?token=) and fragments are never part of the path
        parts = urlsplit(value)
        location = f"{parts.netloc}{parts.path}"

        match = self._raw_pattern.search(location) or self._cdn_pattern.search(location)
        if match:
            return unquote(match.group(1))

        repo_index = location.find(self.config.repo)
        if repo_index != -1:
            after_repo = location[repo_index + len(self.config.repo):]
            branch_index = after_repo.find(self.config.branch)
            if branch_index != -1:
                guessed = unquote(after_repo[branch_index + len(self.config.branch) + 1:])
                logger.warning("Guessed path %r from unrecognized URL %s", guessed, value)
                return guessed

        logger.warning("Could not resolve URL, using it as a path: %s", value)
        return value

    def delete_one(self, value: str) -> bool:
        """
        Delete one file. Errors are reported, never raised.

        Returns:
            True if the file was deleted
        """
        try:
            file_path = self.parse_path(value)
            click.echo(f"Processing: {value}")
            click.echo(f"Resolved path: {file_path}")

            try:
                sha = self.client.get_sha(
                    self.config.owner, self.config.repo, file_path, self.config.branch
                )
            except GitHubNotFoundError as e:
                raise GitHubNotFoundError(e.status_code, f"File not found: {file_path}") from e
            click.echo(f"SHA: {sha}")

            request = DeleteRequest(
                message=f"Delete image: {posixpath.basename(file_path)}",
                sha=sha,
                branch=self.config.branch,
            )
            self.client.delete_contents(self.config.owner, self.config.repo, file_path, request)
        except GitHubError as e:
            message = e.api_message if isinstance(e, GitHubNotFoundError) else str(e)
            logger.error("Delete failed for %s: %s", value, message)
            click.echo(f"Delete failed: {message}", err=True)
            return False
        except Exception as e:
            logger.exception("Unexpected error deleting %s", value)
            click.echo(f"Error: {e}", err=True)
            return False

        click.echo("Deleted!")
        return True

    def delete_many(self, values: Iterable[str]) -> None:
        """Delete files one at a time; a failure never stops the batch."""
        for value in values:
            self.delete_one(value)
            click.echo("---")
