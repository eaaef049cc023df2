"""Upload local files to the repository."""

import logging
import os
from collections.abc import Sequence

import click
from ghcontents import GitHubAPIError, GitHubClient, UploadRequest

from .config import ClientConfig
from .exceptions import LocalFileNotFoundError
from .naming import encode_file, generate_file_name

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_DIR = "images"


class ImageUploader:
    """Create files in the repository from local files."""

    def __init__(self, config: ClientConfig, client: GitHubClient | None = None):
        """
        Initialize uploader.

        Args:
            config: Target repository and credentials
            client: GitHub client (built from config if not provided)
        """
        self.config = config
        self.client = client or GitHubClient(token=config.token)

    def remote_path(self, local_path: str, remote_dir: str | None = None, custom_name: str | None = None) -> str:
        """Compute the repository-relative target path for a local file."""
        name = custom_name or generate_file_name(os.path.basename(local_path))
        directory = (remote_dir or DEFAULT_REMOTE_DIR).rstrip("/")
        return f"{directory}/{name}"

    def upload_one(
        self,
        local_path: str,
        remote_dir: str | None = None,
        custom_name: str | None = None,
    ) -> str:
        """
        Upload one file.

        Args:
            local_path: Local file to upload
            remote_dir: Repository directory (default: images)
            custom_name: Remote file name used verbatim instead of a generated one

        Returns:
            Download URL of the uploaded file

        Raises:
            LocalFileNotFoundError: local_path does not exist
            GitHubAPIError: the API rejected the upload
        """
        if not os.path.isfile(local_path):
            raise LocalFileNotFoundError(local_path)

        target = self.remote_path(local_path, remote_dir, custom_name)
        name = target.rsplit("/", 1)[-1]
        request = UploadRequest(
            message=f"Upload image: {name}",
            content=encode_file(local_path),
            branch=self.config.branch,
        )

        click.echo(f"Uploading: {local_path}")
        click.echo(f"Target path: {target}")
        try:
            result = self.client.put_contents(self.config.owner, self.config.repo, target, request)
        except GitHubAPIError as e:
            logger.error("Upload failed for %s: %s", local_path, e)
            click.echo(f"Upload failed: {e.api_message}", err=True)
            raise

        download_url = result.content.download_url if result.content else None
        click.echo("Upload succeeded!")
        click.echo(f"URL: {download_url}")
        logger.debug("Uploaded %s -> %s (commit %s)", local_path, target, result.commit.sha)
        return download_url or ""

    def upload_many(self, local_paths: Sequence[str], remote_dir: str | None = None) -> list[str]:
        """
        Upload files one at a time.

        A failed file is logged and recorded as an empty string at its index,
        so the result always lines up with ``local_paths``.
        """
        results: list[str] = []
        for local_path in local_paths:
            try:
                results.append(self.upload_one(local_path, remote_dir))
            except Exception as e:
                logger.error("Failed %s: %s", local_path, e)
                click.echo(f"Upload failed {local_path}: {e}", err=True)
                results.append("")
        return results
