"""List repository directories."""

import logging
from dataclasses import dataclass, field

import click
from ghcontents import GitHubClient, GitHubContent, GitHubError, GitHubNotFoundError

from .config import ClientConfig
from .naming import format_size

logger = logging.getLogger(__name__)


@dataclass
class Listing:
    """Result of listing a path: a single file or a directory's entries."""

    path: str
    file: GitHubContent | None = None
    directories: list[GitHubContent] = field(default_factory=list)
    files: list[GitHubContent] = field(default_factory=list)

    @property
    def is_file(self) -> bool:
        return self.file is not None

    @property
    def is_empty(self) -> bool:
        return not self.is_file and not self.directories and not self.files


class ImageLister:
    """Show what is stored under a repository path."""

    def __init__(self, config: ClientConfig, client: GitHubClient | None = None):
        self.config = config
        self.client = client or GitHubClient(token=config.token)

    def list(self, directory_path: str = "") -> Listing:
        """
        Print the contents of a directory, or a single file's metadata.

        Raises:
            GitHubNotFoundError: the path does not exist
            GitHubError: any other API failure
        """
        clean_path = directory_path[1:] if directory_path.startswith("/") else directory_path
        click.echo(f"Querying directory: {clean_path or '(root)'}...")

        try:
            contents = self.client.get_contents(
                self.config.owner, self.config.repo, clean_path, self.config.branch
            )
        except GitHubNotFoundError:
            logger.error("Path not found: %s", directory_path)
            click.echo(f"Path not found: {directory_path}", err=True)
            raise
        except GitHubError as e:
            logger.error("Listing %s failed: %s", directory_path, e)
            click.echo(f"API error: {e}", err=True)
            raise

        if not isinstance(contents, list):
            self._print_file(contents)
            return Listing(path=clean_path, file=contents)

        listing = Listing(
            path=clean_path,
            directories=[item for item in contents if item.is_dir],
            files=[item for item in contents if item.type == "file"],
        )
        self._print_listing(listing)
        return listing

    def _print_file(self, item: GitHubContent) -> None:
        click.echo("\nThis is a file:")
        click.echo(f"Name: {item.name}")
        click.echo(f"Size: {format_size(item.size)}")
        click.echo(f"URL: {item.download_url}")

    def _print_listing(self, listing: Listing) -> None:
        click.echo(f"\nFound {len(listing.files)} files, {len(listing.directories)} directories:\n")

        if listing.directories:
            click.echo("Directories:")
            for item in listing.directories:
                click.echo(f"  - {item.name}/")
            click.echo()

        if listing.files:
            click.echo("Files:")
            for item in listing.files:
                click.echo(f"  - {item.name} ({format_size(item.size)})")
                click.echo(f"    {item.download_url}")

        if listing.is_empty:
            click.echo("(empty directory)")
