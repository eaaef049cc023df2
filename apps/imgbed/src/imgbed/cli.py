"""CLI for imgbed."""

import functools
import logging
import os
from typing import NoReturn

import click
from dotenv import find_dotenv, load_dotenv
from ghcontents import GitHubClient, GitHubError
from ghcontents.client import DEFAULT_MAX_RETRIES

from .config import ClientConfig
from .deleter import ImageDeleter
from .exceptions import ImgbedError
from .lister import ImageLister
from .uploader import ImageUploader

logger = logging.getLogger(__name__)

UPLOAD_USAGE = """\
Usage:
  Single file:    imgbed-upload <file-path> [remote-path] [custom-filename]
  Multiple files: imgbed-upload <file1> <file2> <file3> ... [remote-path]

Examples:
  imgbed-upload ./my-image.png
  imgbed-upload ./my-image.png images/screenshots
  imgbed-upload ./my-image.png images custom-name.png
  imgbed-upload ./img1.png ./img2.png ./img3.png"""

DELETE_USAGE = """\
Usage:
  imgbed-delete <path-or-url> [path-or-url-2] ...

Examples:
  imgbed-delete image/blog/test.png
  imgbed-delete https://raw.githubusercontent.com/user/repo/main/image/blog/test.png"""


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


def common_options(func):
    """Options shared by every command."""

    @click.option("--use-gh-cli", is_flag=True, help="Use gh cli credentials")
    @click.option("--retries", "-r", type=int, default=DEFAULT_MAX_RETRIES, show_default=True, help="Connection attempts")
    @click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
    @functools.wraps(func)
    def wrapper(*args, use_gh_cli: bool, retries: int, verbose: int, **kwargs):
        setup_logging(verbose)
        return func(*args, settings=(use_gh_cli, retries), **kwargs)

    return wrapper


def build_config(use_gh_cli: bool) -> ClientConfig:
    """Load .env and read the repository configuration."""
    load_dotenv(find_dotenv(usecwd=True))
    try:
        return ClientConfig.from_env(use_gh_cli=use_gh_cli)
    except ImgbedError as e:
        fail(str(e))


def build_client(config: ClientConfig, retries: int) -> GitHubClient:
    return GitHubClient(token=config.token, max_retries=retries)


# ============ Upload ============

@click.command("upload")
@click.argument("items", nargs=-1)
@common_options
def upload(items: tuple[str, ...], settings: tuple[bool, int]) -> None:
    """Upload files: <file>... [remote-dir] [custom-name]."""
    if not items:
        click.echo(UPLOAD_USAGE)
        raise SystemExit(1)

    use_gh_cli, retries = settings
    config = build_config(use_gh_cli)
    uploader = ImageUploader(config, build_client(config, retries))

    file_paths = [arg for arg in items if os.path.exists(arg)]
    other_args = [arg for arg in items if not os.path.exists(arg)]
    if not file_paths:
        fail("no valid files found")

    if len(file_paths) == 1:
        remote_dir = other_args[0] if len(other_args) > 0 else None
        custom_name = other_args[1] if len(other_args) > 1 else None
        try:
            uploader.upload_one(file_paths[0], remote_dir, custom_name)
        except (ImgbedError, GitHubError, OSError) as e:
            fail(str(e))
        return

    remote_dir = other_args[0] if other_args else None
    click.echo(f"Uploading {len(file_paths)} files...")
    urls = uploader.upload_many(file_paths, remote_dir)

    click.echo("\nUpload results:")
    for index, url in enumerate(urls, start=1):
        click.echo(f"{index}. {url or 'failed'}")


# ============ List ============

@click.command("list")
@click.argument("path", required=False, default="")
@common_options
def list_(path: str, settings: tuple[bool, int]) -> None:
    """List a repository directory (default: root)."""
    use_gh_cli, retries = settings
    config = build_config(use_gh_cli)
    lister = ImageLister(config, build_client(config, retries))
    try:
        lister.list(path)
    except GitHubError as e:
        logger.debug("List failed: %s", e)
        raise SystemExit(1)


# ============ Delete ============

@click.command("delete")
@click.argument("inputs", nargs=-1)
@common_options
def delete(inputs: tuple[str, ...], settings: tuple[bool, int]) -> None:
    """Delete files by repository path or URL."""
    if not inputs:
        click.echo(DELETE_USAGE)
        raise SystemExit(1)

    use_gh_cli, retries = settings
    config = build_config(use_gh_cli)
    deleter = ImageDeleter(config, build_client(config, retries))
    deleter.delete_many(inputs)


# ============ CLI Group ============

@click.group()
def cli() -> None:
    """Upload, list and delete images stored in a GitHub repository."""


cli.add_command(upload)
cli.add_command(list_)
cli.add_command(delete)


if __name__ == "__main__":
    cli()
