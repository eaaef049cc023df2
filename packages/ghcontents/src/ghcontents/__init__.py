"""GitHub contents API client utilities."""

from .client import GitHubClient, get_token
from .exceptions import GitHubAPIError, GitHubError, GitHubNotFoundError
from .models import (
    CommitInfo,
    ContentWriteResult,
    DeleteRequest,
    GitHubContent,
    UploadRequest,
)

__all__ = [
    "GitHubClient",
    "GitHubContent",
    "GitHubError",
    "GitHubAPIError",
    "GitHubNotFoundError",
    "CommitInfo",
    "ContentWriteResult",
    "UploadRequest",
    "DeleteRequest",
    "get_token",
]
