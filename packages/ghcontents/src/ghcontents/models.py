"""GitHub contents API data models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class GitHubContent(BaseModel):
    """GitHub content item (file or directory)."""

    model_config = ConfigDict(extra="ignore")

    name: str
    path: str
    sha: str
    size: int = 0
    url: str | None = None
    html_url: str | None = None
    git_url: str | None = None
    download_url: str | None = None  # None for directories
    type: Literal["file", "dir", "symlink", "submodule"]
    content: str | None = None  # Base64 encoded content for files
    encoding: str | None = None  # Usually "base64" for files

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"


class CommitInfo(BaseModel):
    """Commit created by a contents write."""

    model_config = ConfigDict(extra="ignore")

    sha: str
    message: str | None = None
    html_url: str | None = None


class ContentWriteResult(BaseModel):
    """Response of a create, update or delete on the contents endpoint."""

    model_config = ConfigDict(extra="ignore")

    content: GitHubContent | None = None  # null after a delete
    commit: CommitInfo


class UploadRequest(BaseModel):
    """Body of a create-or-update request."""

    message: str
    content: str  # base64
    branch: str
    sha: str | None = None  # required by the API only when overwriting

    def to_body(self) -> dict:
        return self.model_dump(exclude_none=True)


class DeleteRequest(BaseModel):
    """Body of a delete request."""

    message: str
    sha: str
    branch: str

    def to_body(self) -> dict:
        return self.model_dump()
