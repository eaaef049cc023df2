"""Shared fixtures: an in-memory fake of the GitHub contents API."""

import base64
import hashlib
import json
import posixpath

import httpx
import pytest

from ghcontents import GitHubClient
from imgbed import ClientConfig

OWNER = "acme"
REPO = "pics"
BRANCH = "main"
TOKEN = "test-token"


class FakeContentsAPI:
    """Serve the contents endpoint for one repository from a dict."""

    def __init__(self, owner: str = OWNER, repo: str = REPO, branch: str = BRANCH):
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.files: dict[str, bytes] = {}
        self.empty_dirs: set[str] = set()
        self.errors: list[tuple[str, str, int, str]] = []
        self.requests: list[httpx.Request] = []
        self.commits = 0

    # ---- setup helpers ----

    def add_file(self, path: str, data: bytes = b"data") -> None:
        self.files[path] = data

    def fail(self, method: str, path_fragment: str, status: int, message: str = "Boom") -> None:
        """Answer matching requests with an error status."""
        self.errors.append((method, path_fragment, status, message))

    def sha_of(self, path: str) -> str:
        return hashlib.sha1(self.files[path]).hexdigest()

    # ---- request handling ----

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        prefix = f"/repos/{self.owner}/{self.repo}/contents/"
        if not request.url.path.startswith(prefix):
            return httpx.Response(404, json={"message": "Not Found"})
        path = request.url.path[len(prefix):].strip("/")

        for method, fragment, status, message in self.errors:
            if method == request.method and fragment in path:
                return httpx.Response(status, json={"message": message})

        if request.method == "GET":
            return self._get(path)
        if request.method == "PUT":
            return self._put(path, json.loads(request.content))
        if request.method == "DELETE":
            return self._delete(path, json.loads(request.content))
        return httpx.Response(405, json={"message": "Method Not Allowed"})

    def _record(self, path: str) -> dict:
        base = f"https://api.github.com/repos/{self.owner}/{self.repo}/contents/{path}"
        if path in self.files:
            return {
                "name": posixpath.basename(path),
                "path": path,
                "sha": self.sha_of(path),
                "size": len(self.files[path]),
                "url": f"{base}?ref={self.branch}",
                "html_url": f"https://github.com/{self.owner}/{self.repo}/blob/{self.branch}/{path}",
                "git_url": f"https://api.github.com/repos/{self.owner}/{self.repo}/git/blobs/{self.sha_of(path)}",
                "download_url": f"https://raw.githubusercontent.com/{self.owner}/{self.repo}/{self.branch}/{path}",
                "type": "file",
            }
        return {
            "name": posixpath.basename(path),
            "path": path,
            "sha": hashlib.sha1(path.encode()).hexdigest(),
            "size": 0,
            "url": f"{base}?ref={self.branch}",
            "html_url": f"https://github.com/{self.owner}/{self.repo}/tree/{self.branch}/{path}",
            "git_url": f"https://api.github.com/repos/{self.owner}/{self.repo}/git/trees/x",
            "download_url": None,
            "type": "dir",
        }

    def _children(self, directory: str) -> list[str]:
        prefix = f"{directory}/" if directory else ""
        children: set[str] = set()
        for path in list(self.files) + list(self.empty_dirs):
            if path.startswith(prefix) and path != directory:
                head = path[len(prefix):].split("/", 1)[0]
                children.add(prefix + head)
        return sorted(children)

    def _get(self, path: str) -> httpx.Response:
        if path in self.files:
            record = self._record(path)
            record["content"] = base64.b64encode(self.files[path]).decode()
            record["encoding"] = "base64"
            return httpx.Response(200, json=record)
        children = self._children(path)
        if children or path in self.empty_dirs or path == "":
            return httpx.Response(200, json=[self._record(child) for child in children])
        return httpx.Response(404, json={"message": "Not Found"})

    def _commit(self, message: str) -> dict:
        self.commits += 1
        return {"sha": f"commit{self.commits}", "message": message}

    def _put(self, path: str, body: dict) -> httpx.Response:
        if path in self.files and body.get("sha") != self.sha_of(path):
            return httpx.Response(422, json={"message": 'Invalid request.\n\n"sha" wasn\'t supplied.'})
        created = path not in self.files
        self.files[path] = base64.b64decode(body["content"])
        return httpx.Response(
            201 if created else 200,
            json={"content": self._record(path), "commit": self._commit(body["message"])},
        )

    def _delete(self, path: str, body: dict) -> httpx.Response:
        if path not in self.files:
            return httpx.Response(404, json={"message": "Not Found"})
        if body.get("sha") != self.sha_of(path):
            return httpx.Response(409, json={"message": f"{path} does not match {body.get('sha')}"})
        del self.files[path]
        return httpx.Response(200, json={"content": None, "commit": self._commit(body["message"])})

    def last(self, method: str) -> httpx.Request:
        return [r for r in self.requests if r.method == method][-1]


@pytest.fixture
def api():
    """Fake contents API for acme/pics."""
    return FakeContentsAPI()


@pytest.fixture
def client(api):
    """GitHub client wired to the fake API."""
    return GitHubClient(token=TOKEN, transport=httpx.MockTransport(api.handler))


@pytest.fixture
def config():
    """Config for acme/pics on main."""
    return ClientConfig(owner=OWNER, repo=REPO, token=TOKEN, branch=BRANCH)


@pytest.fixture
def github_env(monkeypatch):
    """Repository settings in the process environment."""
    monkeypatch.delenv("GH_TOKEN", raising=False)
    monkeypatch.setenv("GITHUB_OWNER", OWNER)
    monkeypatch.setenv("GITHUB_REPO", REPO)
    monkeypatch.setenv("GITHUB_TOKEN", TOKEN)
    monkeypatch.setenv("GITHUB_BRANCH", BRANCH)
