"""
Shared pytest fixtures for the release notes tests.

The GitHub API is replaced by a FakeSession that answers from a route table
keyed by (method, url), so no test touches the network.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

import pytest
from requests.structures import CaseInsensitiveDict

from utils.github_client import GithubClient

API = "https://api.github.com"
OWNER = "desktop"
REPO = "dugite-native"


class FakeResponse:
    """The subset of requests.Response the client reads."""

    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = None,
        text: str = "",
        headers: Optional[Dict[str, str]] = None,
        reason: str = "OK",
    ):
        self.status_code = status_code
        self._json = json_data
        self.text = text
        self.headers = CaseInsensitiveDict(headers or {})
        self.reason = reason

    def json(self) -> Any:
        return self._json


Route = Union[FakeResponse, List[FakeResponse]]


class FakeSession:
    """Stands in for requests.Session; records every call."""

    def __init__(self, routes: Optional[Dict[Tuple[str, str], Route]] = None):
        self.routes: Dict[Tuple[str, str], Route] = dict(routes or {})
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def _respond(self, method: str, url: str) -> FakeResponse:
        route = self.routes.get((method, url))
        if route is None:
            raise AssertionError(f"Unexpected request: {method} {url}")
        if isinstance(route, list):
            return route.pop(0)
        return route

    def get(self, url, params=None, headers=None, allow_redirects=True, timeout=None):
        self.calls.append({
            "method": "GET", "url": url, "params": params,
            "headers": headers, "allow_redirects": allow_redirects,
        })
        return self._respond("GET", url)

    def patch(self, url, json=None, timeout=None):
        self.calls.append({"method": "PATCH", "url": url, "json": json})
        return self._respond("PATCH", url)

    def close(self):
        self.closed = True

    def urls(self, method: Optional[str] = None) -> List[str]:
        return [c["url"] for c in self.calls if method is None or c["method"] == method]


def make_client(session: FakeSession) -> GithubClient:
    return GithubClient(
        token="secret-token",
        base_url=API,
        timeout_s=5,
        user_agent="dugite-native",
        session=session,
    )


def release_json(release_id: int, tag: str, draft: bool, **extra) -> Dict[str, Any]:
    data = {"id": release_id, "tag_name": tag, "draft": draft, "prerelease": False}
    data.update(extra)
    return data


def asset_json(asset_id: int, name: str) -> Dict[str, Any]:
    return {
        "id": asset_id,
        "name": name,
        "url": f"{API}/repos/{OWNER}/{REPO}/releases/assets/{asset_id}",
        "browser_download_url": f"https://github.com/{OWNER}/{REPO}/releases/download/{name}",
    }


def merge_commit(sha: str, number: int, branch: str) -> Dict[str, Any]:
    return {"sha": sha, "commit": {"message": f"Merge pull request #{number} from {branch}\n\nDetails"}}


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def client(fake_session: FakeSession) -> GithubClient:
    return make_client(fake_session)


@pytest.fixture()
def redirect_target(monkeypatch):
    """Patch the unauthenticated redirect hop and record what it was sent."""
    import utils.github_client as github_client

    sent: List[Dict[str, Any]] = []
    bodies: Dict[str, FakeResponse] = {}

    def fake_get(url, headers=None, timeout=None, **_kw):
        sent.append({"url": url, "headers": dict(headers or {})})
        return bodies[url]

    monkeypatch.setattr(github_client.requests, "get", fake_get)
    return sent, bodies


@pytest.fixture()
def draft_release_routes(redirect_target) -> Dict[Tuple[str, str], Route]:
    """Routes for a complete v2.30.0 draft with two merged pull requests."""
    _sent, bodies = redirect_target
    base = f"{API}/repos/{OWNER}/{REPO}"

    assets = [
        asset_json(1, "git-2.30.0.tar.gz.sha256"),
        asset_json(2, "git-2.30.0-arm.tar.gz.sha256"),
    ]
    assets += [asset_json(100 + i, f"git-2.30.0-target{i}.tar.gz") for i in range(14)]

    storage = "https://objects.githubusercontent.com/release-assets"
    bodies[f"{storage}/1"] = FakeResponse(200, text="abc123...\n")
    bodies[f"{storage}/2"] = FakeResponse(200, text="  def456...\n")

    return {
        ("GET", f"{API}/user"): FakeResponse(200, {"login": "octocat"}, headers={"X-OAuth-Scopes": "public_repo, read:org"}),
        ("GET", f"{base}/releases"): FakeResponse(200, [release_json(42, "v2.30.0", True)]),
        ("GET", f"{base}/releases/42/assets"): FakeResponse(200, assets),
        ("GET", f"{base}/releases/assets/1"): FakeResponse(302, headers={"Location": f"{storage}/1"}, reason="Found"),
        ("GET", f"{base}/releases/assets/2"): FakeResponse(302, headers={"Location": f"{storage}/2"}, reason="Found"),
        ("GET", f"{base}/releases/latest"): FakeResponse(200, release_json(41, "v2.29.0", False)),
        ("GET", f"{base}/compare/v2.29.0...v2.30.0"): FakeResponse(200, {"commits": [
            {"sha": "aaaaaaaa1", "commit": {"message": "Bump version"}},
            merge_commit("bbbbbbbb2", 10, "alice/fix-build"),
            merge_commit("cccccccc3", 11, "bob/update-deps"),
        ]}),
        ("GET", f"{base}/pulls/10"): FakeResponse(200, {"number": 10, "title": "Fix build", "user": {"login": "alice"}}),
        ("GET", f"{base}/pulls/11"): FakeResponse(200, {"number": 11, "title": "Update deps", "user": {"login": "bob"}}),
        ("PATCH", f"{base}/releases/42"): FakeResponse(200, release_json(
            42, "v2.30.0", True, html_url=f"https://github.com/{OWNER}/{REPO}/releases/tag/untagged-1",
        )),
    }
