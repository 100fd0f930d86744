#!/usr/bin/env python3
"""GitHub REST API client for inspecting and updating draft releases.

This module wraps a single authenticated requests session and exposes the
handful of endpoints the release notes agent needs: the token identity,
releases and their assets, commit statuses, commit comparisons, pull
requests, and the release update call. Requests are never retried; a run
that fails is simply re-run later.
"""

import logging
from typing import Dict, List, Any, Optional

import requests

from configs.config import Config
from .release_models import (
    AuthenticatedUser, Release, ReleaseAsset, CommitStatus, CommitInfo, PullRequestSummary
)

# Set up logging
logger = logging.getLogger(__name__)


class GithubAuthError(Exception):
    """Raised when GitHub API authentication fails."""
    pass


class GithubApiError(Exception):
    """Raised when GitHub API operations fail with a typed code for friendly handling."""
    def __init__(self, message: str, code: str = "UNKNOWN", status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class AssetDownloadError(GithubApiError):
    """Raised when a release asset cannot be downloaded."""
    pass


def _code_for_status(status_code: int) -> str:
    if status_code in (401, 403):
        return "UNAUTHORIZED"
    if status_code == 404:
        return "NOT_FOUND"
    if status_code == 429:
        return "RATE_LIMIT"
    if status_code >= 500:
        return "NETWORK"
    return "UNKNOWN"


def parse_oauth_scopes(header: Optional[str]) -> Optional[List[str]]:
    """Split an X-OAuth-Scopes header into scope names.

    Returns None when the header is absent or empty, e.g. for fine-grained
    tokens; such tokens are not checked against a required scope.
    """
    scopes = [scope.strip() for scope in (header or "").split(",") if scope.strip()]
    return scopes or None


class GithubClient:
    """Thin client over the GitHub REST API."""

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout_s: Optional[int] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize GitHub client.

        Args:
            token: GitHub access token (defaults to GITHUB_ACCESS_TOKEN)
            base_url: REST API base URL (defaults to Config.GITHUB_API_URL)
            timeout_s: Request timeout in seconds (defaults to Config.HTTP_TIMEOUT_S)
            user_agent: User-Agent sent with every request
            session: Optional pre-built session, mainly for tests

        Raises:
            GithubAuthError: If no token is available
        """
        github_config = Config.get_github_config()
        self.token = token or github_config["token"]
        self.base_url = (base_url or github_config["base_url"]).rstrip('/')
        self.timeout_s = timeout_s if timeout_s is not None else github_config["timeout_s"]
        self.user_agent = user_agent or github_config["user_agent"]

        if not self.token:
            raise GithubAuthError("GitHub token is required (GITHUB_ACCESS_TOKEN env var)")

        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': self.user_agent
        })

        logger.info("GitHub client initialized")

    # -------- HTTP helpers --------
    def _get(self, path: str, *, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout_s)
        except requests.Timeout as e:
            raise GithubApiError(f"Timeout while calling GET {path}", code="TIMEOUT") from e
        except requests.RequestException as e:
            raise GithubApiError(f"Failed to call GET {path}: {e}", code="NETWORK") from e
        self._raise_for_status(response, "GET", path)
        return response

    def _patch(self, path: str, payload: Dict[str, Any]) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.patch(url, json=payload, timeout=self.timeout_s)
        except requests.Timeout as e:
            raise GithubApiError(f"Timeout while calling PATCH {path}", code="TIMEOUT") from e
        except requests.RequestException as e:
            raise GithubApiError(f"Failed to call PATCH {path}: {e}", code="NETWORK") from e
        self._raise_for_status(response, "PATCH", path)
        return response

    @staticmethod
    def _raise_for_status(response: requests.Response, method: str, path: str) -> None:
        sc = response.status_code
        if sc == 401:
            raise GithubAuthError("Invalid GitHub token or insufficient permissions")
        if sc == 404:
            raise GithubApiError(f"{method} {path} not found", code="NOT_FOUND", status_code=sc)
        if not 200 <= sc < 300:
            raise GithubApiError(f"GitHub API error: HTTP {sc} for {method} {path}", code=_code_for_status(sc), status_code=sc)

    # -------- Identity --------
    def get_authenticated_user(self) -> AuthenticatedUser:
        """Fetch the token owner and its OAuth scopes."""
        response = self._get("/user")
        data = response.json()
        scopes = parse_oauth_scopes(response.headers.get("X-OAuth-Scopes"))
        logger.debug(f"✓ Authenticated as {data.get('login')} with scopes {scopes}")
        return AuthenticatedUser(login=data.get("login", "unknown"), scopes=scopes)

    # -------- Releases --------
    def list_releases(self, owner: str, repo: str, per_page: int = 1, page: int = 1) -> List[Release]:
        """List releases, newest first."""
        logger.info(f"Fetching releases: {owner}/{repo} (page {page}, per_page {per_page})")
        response = self._get(f"/repos/{owner}/{repo}/releases", params={'per_page': per_page, 'page': page})
        return [Release.model_validate(item) for item in response.json()]

    def get_latest_release(self, owner: str, repo: str) -> Release:
        """Fetch the most recent published (non-draft, non-prerelease) release."""
        logger.info(f"Fetching latest published release: {owner}/{repo}")
        response = self._get(f"/repos/{owner}/{repo}/releases/latest")
        return Release.model_validate(response.json())

    def list_release_assets(self, owner: str, repo: str, release_id: int) -> List[ReleaseAsset]:
        """Fetch every asset attached to a release."""
        logger.info(f"Fetching assets for release {release_id}: {owner}/{repo}")

        all_assets: List[ReleaseAsset] = []
        page = 1
        per_page = 100

        while True:
            params = {'page': page, 'per_page': per_page}
            response = self._get(f"/repos/{owner}/{repo}/releases/{release_id}/assets", params=params)
            page_assets = response.json()
            all_assets.extend(ReleaseAsset.model_validate(item) for item in page_assets)
            if len(page_assets) < per_page:
                break
            page += 1

        logger.debug(f"✓ Retrieved {len(all_assets)} assets for release {release_id}")
        return all_assets

    def update_release(
        self,
        owner: str,
        repo: str,
        release_id: int,
        *,
        tag_name: str,
        name: str,
        body: str,
    ) -> Release:
        """Update a release's tag, title and body in place."""
        logger.info(f"Updating release {release_id}: {owner}/{repo}")
        payload = {"tag_name": tag_name, "name": name, "body": body}
        response = self._patch(f"/repos/{owner}/{repo}/releases/{release_id}", payload)
        return Release.model_validate(response.json())

    def download_asset_text(self, url: str) -> str:
        """Download a release asset and return its trimmed text content.

        The API answers with a 302 to a storage host. Exactly one redirect is
        followed, without the Authorization header so the token never leaves
        GitHub.

        Raises:
            AssetDownloadError: If the response is neither a redirect nor a success
        """
        headers = {'Accept': 'application/octet-stream'}
        try:
            response = self.session.get(url, headers=headers, allow_redirects=False, timeout=self.timeout_s)
            location = response.headers.get('Location')
            if response.status_code == 302 and location:
                logger.debug(f"Following asset redirect for {url}")
                response = requests.get(location, headers={'User-Agent': self.user_agent}, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise AssetDownloadError(f"Failed to download {url}: {e}", code="NETWORK") from e

        sc = response.status_code
        if not 200 <= sc < 300:
            raise AssetDownloadError(
                f"Server responded with {sc}: {response.reason}",
                code=_code_for_status(sc),
                status_code=sc,
            )
        return response.text.strip()

    # -------- Commits and pull requests --------
    def list_commit_statuses(self, owner: str, repo: str, ref: str) -> List[CommitStatus]:
        """List commit statuses reported for a ref, newest first."""
        logger.info(f"Fetching commit statuses: {owner}/{repo}@{ref}")
        response = self._get(f"/repos/{owner}/{repo}/commits/{ref}/statuses")
        return [CommitStatus.model_validate(item) for item in response.json()]

    def compare_commits(self, owner: str, repo: str, base: str, head: str) -> List[CommitInfo]:
        """List the commits reachable from head but not from base."""
        logger.info(f"Comparing commits: {owner}/{repo} {base}...{head}")
        response = self._get(f"/repos/{owner}/{repo}/compare/{base}...{head}")
        commits = []
        for item in response.json().get("commits", []):
            commits.append(CommitInfo(
                sha=item.get("sha", ""),
                message=(item.get("commit") or {}).get("message", ""),
            ))
        logger.debug(f"✓ Retrieved {len(commits)} commits between {base} and {head}")
        return commits

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestSummary:
        """Fetch a pull request's title, number and author."""
        logger.info(f"Fetching PR metadata: {owner}/{repo}#{number}")
        response = self._get(f"/repos/{owner}/{repo}/pulls/{number}")
        return PullRequestSummary.model_validate(response.json())

    def close(self) -> None:
        """Close the GitHub client session."""
        if self.session:
            self.session.close()
            logger.debug("GitHub client session closed")
