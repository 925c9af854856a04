"""
GitHub REST client: repository metadata, recent commits, and the bolt.new
badge lookup in the app entry file.
"""

import base64
import binascii
import logging
import re
from typing import Iterable, List, Optional, Tuple

import requests

from hacksniff.errors import GitHubFetchError, InvalidRepositoryUrl
from hacksniff.models import Commit, RepositoryInfo

logger = logging.getLogger(__name__)

_REPO_URL = re.compile(r"github\.com[/:]([^/\s?#]+)/([^/\s?#]+)", re.IGNORECASE)


def parse_repo_url(repo_url: Optional[str]) -> Tuple[str, str]:
    """
    Extract (owner, name) from a GitHub repository URL.

    Handles formats:
    - https://github.com/user/repo
    - https://github.com/user/repo.git
    - https://github.com/user/repo/tree/main?tab=readme
    - git@github.com:user/repo.git
    """
    if not repo_url or not repo_url.strip():
        raise InvalidRepositoryUrl("Repository URL is required")

    match = _REPO_URL.search(repo_url.strip())
    if not match:
        raise InvalidRepositoryUrl("Invalid GitHub URL format")

    owner, name = match.group(1), match.group(2)
    if name.endswith(".git"):
        name = name[:-4]
    if not name:
        raise InvalidRepositoryUrl("Invalid GitHub URL format")
    return owner, name


class GitHubClient:
    """Client for the GitHub REST API."""

    BASE_URL = "https://api.github.com"
    TIMEOUT = 30
    PAGE_SIZE = 100

    def __init__(self, token: Optional[str] = None, session: Optional[requests.Session] = None):
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "User-Agent": "hacksniff/1.0",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def _get(self, path: str, params: Optional[dict] = None) -> requests.Response:
        url = f"{self.BASE_URL}{path}"
        logger.debug("GET %s %s", url, params or "")
        try:
            return self._session.get(url, params=params, timeout=self.TIMEOUT)
        except requests.RequestException as e:
            raise GitHubFetchError(f"Failed to fetch GitHub data: {e}")

    def get_repository(self, owner: str, name: str) -> RepositoryInfo:
        response = self._get(f"/repos/{owner}/{name}")
        if not response.ok:
            raise GitHubFetchError(
                f"GitHub API error ({response.status_code}): {response.text}",
                status=response.status_code,
            )
        try:
            return RepositoryInfo.from_github(response.json())
        except (KeyError, TypeError, ValueError) as e:
            raise GitHubFetchError(f"Unexpected repository payload for {owner}/{name}: {e}")

    def get_commits(self, owner: str, name: str, limit: int = 200) -> List[Commit]:
        """Most recent commits first, up to `limit`."""
        commits: List[Commit] = []
        page = 1
        while len(commits) < limit:
            per_page = min(self.PAGE_SIZE, limit - len(commits))
            response = self._get(
                f"/repos/{owner}/{name}/commits",
                params={"per_page": per_page, "page": page},
            )
            if response.status_code == 409:
                # Empty repository
                logger.debug("%s/%s has no commits", owner, name)
                break
            if not response.ok:
                raise GitHubFetchError(
                    f"GitHub commits API error ({response.status_code}): {response.text}",
                    status=response.status_code,
                )

            try:
                batch = [Commit.from_github(item) for item in response.json()]
            except (KeyError, TypeError, ValueError) as e:
                raise GitHubFetchError(f"Unexpected commit payload for {owner}/{name}: {e}")

            commits.extend(batch)
            if len(batch) < per_page:
                break
            page += 1
        return commits[:limit]

    def has_marker(self, owner: str, name: str, marker: str, candidates: Iterable[str]) -> bool:
        """
        Look for `marker` (case-insensitive) in the first candidate file that
        exists with content. No such file means False.
        """
        for path in candidates:
            try:
                response = self._get(f"/repos/{owner}/{name}/contents/{path}")
            except GitHubFetchError as e:
                logger.warning("Badge check failed for %s/%s: %s", owner, name, e.detail)
                return False
            if not response.ok:
                continue

            try:
                content = response.json().get("content")
                if not content:
                    continue
                decoded = base64.b64decode(content).decode("utf-8", errors="replace")
            except (AttributeError, ValueError, binascii.Error) as e:
                logger.warning("Could not decode %s in %s/%s: %s", path, owner, name, e)
                continue

            return marker.lower() in decoded.lower()
        return False
