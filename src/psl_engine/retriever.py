"""Sources for the raw Public Suffix List."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

import requests
import structlog

from .errors import RetrievalError

log = structlog.get_logger()

GITHUB_COMMITS_URL = "https://api.github.com/repos/publicsuffix/list/commits?path=public_suffix_list.dat"
GITHUB_LIST_URL = "https://raw.githubusercontent.com/publicsuffix/list/{release}/public_suffix_list.dat"


class ListRetriever(ABC):
    """Supplies list releases to ``RuleStore.update``.

    Implementations:
        - GitHubListRetriever: the official publicsuffix/list repository
        - StaticListRetriever: an in-memory list (mirrors, tests, offline use)
    """

    @abstractmethod
    def get_latest_release_tag(self) -> str:
        """Return the tag of the newest available release."""

    @abstractmethod
    def get_list(self, release: str) -> Iterable[str]:
        """Return the list text of ``release`` as lines."""


class GitHubListRetriever(ListRetriever):
    def __init__(
        self,
        session: requests.Session | None = None,
        commits_url: str = GITHUB_COMMITS_URL,
        list_url_template: str = GITHUB_LIST_URL,
        timeout: float = 30.0,
    ) -> None:
        self.session = session or requests.Session()
        self.commits_url = commits_url
        self.list_url_template = list_url_template
        self.timeout = timeout

    def _get(self, url: str) -> requests.Response:
        try:
            res = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise RetrievalError(f"error GET {url}: {e}") from e
        if res.status_code != 200:
            raise RetrievalError(f"error GET {url}: status {res.status_code}")
        return res

    def get_latest_release_tag(self) -> str:
        """The sha of the last commit touching public_suffix_list.dat."""
        res = self._get(self.commits_url)
        try:
            commits = res.json()
        except ValueError as e:
            raise RetrievalError(f"error decoding release info: {e}") from e

        sha = None
        if isinstance(commits, list) and commits and isinstance(commits[0], dict):
            sha = commits[0].get("sha")
        if not sha:
            raise RetrievalError("no release info found from github")

        log.info("latest_release_fetched", release=sha)
        return sha

    def get_list(self, release: str) -> list[str]:
        url = self.list_url_template.format(release=release)
        res = self._get(url)
        res.encoding = "utf-8"
        lines = res.text.splitlines()
        log.info("list_fetched", release=release, lines=len(lines))
        return lines


class StaticListRetriever(ListRetriever):
    def __init__(self, release: str, text: str = "") -> None:
        self.release = release
        self.text = text

    def get_latest_release_tag(self) -> str:
        return self.release

    def get_list(self, release: str) -> list[str]:
        return self.text.splitlines()
