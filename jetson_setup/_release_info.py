# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
from abc import ABCMeta
from abc import abstractmethod
from typing import Optional

import requests


class ReleaseInfoFetcher(metaclass=ABCMeta):

    @abstractmethod
    def latest_tag(self, repo: str) -> str:
        """Return tag name of the latest release of "owner/name" repo."""
        pass


class GitHubReleases(ReleaseInfoFetcher):

    def __init__(
            self,
            api_url: str = 'https://api.github.com',
            timeout_sec: float = 30,
            session: Optional[requests.Session] = None,
            ):
        self._api_url = api_url.rstrip('/')
        self._timeout_sec = timeout_sec
        self._session = session or requests.Session()

    def __repr__(self):
        return f'{GitHubReleases.__name__}({self._api_url!r})'

    def latest_tag(self, repo):
        url = f'{self._api_url}/repos/{repo}/releases/latest'
        _logger.debug("Getting %s", url)
        try:
            response = self._session.get(
                url,
                headers={'Accept': 'application/vnd.github+json'},
                timeout=self._timeout_sec,
                )
        except requests.RequestException as e:
            raise ReleaseInfoUnavailable(f"Failed to get {url}: {e}")
        if response.status_code != 200:
            raise ReleaseInfoUnavailable(
                f"Failed to get {url}: {response.status_code} {response.reason}")
        try:
            tag_name = response.json()['tag_name']
        except (ValueError, KeyError, TypeError):
            raise ReleaseInfoUnavailable(f"No tag_name in response from {url}")
        _logger.info("Latest release of %s: %s", repo, tag_name)
        return tag_name


class ReleaseInfoUnavailable(Exception):
    pass


_logger = logging.getLogger(__name__)
