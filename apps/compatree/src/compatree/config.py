"""Compatree configuration."""

import logging
import os
import re
from typing import Callable

from ghcontents import contents_url, get_token
from pydantic import BaseModel, ConfigDict, Field

from .labels import DEFAULT_LABEL_PATTERN

logger = logging.getLogger(__name__)

OWNER = "mdn"
REPO = "browser-compat-data"
BRANCH = "master"

DOCS_HOST = "https://developer.mozilla.org"
SEARCH_URL = f"{DOCS_HOST}/search?q="

ROOT_URL_ENV = "COMPATREE_ROOT_URL"
FLAT_DATA_URL_ENV = "COMPATREE_FLAT_DATA_URL"


class EnvTokenProvider:
    """Token from an explicit value, the environment, or the gh cli."""

    def __init__(self, token: str | None = None, use_gh_cli: bool = False):
        self.token = token
        self.use_gh_cli = use_gh_cli

    def __call__(self, key: str) -> str | None:
        return get_token(self.token, env_var=key, use_gh_cli=self.use_gh_cli)


class StaticTokenProvider:
    """Always returns the same token."""

    def __init__(self, token: str | None = None):
        self.token = token

    def __call__(self, key: str) -> str | None:
        return self.token


class UrlNormalizer:
    """Rewrites documentation links into their locale-independent form.

    ``https://developer.mozilla.org/en-US/docs/Web/API`` becomes
    ``https://developer.mozilla.org/docs/Web/API``; relative links are
    resolved against the docs host.
    """

    LOCALE = re.compile(r"/[a-z]{2}(?:-[A-Za-z]{2,4})?/docs/")

    def __init__(self, host: str = DOCS_HOST):
        self.host = host.rstrip("/")

    def __call__(self, url: str) -> str:
        if url.startswith("/"):
            url = self.host + url
        return self.LOCALE.sub("/docs/", url, count=1)


class Config(BaseModel):
    """Static endpoints and lookups injected into the downloader."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    root_url: str
    flat_data_url: str | None = None
    search_url: str = SEARCH_URL
    label_pattern: str = DEFAULT_LABEL_PATTERN
    url_normalizer: Callable[[str], str] = Field(default_factory=UrlNormalizer)
    higher_level_label: str = ".."
    access_property: str = "COMPATREE_GITHUB_TOKEN"
    cache_key: str = "compatree.tree"
    token_provider: Callable[[str], str | None] = Field(default_factory=StaticTokenProvider)

    def token(self) -> str | None:
        """Current personal access token, if any."""
        return self.token_provider(self.access_property)

    def content_url(self, path: str) -> str:
        """Contents API URL of a path in the data repository."""
        return contents_url(OWNER, REPO, path, BRANCH)


def app_config(token: str | None = None, use_gh_cli: bool = False) -> Config:
    """Default configuration for MDN browser-compat-data, with env overrides."""
    root_url = os.environ.get(ROOT_URL_ENV) or contents_url(OWNER, REPO, "", BRANCH)
    flat_data_url = os.environ.get(FLAT_DATA_URL_ENV)
    logger.debug("Config root_url=%s flat_data_url=%s", root_url, flat_data_url)
    return Config(
        root_url=root_url,
        flat_data_url=flat_data_url,
        token_provider=EnvTokenProvider(token, use_gh_cli=use_gh_cli),
    )
