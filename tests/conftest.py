"""Shared fixtures: a fake GitHub API served through httpx.MockTransport."""

import json
from typing import Any

import httpx
import pytest
from compatree import Config, DataDownloader, StaticTokenProvider
from ghcontents import ContentsClient, contents_url

CONTENTS = "https://api.github.com/repos/mdn/browser-compat-data/contents"
ROOT_URL = contents_url("mdn", "browser-compat-data")
FLAT_DATA_URL = "https://bcd.example.test/api/items"


class FakeApi:
    """Routes GET requests by full URL and records them."""

    def __init__(self):
        self.routes: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, body: Any = None, status: int = 200) -> None:
        self.routes[url] = (status, body)

    def fail(self, url: str, error: Exception) -> None:
        self.routes[url] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, request=request)
        if isinstance(route, Exception):
            raise route
        status, body = route
        content = b"" if body is None else json.dumps(body).encode("utf-8")
        return httpx.Response(status, content=content, request=request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_downloader(api: FakeApi, token: str | None = None) -> DataDownloader:
    config = Config(
        root_url=ROOT_URL,
        flat_data_url=FLAT_DATA_URL,
        token_provider=StaticTokenProvider(token),
    )
    client = ContentsClient(token_lookup=config.token, transport=api.transport)
    return DataDownloader(config, client=client)


def listing_entry(path: str, type_: str = "dir") -> dict[str, Any]:
    """Directory listing entry as the contents API returns it."""
    name = path.rsplit("/", 1)[-1]
    return {
        "name": name,
        "path": path,
        "sha": "0" * 40,
        "size": 0,
        "url": f"{CONTENTS}/{path}?ref=master",
        "html_url": f"https://github.com/mdn/browser-compat-data/tree/master/{path}",
        "git_url": f"https://api.github.com/repos/mdn/browser-compat-data/git/trees/{'0' * 40}",
        "download_url": None,
        "type": type_,
    }


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def downloader(api: FakeApi) -> DataDownloader:
    return make_downloader(api)
