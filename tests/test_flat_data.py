"""Tests for DataDownloader.download_flat_data."""

import httpx
import pytest
from compatree import Config, DataDownloader, Item, ItemType, RawItem
from ghcontents import StatusError

from conftest import FLAT_DATA_URL, ROOT_URL

COMPACT = {
    "id": 216685,
    "name": "compact",
    "url": "https://developer.mozilla.org/docs/Web/API/HTMLUListElement/compact",
    "parent": None,
    "rootParent": None,
    "type": 2,
    "breadcrumbs": ["api", "HTMLU List Element", "compact"],
    "timestamp": "2019-11-19T00:00:00",
}


def test_one_item(api, downloader):
    api.add(FLAT_DATA_URL, {"items": [COMPACT]})

    actual = downloader.download_flat_data()

    assert actual == [
        Item(
            name="compact",
            url="https://developer.mozilla.org/docs/Web/API/HTMLUListElement/compact",
            type=ItemType.FILE,
            breadcrumbs=("api", "HTMLU List Element", "compact"),
        )
    ]
    assert actual[0].parent is None
    assert "id" not in actual[0].model_dump()
    assert "timestamp" not in actual[0].model_dump()


def test_item_with_parent(api, downloader):
    api_entry = {"name": "api", "url": "https://bcd.example.test/api", "type": 1, "breadcrumbs": ["api"]}
    list_element = {
        "name": "HTMLU List Element",
        "url": "https://bcd.example.test/api/HTMLUListElement",
        "type": 1,
        "parent": api_entry,
        "rootParent": api_entry,
        "breadcrumbs": ["api", "HTMLU List Element"],
    }
    api.add(FLAT_DATA_URL, {"items": [{**COMPACT, "parent": list_element, "rootParent": api_entry}]})

    (compact,) = downloader.download_flat_data()

    api_item = Item(name="api", url="https://bcd.example.test/api", type=ItemType.DIRECTORY, breadcrumbs=("api",))
    assert compact.parent == Item(
        name="HTMLU List Element",
        url="https://bcd.example.test/api/HTMLUListElement",
        type=ItemType.DIRECTORY,
        parent=api_item,
        root_parent=api_item,
        breadcrumbs=("api", "HTMLU List Element"),
    )
    assert compact.root_parent == api_item
    assert compact.parent.parent == api_item


def test_directory_type_code():
    raw = RawItem(**{**COMPACT, "type": 1})

    assert raw.to_item().type is ItemType.DIRECTORY


def test_unknown_type_code_rejected():
    with pytest.raises(ValueError):
        RawItem(**{**COMPACT, "type": 7})


def test_empty_index(api, downloader):
    api.add(FLAT_DATA_URL, {"items": []})

    assert downloader.download_flat_data() == []


def test_no_content_status_rejected(api, downloader):
    api.add(FLAT_DATA_URL, status=204)

    with pytest.raises(StatusError, match="^No Content$"):
        downloader.download_flat_data()


def test_transport_error_propagates(api, downloader):
    api.fail(FLAT_DATA_URL, httpx.ReadTimeout("test error message"))

    with pytest.raises(httpx.ReadTimeout, match="^test error message$"):
        downloader.download_flat_data()


def test_missing_endpoint():
    downloader = DataDownloader(Config(root_url=ROOT_URL))

    with pytest.raises(ValueError, match="flat_data_url"):
        downloader.download_flat_data()
