"""Download and normalize compatibility-data trees."""

import logging
from enum import Enum
from typing import Any, Iterator
from urllib.parse import quote

from ghcontents import ContentsClient, GitHubContent, GitHubFile

from .config import Config
from .labels import derive_label
from .models import FlatData, Item, ItemType

logger = logging.getLogger(__name__)

COMPAT_KEY = "__compat"
WILDCARD = "wildcard"


class PayloadError(ValueError):
    """Response body does not fit the fetch it answers."""


class PayloadKind(Enum):
    """How a decoded body is turned into items."""

    ROOT = "root"
    DIRECTORY = "directory"
    COMPAT_DATA = "compat_data"


def classify_payload(data: Any, parent: Item | None) -> PayloadKind:
    """
    Pick the transformation for a decoded body.

    A list is a directory listing: the root one without a parent, a descent
    otherwise. An object under a parent is a compat-data document.
    """
    if isinstance(data, list):
        return PayloadKind.ROOT if parent is None else PayloadKind.DIRECTORY
    if isinstance(data, dict) and parent is not None:
        return PayloadKind.COMPAT_DATA
    where = "root" if parent is None else parent.url
    raise PayloadError(f"Unexpected {type(data).__name__} payload for {where}")


def iter_compat_leaves(document: dict[str, Any]) -> Iterator[tuple[str, dict[str, Any]]]:
    """Yield ``(key, compat)`` for every feature holding ``__compat``.

    Subfeatures below a feature are not visited.
    """
    for key, value in document.items():
        if key == COMPAT_KEY or not isinstance(value, dict):
            continue
        compat = value.get(COMPAT_KEY)
        if isinstance(compat, dict):
            yield key, compat
        else:
            yield from iter_compat_leaves(value)


def reference_link(compat: dict[str, Any]) -> str | None:
    """Documentation link of a feature: ``mdn_url``, else the first ``spec_url``."""
    if compat.get("mdn_url"):
        return compat["mdn_url"]
    spec_url = compat.get("spec_url")
    if isinstance(spec_url, list):
        spec_url = spec_url[0] if spec_url else None
    return spec_url or None


class DataDownloader:
    """Fetches one tree level or the flat index and maps it to items."""

    def __init__(self, config: Config, client: ContentsClient | None = None):
        """
        Initialize downloader.

        Args:
            config: Endpoints, label rules and token lookup
            client: Contents client (defaults to one using ``config``'s token)
        """
        self.config = config
        self.client = client or ContentsClient(token_lookup=config.token)

    def download_tree_data(self, parent: Item | None = None) -> list[Item]:
        """
        Fetch the children of ``parent``, or the root directories.

        Raises:
            StatusError: response status is not 200
            httpx.TransportError: request failed
            PayloadError: body shape does not fit the fetch
        """
        url = parent.url if parent is not None else self.config.root_url
        logger.info("Downloading tree data: %s", url)
        data = self.client.get_json(url)

        if GitHubFile.is_envelope(data):
            data = GitHubFile(**data).decoded_json()

        kind = classify_payload(data, parent)
        logger.debug("Payload for %s classified as %s", url, kind.value)

        if kind is PayloadKind.ROOT:
            return self._root_items(data)
        if kind is PayloadKind.DIRECTORY:
            return self._directory_items(data, parent)
        return self._compat_items(data, parent)

    def download_flat_data(self) -> list[Item]:
        """
        Fetch the pre-flattened index.

        Raises:
            ValueError: no flat data endpoint configured
            StatusError: response status is not 200
            httpx.TransportError: request failed
        """
        if not self.config.flat_data_url:
            raise ValueError("flat_data_url is not configured")
        logger.info("Downloading flat data: %s", self.config.flat_data_url)
        data = self.client.get_json(self.config.flat_data_url)
        items = [raw.to_item() for raw in FlatData(**data).items]
        logger.debug("Flat data: %d items", len(items))
        return items

    def _label(self, name: str) -> str:
        return derive_label(name, self.config.label_pattern)

    def _root_items(self, data: list[Any]) -> list[Item]:
        entries = [GitHubContent(**entry) for entry in data]
        return [
            Item(
                name=entry.name,
                url=entry.url,
                type=ItemType.DIRECTORY,
                breadcrumbs=(entry.name,),
            )
            for entry in entries
        ]

    def _directory_items(self, data: list[Any], parent: Item) -> list[Item]:
        root_parent = parent.root_parent or parent
        items = []
        for entry in (GitHubContent(**entry) for entry in data):
            label = self._label(entry.name)
            items.append(
                Item(
                    name=label,
                    url=entry.url,
                    type=ItemType.DIRECTORY,
                    parent=parent,
                    root_parent=root_parent,
                    breadcrumbs=parent.breadcrumbs + (label,),
                )
            )
        return items

    def _compat_items(self, document: dict[str, Any], parent: Item) -> list[Item]:
        items = []
        for key, compat in iter_compat_leaves(document):
            label = self._label(key)
            link = reference_link(compat)
            if link:
                url = self.config.url_normalizer(link)
            else:
                logger.debug("No documentation link for %s, using search", key)
                url = f"{self.config.search_url}{quote(key)}"
            # Reference trail ends with the label twice.
            items.append(
                Item(
                    name=f"{label} - reference",
                    url=url,
                    type=ItemType.FILE,
                    parent=parent,
                    breadcrumbs=parent.breadcrumbs + (label, label),
                )
            )
            items.append(
                Item(
                    name=WILDCARD,
                    url="",
                    type=ItemType.FILE,
                    parent=parent,
                    breadcrumbs=parent.breadcrumbs + (label, WILDCARD),
                )
            )
        return items
