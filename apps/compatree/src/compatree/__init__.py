"""Browser compatibility data tree downloader."""

from .config import Config, EnvTokenProvider, StaticTokenProvider, UrlNormalizer, app_config
from .downloader import DataDownloader, PayloadError, PayloadKind, classify_payload
from .labels import derive_label
from .models import FlatData, Item, ItemType, RawItem
from .search import search_items

__all__ = [
    "DataDownloader",
    "Config",
    "EnvTokenProvider",
    "StaticTokenProvider",
    "UrlNormalizer",
    "app_config",
    "PayloadError",
    "PayloadKind",
    "classify_payload",
    "derive_label",
    "Item",
    "ItemType",
    "RawItem",
    "FlatData",
    "search_items",
]
