"""Search over flat data items."""

from typing import Iterable

from .models import Item

SEPARATOR = " / "


def trail(item: Item) -> str:
    """Breadcrumbs joined for display."""
    return SEPARATOR.join(item.breadcrumbs)


def search_items(items: Iterable[Item], query: str) -> list[Item]:
    """Items whose name or breadcrumb trail contains ``query``, ignoring case."""
    needle = query.strip().lower()
    if not needle:
        return []
    return [
        item
        for item in items
        if needle in item.name.lower() or needle in trail(item).lower()
    ]
