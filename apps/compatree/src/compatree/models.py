"""Compatree data models."""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ItemType(IntEnum):
    """Kind of tree node. Values match the flat index type codes."""

    DIRECTORY = 1
    FILE = 2


class Item(BaseModel):
    """Node of the presented hierarchy."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    type: ItemType
    parent: Optional["Item"] = None
    root_parent: Optional["Item"] = None
    breadcrumbs: tuple[str, ...]

    @field_validator("breadcrumbs")
    @classmethod
    def _breadcrumbs_not_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("breadcrumbs must hold at least one label")
        return value


class RawItem(BaseModel):
    """Item as served by the flat index, transport fields included."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    name: str
    url: str
    parent: Optional["RawItem"] = None
    root_parent: Optional["RawItem"] = Field(default=None, alias="rootParent")
    type: ItemType
    breadcrumbs: list[str]
    timestamp: str | None = None

    def to_item(self) -> Item:
        return Item(
            name=self.name,
            url=self.url,
            type=self.type,
            parent=self.parent.to_item() if self.parent else None,
            root_parent=self.root_parent.to_item() if self.root_parent else None,
            breadcrumbs=tuple(self.breadcrumbs),
        )


class FlatData(BaseModel):
    """Flat index document."""

    items: list[RawItem] = Field(default_factory=list)
