"""Data models for the backpack feature."""

from typing import TypedDict


class _BackpackItemBase(TypedDict):
    id: str


class BackpackItem(_BackpackItemBase, total=False):
    """An item packed by a user; fields other than ``id`` are stored as sent."""

    name: str
    icon: str
