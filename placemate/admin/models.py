"""Data models for the admin blueprint."""

from typing import TypedDict


class AdminContext(TypedDict):
    """The verified admin performing a moderation action."""

    uid: str
    name: str
