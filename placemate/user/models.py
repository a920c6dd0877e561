"""Data models for the user blueprint."""

from __future__ import annotations

from typing import TypedDict

from placemate.core.types import FirestoreDocument


class User(FirestoreDocument, total=False):
    """A user document in Firestore."""

    uid: str
    name: str
    nickname: str
    email: str
    avatar: str
    coverPhoto: str
    bio: str
    role: str
    banType: str
    banExpiresAt: int


class UserSummary(TypedDict):
    """The slice of a profile shown next to someone else's content."""

    name: str
    avatar: str | None
