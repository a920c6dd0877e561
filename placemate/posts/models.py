"""Data models for posts."""

from __future__ import annotations

from typing import Optional, TypedDict

from placemate.core.types import FirestoreDocument


class Media(TypedDict):
    """An uploaded photo or video referenced by URL."""

    url: str
    type: str


class PostComment(TypedDict):
    """A comment embedded in a post document."""

    id: str
    userId: str
    username: str
    userAvatar: Optional[str]
    text: str
    createdAt: int


class Post(FirestoreDocument, total=False):
    """A post document in Firestore."""

    userId: str
    username: str
    userAvatar: Optional[str]
    caption: str
    medias: list[Media]
    likedBy: list[str]
    likes: int
    comments: list[PostComment]
