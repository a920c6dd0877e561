"""Data models for places, comments and reports."""

from __future__ import annotations

from typing import Optional, TypedDict

from placemate.core.types import FirestoreDocument


class Comment(TypedDict):
    """A comment embedded in a place document."""

    id: str
    userId: str
    name: str
    avatar: Optional[str]
    comment: str
    createdAt: int
    likes: list[str]
    replies: list[dict]


class Place(FirestoreDocument, total=False):
    """A place document in Firestore."""

    name: str
    country: str
    city: str
    district: str
    description: str
    properties: list[str]
    photos: list[str]
    latitude: float
    longitude: float
    addedBy: str
    isPopular: bool
    comments: list[Comment]
    isFavorite: bool


class Report(FirestoreDocument, total=False):
    """A user report against a place comment."""

    placeId: str
    commentId: str
    reportedUserId: str
    reportedUserName: str
    reportedComment: str
    reason: str
    reporterId: str
    reporterName: str
