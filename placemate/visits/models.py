"""Data models for visits."""

from __future__ import annotations

from typing import Any

from placemate.core.types import FirestoreDocument


class Visit(FirestoreDocument, total=False):
    """A group visit to a place."""

    placeId: str
    placeName: str | None
    city: str | None
    teammates: list[str]
    startDate: int
    endDate: int
    experience: str | None
    photos: list[str]


class VisitDetail(Visit, total=False):
    """A visit joined with its place and teammate profiles."""

    placePhotos: list[str]
    teammatesFull: list[dict[str, Any]]
    userMap: dict[str, dict[str, Any]]


