"""Data models for the teams feature."""

from __future__ import annotations

from typing import Literal, Optional

from placemate.core.types import FirestoreDocument
from placemate.user.models import UserSummary

RequestStatus = Literal["pending", "accepted", "rejected"]


class Team(FirestoreDocument, total=False):
    """A team document in Firestore.

    ``ownerId`` is authoritative for ownership. ``members`` keeps the owner
    at index 0 but its order is otherwise display-only.
    """

    teamName: str
    logo: Optional[str]
    ownerId: str
    members: list[str]
    userMap: dict[str, UserSummary]


class TeamRequest(FirestoreDocument, total=False):
    """An invitation to join a team, kept after it is resolved."""

    teamId: str
    teamName: str
    fromId: str
    fromName: str
    toId: str
    toName: str
    status: RequestStatus
    resolvedAt: int
