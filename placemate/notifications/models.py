"""Data models for notifications."""

from __future__ import annotations

from typing import Literal, Optional

from placemate.core.types import FirestoreDocument

NotificationType = Literal["comment", "team_invite", "team_invite_accept"]


class Notification(FirestoreDocument, total=False):
    """A notification addressed to a single user."""

    toUserId: str
    fromUserId: str
    type: NotificationType
    teamId: str
    teamName: str
    teamLogo: Optional[str]
    requestId: str
    placeId: str
    commentId: str
    postId: str
    text: str
    seen: bool
    fromName: str
    fromAvatar: Optional[str]
