"""Service layer for notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app

from placemate.core.constants import (
    NOTIFICATION_TEAM_INVITE,
    NOTIFICATION_TEAM_INVITE_ACCEPT,
    NOTIFICATION_TYPES,
    NOTIFICATIONS,
)
from placemate.errors import ForbiddenError, NotFoundError, ValidationError
from placemate.teams.services import TeamService
from placemate.user.helpers import display_name, get_user_profiles
from placemate.utils import now_ms

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference

    from placemate.teams.models import Team

    from .models import Notification


def invite_notification_id(request_id: str) -> str:
    """Return the fixed notification ID for a team request."""
    return f"invite_{request_id}"


class NotificationService:
    """Service class for notification operations."""

    @staticmethod
    def _get_notification_doc(
        db: Client, notif_id: str
    ) -> tuple[DocumentReference, Notification | None]:
        if not notif_id or not notif_id.strip():
            raise ValidationError("notifId is required.", code="INVALID_ID")
        notif_ref = db.collection(NOTIFICATIONS).document(notif_id)
        snapshot = cast("DocumentSnapshot", notif_ref.get())
        if not snapshot.exists:
            return notif_ref, None
        notification = cast("Notification", snapshot.to_dict() or {})
        notification["id"] = snapshot.id
        return notif_ref, notification

    @staticmethod
    def notify(
        db: Client,
        to_id: str,
        from_id: str,
        notification_type: str,
        payload: dict[str, Any] | None = None,
        notif_id: str | None = None,
    ) -> str | None:
        """Write a notification and return its ID.

        A user is never notified about their own action: when ``to_id`` equals
        ``from_id`` nothing is written and None is returned. Passing
        ``notif_id`` makes the write an overwrite, so repeating it is safe.
        """
        if not to_id:
            raise ValidationError("Recipient is required.", code="MISSING_FIELDS")
        if notification_type not in NOTIFICATION_TYPES:
            raise ValidationError(
                f"Unknown notification type: {notification_type}",
                code="INVALID_NOTIFICATION_TYPE",
            )
        if to_id == from_id:
            return None

        collection = db.collection(NOTIFICATIONS)
        notif_ref = collection.document(notif_id) if notif_id else collection.document()
        notif_ref.set(
            {
                **(payload or {}),
                "id": notif_ref.id,
                "toUserId": to_id,
                "fromUserId": from_id,
                "type": notification_type,
                "createdAt": now_ms(),
                "seen": False,
            }
        )
        return cast(str, notif_ref.id)

    @staticmethod
    def send_team_invite(
        db: Client,
        from_id: str,
        to_id: str,
        team_id: str,
        request_id: str | None = None,
    ) -> str | None:
        """Notify a user that the team owner invited them.

        With ``request_id`` the notification is tied to that team request and
        stored under a fixed ID, so inviting again refreshes it in place.
        """
        team = TeamService.get_team(db, team_id)
        if TeamService.get_owner_id(cast(dict[str, Any], team)) != from_id:
            raise ForbiddenError("Only the team owner can send invites.")
        payload: dict[str, Any] = {
            "teamId": team["id"],
            "teamName": team.get("teamName"),
            "teamLogo": team.get("logo"),
        }
        if request_id:
            payload["requestId"] = request_id
        return NotificationService.notify(
            db,
            to_id,
            from_id,
            NOTIFICATION_TEAM_INVITE,
            payload,
            notif_id=invite_notification_id(request_id) if request_id else None,
        )

    @staticmethod
    def _send_invite_reply(
        db: Client, notif_id: str, inviter_id: str, user_id: str, team: Team
    ) -> None:
        NotificationService.notify(
            db,
            inviter_id,
            user_id,
            NOTIFICATION_TEAM_INVITE_ACCEPT,
            {
                "teamId": team["id"],
                "teamName": team.get("teamName"),
                "teamLogo": team.get("logo"),
            },
            notif_id=f"{notif_id}_accepted",
        )

    @staticmethod
    def list_notifications(db: Client, user_id: str) -> list[Notification]:
        """Fetch the user's notifications, newest first.

        Sender names and avatars are read from current profiles, so a renamed
        sender shows their new name and a deleted one shows as Unknown.
        """
        query = db.collection(NOTIFICATIONS).where(
            filter=firestore.FieldFilter("toUserId", "==", user_id)
        )
        notifications = [
            cast("Notification", {**(doc.to_dict() or {}), "id": doc.id})
            for doc in query.stream()
        ]
        senders = get_user_profiles(
            db, [n["fromUserId"] for n in notifications if n.get("fromUserId")]
        )
        for notification in notifications:
            sender = senders.get(notification.get("fromUserId", ""))
            notification["fromName"] = display_name(sender)
            notification["fromAvatar"] = (sender or {}).get("avatar") or ""

        notifications.sort(key=lambda n: n.get("createdAt") or 0, reverse=True)
        return notifications

    @staticmethod
    def accept_notification(db: Client, notif_id: str, user_id: str) -> None:
        """Accept a team invite notification.

        Each step can be repeated safely: membership is deduplicated, the
        reply notification has a fixed ID and the original is deleted last.
        Once the original is gone, accepting again raises NotFoundError.
        """
        notif_ref, notification = NotificationService._get_notification_doc(
            db, notif_id
        )
        if notification is None:
            raise NotFoundError(
                "Notification not found.", code="NOTIFICATION_NOT_FOUND"
            )
        if notification.get("toUserId") != user_id:
            raise ForbiddenError("This notification is addressed to someone else.")
        if notification.get("type") != NOTIFICATION_TEAM_INVITE:
            raise ValidationError(
                "Only team invites can be accepted.", code="INVALID_NOTIFICATION_TYPE"
            )
        team_id = notification.get("teamId")
        if not team_id:
            raise ValidationError("Invite has no team.", code="TEAM_ID_REQUIRED")

        team = TeamService.add_member(db, team_id, user_id)
        TeamService.resolve_pending_requests(db, team_id, user_id)
        if not team.get("teamName"):
            team["teamName"] = notification.get("teamName", "")

        NotificationService._send_invite_reply(
            db, notif_id, notification.get("fromUserId", ""), user_id, team
        )
        notif_ref.delete()
        current_app.logger.info(
            f"User {user_id} accepted invite {notif_id} to team {team_id}."
        )

    @staticmethod
    def accept_team_request(db: Client, request_id: str, user_id: str) -> Team:
        """Accept a team request and settle its invite notification.

        The inviter gets the same fixed-ID reply as when the notification
        itself is accepted, and the invite notification is removed.
        """
        team = TeamService.accept_invite(db, request_id, user_id)
        request = TeamService.get_request(db, request_id)
        notif_id = invite_notification_id(request_id)
        NotificationService._send_invite_reply(
            db, notif_id, request.get("fromId", ""), user_id, team
        )
        db.collection(NOTIFICATIONS).document(notif_id).delete()
        return team

    @staticmethod
    def clear_team_invite(db: Client, request_id: str) -> None:
        """Remove the invite notification tied to a team request, if any."""
        db.collection(NOTIFICATIONS).document(
            invite_notification_id(request_id)
        ).delete()

    @staticmethod
    def delete_notification(db: Client, notif_id: str, user_id: str) -> None:
        """Delete one of the user's notifications; a missing one counts as deleted."""
        notif_ref, notification = NotificationService._get_notification_doc(
            db, notif_id
        )
        if notification is None:
            return
        if notification.get("toUserId") != user_id:
            raise ForbiddenError("You cannot delete this notification.")
        notif_ref.delete()

    @staticmethod
    def mark_seen(db: Client, notif_id: str, user_id: str) -> None:
        """Mark one of the user's notifications as seen."""
        notif_ref, notification = NotificationService._get_notification_doc(
            db, notif_id
        )
        if notification is None:
            raise NotFoundError(
                "Notification not found.", code="NOTIFICATION_NOT_FOUND"
            )
        if notification.get("toUserId") != user_id:
            raise ForbiddenError("You cannot update this notification.")
        if not notification.get("seen"):
            notif_ref.update({"seen": True})
