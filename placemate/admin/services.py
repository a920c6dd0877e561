"""Service layer for admin-related operations."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import auth, firestore
from flask import current_app

from placemate.core.constants import (
    BAN_TYPE_ALL,
    BAN_TYPE_NONE,
    MS_PER_HOUR,
    PLACES,
    REPORTS,
    ROLE_ADMIN,
    USERS,
)
from placemate.errors import ForbiddenError, NotFoundError, ValidationError
from placemate.user.helpers import display_name, get_user_by_id
from placemate.utils import now_ms

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference
    from google.cloud.firestore_v1.transaction import Transaction

    from .models import AdminContext


class AdminService:
    """Service class for admin-related operations."""

    @staticmethod
    def require_admin(db: Client, user_id: str) -> AdminContext:
        """Return the admin context for a user holding the admin role.

        Raises:
            ForbiddenError: If the user is unknown or is not an admin.
        """
        user = get_user_by_id(db, user_id)
        if user is None or user.get("role") != ROLE_ADMIN:
            current_app.logger.warning(f"Admin access denied for user {user_id}.")
            raise ForbiddenError("Admin role required.", code="ADMIN_REQUIRED")
        return {"uid": user_id, "name": display_name(user)}

    @staticmethod
    def _get_user_ref(db: Client, user_id: str) -> DocumentReference:
        if not user_id:
            raise ValidationError("userId is required.", code="MISSING_FIELDS")
        user_ref = db.collection(USERS).document(user_id)
        if not cast("DocumentSnapshot", user_ref.get()).exists:
            raise NotFoundError("User not found.", code="USER_NOT_FOUND")
        return user_ref

    @staticmethod
    def ban_user(
        db: Client, user_id: str, hours: float, ban_type: str | None = None
    ) -> int:
        """Ban a user for a number of hours and return the expiry (epoch ms)."""
        if hours is None or not math.isfinite(hours) or hours <= 0:
            raise ValidationError("hours must be positive.", code="INVALID_BAN")
        user_ref = AdminService._get_user_ref(db, user_id)

        expires_at = now_ms() + int(hours * MS_PER_HOUR)
        user_ref.update(
            {"banExpiresAt": expires_at, "banType": ban_type or BAN_TYPE_ALL}
        )
        current_app.logger.info(f"User {user_id} banned until {expires_at}.")
        return expires_at

    @staticmethod
    def unban_user(db: Client, user_id: str) -> None:
        """Lift any ban on a user."""
        user_ref = AdminService._get_user_ref(db, user_id)
        user_ref.update({"banExpiresAt": 0, "banType": BAN_TYPE_NONE})
        current_app.logger.info(f"User {user_id} unbanned.")

    @staticmethod
    def _remove_comment_transaction(
        transaction: Transaction, place_ref: DocumentReference, comment_id: str
    ) -> bool:
        snapshot = cast("DocumentSnapshot", place_ref.get(transaction=transaction))
        if not snapshot.exists:
            raise NotFoundError("Place not found.", code="PLACE_NOT_FOUND")

        comments = (snapshot.to_dict() or {}).get("comments") or []
        remaining = [c for c in comments if c.get("id") != comment_id]
        if len(remaining) == len(comments):
            return False
        transaction.update(place_ref, {"comments": remaining})
        return True

    @staticmethod
    def remove_reported_comment(
        db: Client, place_id: str, comment_id: str, report_id: str
    ) -> bool:
        """Remove a comment from its place and close the report against it.

        Returns:
            Whether the comment was still present.
        """
        if not place_id or not comment_id or not report_id:
            raise ValidationError(
                "placeId, commentId and reportId are required.", code="MISSING_FIELDS"
            )
        place_ref = db.collection(PLACES).document(place_id)
        remove = firestore.transactional(AdminService._remove_comment_transaction)
        removed = remove(db.transaction(), place_ref, comment_id)
        db.collection(REPORTS).document(report_id).delete()
        current_app.logger.info(
            f"Comment {comment_id} on place {place_id} removed; report {report_id} closed."
        )
        return cast(bool, removed)

    @staticmethod
    def dismiss_report(db: Client, report_id: str) -> None:
        """Close a report without touching the comment."""
        if not report_id:
            raise ValidationError("reportId is required.", code="MISSING_FIELDS")
        db.collection(REPORTS).document(report_id).delete()

    @staticmethod
    def _list_collection(db: Client, collection: str) -> list[dict[str, Any]]:
        return [
            {**(doc.to_dict() or {}), "id": doc.id}
            for doc in db.collection(collection).stream()
            if doc.exists
        ]

    @staticmethod
    def list_users(db: Client) -> list[dict[str, Any]]:
        """Fetch every user profile."""
        return AdminService._list_collection(db, USERS)

    @staticmethod
    def list_reports(db: Client) -> list[dict[str, Any]]:
        """Fetch every open report, newest first."""
        reports = AdminService._list_collection(db, REPORTS)
        reports.sort(key=lambda r: r.get("createdAt") or 0, reverse=True)
        return reports

    @staticmethod
    def list_places(db: Client) -> list[dict[str, Any]]:
        """Fetch every place."""
        return AdminService._list_collection(db, PLACES)

    @staticmethod
    def delete_user(db: Client, user_id: str) -> None:
        """Delete a user's profile and auth account.

        References to the user elsewhere (teams, visits, notifications) are
        left in place and resolve as missing users.
        """
        if not user_id:
            raise ValidationError("userId is required.", code="MISSING_FIELDS")
        db.collection(USERS).document(user_id).delete()
        try:
            auth.delete_user(user_id)
        except auth.UserNotFoundError:
            current_app.logger.warning(f"Auth account for {user_id} was already gone.")
        current_app.logger.info(f"User {user_id} deleted.")

    @staticmethod
    def delete_place(db: Client, place_id: str) -> None:
        """Delete a place document."""
        if not place_id:
            raise ValidationError("placeId is required.", code="MISSING_FIELDS")
        db.collection(PLACES).document(place_id).delete()
        current_app.logger.info(f"Place {place_id} deleted.")

    @staticmethod
    def get_admin_stats(db: Client) -> dict[str, Any]:
        """Summarize users, places, comments and reports for the dashboard."""
        places = AdminService.list_places(db)
        most_commented = sorted(
            (
                {
                    "id": place["id"],
                    "name": place.get("name"),
                    "count": len(place.get("comments") or []),
                }
                for place in places
            ),
            key=lambda p: p["count"],
            reverse=True,
        )[:10]
        return {
            "totalUsers": len(AdminService.list_users(db)),
            "totalPlaces": len(places),
            "totalComments": sum(len(p.get("comments") or []) for p in places),
            "totalReports": len(AdminService.list_reports(db)),
            "mostCommented": most_commented,
        }
