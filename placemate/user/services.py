"""Service layer for user profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from flask import current_app

from placemate.core.constants import USERS
from placemate.errors import NotFoundError, ValidationError
from placemate.utils import now_ms

from .helpers import get_user_by_id

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from .models import User

EDITABLE_FIELDS = ("nickname", "bio", "avatar", "coverPhoto")


class UserService:
    """Service class for user profile operations."""

    @staticmethod
    def get_profile(db: Client, user_id: str) -> User:
        """Fetch a user's public profile."""
        user = get_user_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found.", code="USER_NOT_FOUND")
        return cast("User", user)

    @staticmethod
    def update_profile(
        db: Client, user_id: str, changes: dict[str, Any]
    ) -> dict[str, Any]:
        """Apply the editable fields present in changes and return them."""
        update_data = {
            key: value
            for key, value in changes.items()
            if key in EDITABLE_FIELDS and value is not None
        }
        if not update_data:
            raise ValidationError("Nothing to update.", code="NOTHING_TO_UPDATE")

        UserService.get_profile(db, user_id)
        update_data["updatedAt"] = now_ms()
        db.collection(USERS).document(user_id).update(update_data)
        current_app.logger.info(f"User {user_id} updated {sorted(update_data)}.")
        return update_data
