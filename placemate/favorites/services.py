"""Service layer for the user-to-place favorite relation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app

from placemate.core.constants import FAVORITES, PLACES
from placemate.errors import ValidationError

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


class FavoriteService:
    """Service class for favorites.

    Each user owns one ``favorites`` document mapping ``placeId -> True``.
    Writes touch a single field, so toggling different places concurrently
    never loses an update.
    """

    @staticmethod
    def set_favorite(db: Client, user_id: str, place_id: str, favored: bool) -> None:
        """Add or remove a place from the user's favorites. Idempotent."""
        if not user_id or not place_id:
            raise ValidationError("userId and placeId are required.")

        value = True if favored else firestore.DELETE_FIELD
        db.collection(FAVORITES).document(user_id).set({place_id: value}, merge=True)

    @staticmethod
    def list_favorite_ids(db: Client, user_id: str) -> list[str]:
        """Return the IDs of the places the user has favorited."""
        doc = cast("DocumentSnapshot", db.collection(FAVORITES).document(user_id).get())
        if not doc.exists:
            return []
        return [place_id for place_id, flag in (doc.to_dict() or {}).items() if flag]

    @staticmethod
    def list_favorites(db: Client, user_id: str) -> list[dict[str, Any]]:
        """Return the user's favorite places, skipping places that were deleted."""
        place_ids = FavoriteService.list_favorite_ids(db, user_id)
        if not place_ids:
            return []

        refs = [db.collection(PLACES).document(pid) for pid in place_ids]
        snapshots = {
            snap.id: snap
            for snap in cast(list["DocumentSnapshot"], list(db.get_all(refs)))
            if snap.exists
        }
        favorites = []
        for place_id in place_ids:
            snapshot = snapshots.get(place_id)
            if snapshot is None:
                current_app.logger.warning(
                    f"User {user_id} favorited missing place {place_id}; skipping."
                )
                continue
            favorites.append({"id": place_id, **(snapshot.to_dict() or {})})
        return favorites

    @staticmethod
    def is_favorite(db: Client, user_id: str, place_id: str) -> bool:
        """Check whether the user has favorited a place."""
        return place_id in FavoriteService.list_favorite_ids(db, user_id)
