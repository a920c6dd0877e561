"""Helper functions for user-related data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from placemate.core.constants import UNKNOWN_USER_NAME, USERS

from .models import UserSummary

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


def display_name(user: dict[str, Any] | None) -> str:
    """Return the name to show for a user, preferring their nickname."""
    if not user:
        return UNKNOWN_USER_NAME
    return user.get("nickname") or user.get("name") or UNKNOWN_USER_NAME


def get_user_by_id(db: Client, user_id: str) -> dict[str, Any] | None:
    """Fetch a user by their ID."""
    if not user_id:
        return None
    user_doc = cast("DocumentSnapshot", db.collection(USERS).document(user_id).get())
    if not user_doc.exists:
        return None
    data = user_doc.to_dict() or {}
    data["id"] = user_id
    return data


def get_users_map(db: Client, user_ids: list[str]) -> dict[str, UserSummary]:
    """Fetch name and avatar for each existing user, keyed by uid.

    Users that no longer exist are left out of the map.
    """
    if not user_ids:
        return {}

    refs = [db.collection(USERS).document(uid) for uid in dict.fromkeys(user_ids)]
    users_map: dict[str, UserSummary] = {}
    for doc in db.get_all(refs):
        snapshot = cast("DocumentSnapshot", doc)
        if snapshot.exists:
            data = snapshot.to_dict() or {}
            users_map[snapshot.id] = {
                "name": data.get("name") or UNKNOWN_USER_NAME,
                "avatar": data.get("avatar"),
            }
    return users_map


def get_user_profiles(db: Client, user_ids: list[str]) -> dict[str, dict[str, Any]]:
    """Fetch full profiles for existing users, keyed by uid, in input order."""
    if not user_ids:
        return {}

    refs = [db.collection(USERS).document(uid) for uid in dict.fromkeys(user_ids)]
    snapshots = {
        snap.id: snap
        for snap in cast(list["DocumentSnapshot"], list(db.get_all(refs)))
        if snap.exists
    }
    profiles = {}
    for uid in dict.fromkeys(user_ids):
        snapshot = snapshots.get(uid)
        if snapshot is not None:
            profiles[uid] = {"id": uid, **(snapshot.to_dict() or {})}
    return profiles
