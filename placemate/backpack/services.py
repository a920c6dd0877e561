"""Service layer for backpacks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from placemate.core.constants import BACKPACKS
from placemate.errors import ValidationError

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference
    from google.cloud.firestore_v1.transaction import Transaction

    from .models import BackpackItem


class BackpackService:
    """Service class for backpack operations.

    Each user owns one ``backpacks`` document holding an ``items`` list.
    Items are unique by ``id``; both mutations run in a transaction.
    """

    @staticmethod
    def get_items(db: Client, user_id: str) -> list[BackpackItem]:
        """Return the items in a user's backpack."""
        doc = cast("DocumentSnapshot", db.collection(BACKPACKS).document(user_id).get())
        if not doc.exists:
            return []
        return list((doc.to_dict() or {}).get("items") or [])

    @staticmethod
    def _add_item_transaction(
        transaction: Transaction, backpack_ref: DocumentReference, item: BackpackItem
    ) -> list[BackpackItem]:
        snapshot = cast("DocumentSnapshot", backpack_ref.get(transaction=transaction))
        items: list[BackpackItem] = []
        if snapshot.exists:
            items = list((snapshot.to_dict() or {}).get("items") or [])
        if any(i.get("id") == item["id"] for i in items):
            return items
        items.append(item)
        transaction.set(backpack_ref, {"items": items}, merge=True)
        return items

    @staticmethod
    def add_item(db: Client, user_id: str, item: dict[str, Any]) -> list[BackpackItem]:
        """Pack an item unless one with the same id is already packed."""
        item_id = (item or {}).get("id")
        if not user_id or not isinstance(item_id, str) or not item_id.strip():
            raise ValidationError("item.id is required.", code="MISSING_FIELDS")
        backpack_ref = db.collection(BACKPACKS).document(user_id)
        add = firestore.transactional(BackpackService._add_item_transaction)
        return cast(
            "list[BackpackItem]",
            add(db.transaction(), backpack_ref, cast("BackpackItem", dict(item))),
        )

    @staticmethod
    def _remove_item_transaction(
        transaction: Transaction, backpack_ref: DocumentReference, item_id: str
    ) -> list[BackpackItem]:
        snapshot = cast("DocumentSnapshot", backpack_ref.get(transaction=transaction))
        if not snapshot.exists:
            return []
        items = list((snapshot.to_dict() or {}).get("items") or [])
        remaining = [i for i in items if i.get("id") != item_id]
        if len(remaining) != len(items):
            transaction.set(backpack_ref, {"items": remaining}, merge=True)
        return remaining

    @staticmethod
    def remove_item(db: Client, user_id: str, item_id: str) -> list[BackpackItem]:
        """Unpack an item; removing one that is not packed is a no-op."""
        if not user_id or not item_id:
            raise ValidationError("itemId is required.", code="MISSING_FIELDS")
        backpack_ref = db.collection(BACKPACKS).document(user_id)
        remove = firestore.transactional(BackpackService._remove_item_transaction)
        return cast(
            "list[BackpackItem]", remove(db.transaction(), backpack_ref, item_id)
        )
