"""Service layer for visits and the visited reverse index."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app

from placemate.core.constants import PLACES, VISITED, VISITS
from placemate.errors import NotFoundError, ValidationError
from placemate.user.helpers import get_user_profiles
from placemate.utils import now_ms, to_epoch_ms, unique

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference
    from google.cloud.firestore_v1.transaction import Transaction

    from .models import Visit, VisitDetail


class VisitService:
    """Service class for visit-related operations.

    ``visited/<uid>`` maps ``visitId -> True`` for every visit the user took
    part in when the visit was created. Editing a visit's teammates does not
    rewrite that index; ``reconcile_visited`` repairs it on demand.
    """

    @staticmethod
    def _build_visit_fields(
        place_id: str,
        teammates: list[str] | None,
        start_date: Any,
        end_date: Any,
        name: str | None,
        city: str | None,
        experience: str | None,
        photos: list[str] | None,
    ) -> dict[str, Any]:
        if not place_id:
            raise ValidationError("placeId is required.", code="MISSING_FIELDS")
        teammate_ids = unique(list(teammates or []))
        if not teammate_ids:
            raise ValidationError(
                "At least one teammate is required.", code="MISSING_FIELDS"
            )

        start_ms = to_epoch_ms(start_date, "startDate")
        end_ms = to_epoch_ms(end_date, "endDate")
        if start_ms > end_ms:
            raise ValidationError(
                "startDate must not be after endDate.", code="INVALID_DATE_RANGE"
            )

        return {
            "placeId": place_id,
            "placeName": name,
            "city": city,
            "teammates": teammate_ids,
            "startDate": start_ms,
            "endDate": end_ms,
            "experience": experience,
            "photos": list(photos or []),
        }

    @staticmethod
    def _update_visit_transaction(
        transaction: Transaction, visit_ref: DocumentReference, fields: dict[str, Any]
    ) -> None:
        snapshot = cast("DocumentSnapshot", visit_ref.get(transaction=transaction))
        if not snapshot.exists:
            raise NotFoundError("Visit not found.", code="VISIT_NOT_FOUND")
        transaction.update(visit_ref, fields)

    @staticmethod
    def upsert_visit(
        db: Client,
        place_id: str,
        teammates: list[str],
        start_date: Any,
        end_date: Any,
        visit_id: str | None = None,
        name: str | None = None,
        city: str | None = None,
        experience: str | None = None,
        photos: list[str] | None = None,
    ) -> str:
        """Create a visit, or overwrite an existing one, and return its ID.

        On create every teammate's visited index gets the new visit. On update
        all fields are replaced but the visited index is left untouched.
        """
        fields = VisitService._build_visit_fields(
            place_id, teammates, start_date, end_date, name, city, experience, photos
        )

        if visit_id:
            fields["updatedAt"] = now_ms()
            visit_ref = db.collection(VISITS).document(visit_id)
            update = firestore.transactional(VisitService._update_visit_transaction)
            update(db.transaction(), visit_ref, fields)
            return visit_id

        visit_ref = db.collection(VISITS).document()
        fields["createdAt"] = now_ms()
        visit_ref.set(fields)

        for uid in fields["teammates"]:
            db.collection(VISITED).document(uid).set({visit_ref.id: True}, merge=True)

        current_app.logger.info(
            f"Visit {visit_ref.id} to place {place_id} recorded for "
            f"{len(fields['teammates'])} teammates."
        )
        return visit_ref.id

    @staticmethod
    def get_visited(db: Client, user_id: str) -> dict[str, bool]:
        """Return the user's visited index as stored."""
        doc = cast("DocumentSnapshot", db.collection(VISITED).document(user_id).get())
        if not doc.exists:
            return {}
        return {vid: True for vid, flag in (doc.to_dict() or {}).items() if flag}

    @staticmethod
    def get_visit(db: Client, visit_id: str) -> Visit:
        """Fetch a single visit."""
        doc = cast("DocumentSnapshot", db.collection(VISITS).document(visit_id).get())
        if not doc.exists:
            raise NotFoundError("Visit not found.", code="VISIT_NOT_FOUND")
        visit = cast("Visit", doc.to_dict() or {})
        visit["id"] = doc.id
        return visit

    @staticmethod
    def get_visit_details(db: Client, visit_ids: list[str]) -> list[VisitDetail]:
        """Join each visit with its place and teammate profiles.

        IDs that no longer resolve to a visit are dropped from the result.
        """
        details = []
        for visit_id in unique(list(visit_ids or [])):
            snapshot = cast(
                "DocumentSnapshot", db.collection(VISITS).document(visit_id).get()
            )
            if not snapshot.exists:
                continue
            visit = snapshot.to_dict() or {}

            place: dict[str, Any] = {}
            if visit.get("placeId"):
                place_doc = cast(
                    "DocumentSnapshot",
                    db.collection(PLACES).document(visit["placeId"]).get(),
                )
                if place_doc.exists:
                    place = place_doc.to_dict() or {}

            profiles = get_user_profiles(db, visit.get("teammates") or [])
            detail = cast(
                "VisitDetail",
                {
                    **visit,
                    "id": visit_id,
                    "teammatesFull": list(profiles.values()),
                    "userMap": profiles,
                    "placePhotos": place.get("photos") or [],
                    "placeName": place.get("name") or visit.get("placeName"),
                    "city": place.get("city") or visit.get("city"),
                },
            )
            details.append(detail)
        return details

    @staticmethod
    def reconcile_visited(db: Client, user_id: str) -> list[str]:
        """Drop visited entries whose visit is gone or no longer lists the user.

        Returns:
            The visit IDs removed from the index.
        """
        stale = []
        for visit_id in VisitService.get_visited(db, user_id):
            snapshot = cast(
                "DocumentSnapshot", db.collection(VISITS).document(visit_id).get()
            )
            visit = (snapshot.to_dict() or {}) if snapshot.exists else {}
            if user_id not in (visit.get("teammates") or []):
                stale.append(visit_id)

        if stale:
            db.collection(VISITED).document(user_id).set(
                {vid: firestore.DELETE_FIELD for vid in stale}, merge=True
            )
            current_app.logger.info(
                f"Removed {len(stale)} stale visited entries for user {user_id}."
            )
        return stale
