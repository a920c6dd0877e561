"""Service layer for places, comments and reports."""

from __future__ import annotations

import math
import uuid
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app

from placemate.core.constants import (
    NEW_PLACES_LIMIT,
    NOTIFICATION_COMMENT,
    PLACES,
    REPORTS,
)
from placemate.errors import NotFoundError, ValidationError
from placemate.notifications.services import NotificationService
from placemate.user.helpers import display_name, get_user_by_id
from placemate.utils import now_ms, unique

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

    from .models import Comment, Place, Report


class PlaceService:
    """Service class for place-related operations."""

    @staticmethod
    def get_place(db: Client, place_id: str) -> Place:
        """Fetch a single place."""
        if not place_id:
            raise ValidationError("placeId is required.", code="MISSING_FIELDS")
        doc = cast("DocumentSnapshot", db.collection(PLACES).document(place_id).get())
        if not doc.exists:
            raise NotFoundError("Place not found.", code="PLACE_NOT_FOUND")
        place = cast("Place", doc.to_dict() or {})
        place["id"] = doc.id
        return place

    @staticmethod
    def _parse_location(location: dict[str, Any] | None) -> tuple[float, float]:
        """Return (latitude, longitude) from a location map."""
        try:
            latitude = float((location or {})["latitude"])
            longitude = float((location or {})["longitude"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(
                "location needs latitude and longitude.", code="INVALID_LOCATION"
            ) from e
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise ValidationError("location is not finite.", code="INVALID_LOCATION")
        if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
            raise ValidationError("location is out of range.", code="INVALID_LOCATION")
        return latitude, longitude

    @staticmethod
    def add_place(
        db: Client,
        user_id: str,
        name: str,
        country: str,
        city: str,
        district: str,
        photos: list[str],
        location: dict[str, Any] | None,
        description: str | None = None,
        properties: list[str] | None = None,
    ) -> str:
        """Create a place added by the user and return its ID.

        Photos are URLs of images that were already uploaded.
        """
        required = (name, country, city, district)
        if not all(value and value.strip() for value in required):
            raise ValidationError(
                "name, country, city and district are required.", code="MISSING_FIELDS"
            )
        photos = unique([p for p in photos or [] if isinstance(p, str)])
        if not photos:
            raise ValidationError(
                "At least one photo is required.", code="MISSING_FIELDS"
            )
        latitude, longitude = PlaceService._parse_location(location)

        place_ref = db.collection(PLACES).document()
        place: Place = {
            "id": place_ref.id,
            "name": name.strip(),
            "country": country.strip(),
            "city": city.strip(),
            "district": district.strip(),
            "description": (description or "").strip(),
            "properties": unique([p for p in properties or [] if isinstance(p, str)]),
            "photos": photos,
            "latitude": latitude,
            "longitude": longitude,
            "addedBy": user_id,
            "isPopular": False,
            "createdAt": now_ms(),
        }
        place_ref.set(place)
        current_app.logger.info(f"Place {place_ref.id} added by {user_id}.")
        return cast(str, place_ref.id)

    @staticmethod
    def list_user_places(db: Client, user_id: str) -> list[Place]:
        """Return the places a user added, newest first."""
        if get_user_by_id(db, user_id) is None:
            raise NotFoundError("User not found.", code="USER_NOT_FOUND")
        query = db.collection(PLACES).where(
            filter=firestore.FieldFilter("addedBy", "==", user_id)
        )
        places = [
            cast("Place", {**(doc.to_dict() or {}), "id": doc.id})
            for doc in query.stream()
        ]
        places.sort(key=lambda p: p.get("createdAt") or 0, reverse=True)
        return places

    @staticmethod
    def list_popular_places(db: Client) -> list[Place]:
        """Return the places flagged as popular."""
        query = db.collection(PLACES).where(
            filter=firestore.FieldFilter("isPopular", "==", True)
        )
        return [
            cast("Place", {**(doc.to_dict() or {}), "id": doc.id})
            for doc in query.stream()
        ]

    @staticmethod
    def list_new_places(db: Client, limit: int = NEW_PLACES_LIMIT) -> list[Place]:
        """Return the most recently added places."""
        query = (
            db.collection(PLACES)
            .order_by("createdAt", direction=firestore.Query.DESCENDING)
            .limit(limit)
        )
        return [
            cast("Place", {**(doc.to_dict() or {}), "id": doc.id})
            for doc in query.stream()
        ]

    @staticmethod
    def add_comment(db: Client, place_id: str, user_id: str, text: str) -> Comment:
        """Append a comment to a place and notify the place's creator."""
        text = (text or "").strip()
        if not text:
            raise ValidationError("Comment text is required.", code="MISSING_FIELDS")
        place = PlaceService.get_place(db, place_id)
        author = get_user_by_id(db, user_id)

        comment: Comment = {
            "id": str(uuid.uuid4()),
            "userId": user_id,
            "name": display_name(author),
            "avatar": (author or {}).get("avatar"),
            "comment": text,
            "createdAt": now_ms(),
            "likes": [],
            "replies": [],
        }
        db.collection(PLACES).document(place_id).update(
            {"comments": firestore.ArrayUnion([comment])}
        )

        if place.get("addedBy"):
            NotificationService.notify(
                db,
                place["addedBy"],
                user_id,
                NOTIFICATION_COMMENT,
                {
                    "placeId": place_id,
                    "commentId": comment["id"],
                    "text": text,
                },
            )
        return comment

    @staticmethod
    def list_comments(db: Client, place_id: str) -> list[Comment]:
        """Return a place's comments, newest first."""
        place = PlaceService.get_place(db, place_id)
        comments = list(place.get("comments") or [])
        comments.sort(key=lambda c: c.get("createdAt") or 0, reverse=True)
        return comments

    @staticmethod
    def report_comment(
        db: Client, place_id: str, comment_id: str, reporter_id: str, reason: str
    ) -> str:
        """File a report against a comment and return the report ID.

        The reported author and text are copied from the stored comment so the
        report still reads correctly after the comment is removed.
        """
        if not comment_id or not reason:
            raise ValidationError(
                "commentId and reason are required.", code="MISSING_FIELDS"
            )
        place = PlaceService.get_place(db, place_id)
        comment = next(
            (c for c in place.get("comments") or [] if c.get("id") == comment_id),
            None,
        )
        if comment is None:
            raise NotFoundError("Comment not found.", code="COMMENT_NOT_FOUND")

        reporter = get_user_by_id(db, reporter_id)
        report_ref = db.collection(REPORTS).document()
        report: Report = {
            "id": report_ref.id,
            "placeId": place_id,
            "commentId": comment_id,
            "reportedUserId": comment.get("userId"),
            "reportedUserName": comment.get("name"),
            "reportedComment": comment.get("comment"),
            "reason": reason,
            "reporterId": reporter_id,
            "reporterName": display_name(reporter),
            "createdAt": now_ms(),
        }
        report_ref.set(report)
        current_app.logger.info(
            f"Comment {comment_id} on place {place_id} reported by {reporter_id}."
        )
        return cast(str, report_ref.id)
