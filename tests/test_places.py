"""Tests for PlaceService."""

from __future__ import annotations

from unittest.mock import patch

from placemate.errors import NotFoundError, ValidationError
from placemate.places.services import PlaceService
from tests.helpers import FirestoreTestCase


class TestPlaceService(FirestoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.add_user("alice", nickname="Ali", avatar="alice.png")
        self.add_user("bob")
        self.add_place("cafe", addedBy="bob")

    def _notifications(self) -> list[dict]:
        return [
            doc.to_dict()
            for doc in self.db.collection("notifications").stream()
            if doc.exists
        ]

    def test_add_comment_notifies_creator(self) -> None:
        comment = PlaceService.add_comment(self.db, "cafe", "alice", " Great coffee ")

        self.assertEqual(comment["comment"], "Great coffee")
        self.assertEqual(comment["name"], "Ali")
        self.assertEqual(comment["avatar"], "alice.png")
        place = self.get_doc("places", "cafe") or {}
        self.assertEqual([c["id"] for c in place["comments"]], [comment["id"]])

        notifications = self._notifications()
        self.assertEqual(len(notifications), 1)
        self.assertEqual(notifications[0]["type"], "comment")
        self.assertEqual(notifications[0]["toUserId"], "bob")
        self.assertEqual(notifications[0]["commentId"], comment["id"])

    def test_creator_commenting_is_not_notified(self) -> None:
        PlaceService.add_comment(self.db, "cafe", "bob", "My own place")

        self.assertEqual(self._notifications(), [])

    def test_add_comment_validation(self) -> None:
        with self.assertRaises(ValidationError):
            PlaceService.add_comment(self.db, "cafe", "alice", "   ")
        with self.assertRaises(NotFoundError):
            PlaceService.add_comment(self.db, "missing", "alice", "Hello")

    def test_list_comments_newest_first(self) -> None:
        with patch("placemate.places.services.now_ms", side_effect=[100, 200]):
            first = PlaceService.add_comment(self.db, "cafe", "alice", "First")
            second = PlaceService.add_comment(self.db, "cafe", "alice", "Second")

        comments = PlaceService.list_comments(self.db, "cafe")

        self.assertEqual([c["id"] for c in comments], [second["id"], first["id"]])

    def test_report_comment(self) -> None:
        comment = PlaceService.add_comment(self.db, "cafe", "alice", "Spam")

        report_id = PlaceService.report_comment(
            self.db, "cafe", comment["id"], "bob", "advertising"
        )

        report = self.get_doc("reports", report_id) or {}
        self.assertEqual(report["reportedUserId"], "alice")
        self.assertEqual(report["reportedComment"], "Spam")
        self.assertEqual(report["reporterName"], "Bob")
        self.assertEqual(report["reason"], "advertising")

    def test_report_unknown_comment(self) -> None:
        with self.assertRaises(NotFoundError):
            PlaceService.report_comment(self.db, "cafe", "nope", "bob", "spam")


class TestAddPlace(FirestoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.add_user("alice")
        self.add_user("bob")

    def _add(self, user_id: str = "alice", **overrides) -> str:
        fields = {
            "name": " Old Bazaar ",
            "country": "Turkey",
            "city": "Izmir",
            "district": "Konak",
            "photos": ["a.jpg", "a.jpg", "b.jpg"],
            "location": {"latitude": 38.42, "longitude": 27.13},
            "properties": ["shade", "shade", 4],
        }
        fields.update(overrides)
        return PlaceService.add_place(self.db, user_id, **fields)

    def test_add_place(self) -> None:
        place_id = self._add()

        place = self.get_doc("places", place_id) or {}
        self.assertEqual(place["name"], "Old Bazaar")
        self.assertEqual(place["addedBy"], "alice")
        self.assertEqual(place["photos"], ["a.jpg", "b.jpg"])
        self.assertEqual(place["properties"], ["shade"])
        self.assertEqual((place["latitude"], place["longitude"]), (38.42, 27.13))
        self.assertFalse(place["isPopular"])

    def test_add_place_validation(self) -> None:
        with self.assertRaises(ValidationError):
            self._add(district="  ")
        with self.assertRaises(ValidationError):
            self._add(photos=[])
        for location in (
            None,
            {"latitude": 38.42},
            {"latitude": float("nan"), "longitude": 27.13},
            {"latitude": 38.42, "longitude": float("inf")},
            {"latitude": 91, "longitude": 27.13},
        ):
            with self.assertRaises(ValidationError) as ctx:
                self._add(location=location)
            self.assertEqual(ctx.exception.code, "INVALID_LOCATION")

    def test_list_user_places(self) -> None:
        with patch("placemate.places.services.now_ms", side_effect=[100, 200, 300]):
            first = self._add()
            second = self._add()
            self._add(user_id="bob")

        places = PlaceService.list_user_places(self.db, "alice")

        self.assertEqual([p["id"] for p in places], [second, first])
        with self.assertRaises(NotFoundError):
            PlaceService.list_user_places(self.db, "ghost")

    def test_list_popular_places(self) -> None:
        self.add_place("tower", isPopular=True, createdAt=1)
        self.add_place("alley", isPopular=False, createdAt=2)

        popular = PlaceService.list_popular_places(self.db)

        self.assertEqual([p["id"] for p in popular], ["tower"])

    def test_list_new_places(self) -> None:
        for index, place_id in enumerate(["a", "b", "c"]):
            self.add_place(place_id, createdAt=index)

        places = PlaceService.list_new_places(self.db, limit=2)

        self.assertEqual([p["id"] for p in places], ["c", "b"])

    def test_add_route(self) -> None:
        headers = self.login_as("bob")

        response = self.client.post(
            "/places/add",
            json={
                "name": "Pier",
                "country": "Turkey",
                "city": "Izmir",
                "district": "Karsiyaka",
                "photos": ["pier.jpg"],
                "location": {"latitude": 38.45, "longitude": 27.11},
            },
            headers=headers,
        )

        self.assertEqual(response.status_code, 200)
        place_id = response.get_json()["id"]
        body = self.client.get("/places/user/bob", headers=headers).get_json()
        self.assertEqual([p["id"] for p in body["places"]], [place_id])

    def test_add_route_with_non_finite_location(self) -> None:
        headers = self.login_as("bob")

        response = self.client.post(
            "/places/add",
            data='{"name": "Pier", "country": "Turkey", "city": "Izmir", '
            '"district": "Karsiyaka", "photos": ["pier.jpg"], '
            '"location": {"latitude": NaN, "longitude": 27.11}}',
            content_type="application/json",
            headers=headers,
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "INVALID_LOCATION")
