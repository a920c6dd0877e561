"""Tests for FavoriteService."""

from __future__ import annotations

from placemate.errors import ValidationError
from placemate.favorites.services import FavoriteService
from tests.helpers import FirestoreTestCase


class TestFavoriteService(FirestoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.add_user("alice")
        self.add_place("cafe")
        self.add_place("museum")

    def test_favorite_round_trip(self) -> None:
        FavoriteService.set_favorite(self.db, "alice", "cafe", True)
        self.assertEqual(FavoriteService.list_favorite_ids(self.db, "alice"), ["cafe"])

        FavoriteService.set_favorite(self.db, "alice", "cafe", False)
        self.assertEqual(FavoriteService.list_favorite_ids(self.db, "alice"), [])

    def test_toggling_is_idempotent(self) -> None:
        FavoriteService.set_favorite(self.db, "alice", "cafe", True)
        FavoriteService.set_favorite(self.db, "alice", "cafe", True)
        self.assertEqual(self.get_doc("favorites", "alice"), {"cafe": True})

        FavoriteService.set_favorite(self.db, "alice", "cafe", False)
        FavoriteService.set_favorite(self.db, "alice", "cafe", False)
        self.assertEqual(FavoriteService.list_favorite_ids(self.db, "alice"), [])

    def test_unfavorite_without_document(self) -> None:
        FavoriteService.set_favorite(self.db, "alice", "cafe", False)

        self.assertEqual(FavoriteService.list_favorite_ids(self.db, "alice"), [])
        self.assertFalse(FavoriteService.is_favorite(self.db, "alice", "cafe"))

    def test_toggles_of_different_places_are_independent(self) -> None:
        FavoriteService.set_favorite(self.db, "alice", "cafe", True)
        FavoriteService.set_favorite(self.db, "alice", "museum", True)
        FavoriteService.set_favorite(self.db, "alice", "cafe", False)

        self.assertEqual(self.get_doc("favorites", "alice"), {"museum": True})

    def test_list_favorites_skips_deleted_places(self) -> None:
        FavoriteService.set_favorite(self.db, "alice", "cafe", True)
        FavoriteService.set_favorite(self.db, "alice", "closed-bar", True)

        favorites = FavoriteService.list_favorites(self.db, "alice")

        self.assertEqual([f["id"] for f in favorites], ["cafe"])
        self.assertEqual(favorites[0]["name"], "Cafe")

    def test_set_favorite_requires_ids(self) -> None:
        with self.assertRaises(ValidationError):
            FavoriteService.set_favorite(self.db, "alice", "", True)
