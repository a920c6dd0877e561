"""Tests for user profiles."""

from __future__ import annotations

from placemate.errors import NotFoundError, ValidationError
from placemate.user.services import UserService
from tests.helpers import FirestoreTestCase


class TestUserService(FirestoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.add_user("alice", role="user")

    def test_get_profile(self) -> None:
        profile = UserService.get_profile(self.db, "alice")

        self.assertEqual(profile["id"], "alice")
        with self.assertRaises(NotFoundError):
            UserService.get_profile(self.db, "ghost")

    def test_update_profile_ignores_protected_fields(self) -> None:
        update = UserService.update_profile(
            self.db, "alice", {"nickname": "Ali", "role": "admin", "bio": None}
        )

        self.assertEqual(update["nickname"], "Ali")
        user = self.get_doc("users", "alice") or {}
        self.assertEqual(user["nickname"], "Ali")
        self.assertEqual(user["role"], "user")
        self.assertNotIn("bio", user)

    def test_update_profile_requires_changes(self) -> None:
        with self.assertRaises(ValidationError):
            UserService.update_profile(self.db, "alice", {"role": "admin"})

    def test_update_route(self) -> None:
        headers = self.login_as("alice")

        response = self.client.post(
            "/user/update",
            json={"nickname": "Ali", "avatar": "https://example.com/a.png"},
            headers=headers,
        )

        self.assertEqual(response.status_code, 200)
        user = self.client.get("/user/alice", headers=headers).get_json()["user"]
        self.assertEqual(user["nickname"], "Ali")
        self.assertEqual(user["avatar"], "https://example.com/a.png")
