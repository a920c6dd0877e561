"""Common utilities for tests."""

from __future__ import annotations

import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from mockfirestore import MockFirestore

from placemate import create_app
from tests.mock_utils import MockTransaction, patch_mockfirestore

LOGO_URL = "https://storage.googleapis.com/test-bucket/teamLogos/team.jpg"


class FirestoreTestCase(unittest.TestCase):
    """Base test case backed by an in-memory Firestore and a test app."""

    def setUp(self) -> None:
        patch_mockfirestore()
        self.db = MockFirestore()
        self.db.transaction = lambda **kwargs: MockTransaction()

        self.app = create_app({"TESTING": True})
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

        self.mock_storage = MagicMock()
        self.mock_bucket = self.mock_storage.bucket.return_value
        self.mock_bucket.name = "test-bucket"
        self.mock_bucket.blob.return_value.public_url = LOGO_URL

        patchers = [
            patch("firebase_admin.firestore.transactional", lambda fn: fn),
            patch("firebase_admin.firestore.client", return_value=self.db),
            patch("placemate.teams.utils.storage", self.mock_storage),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self.app_context.pop()

    def add_user(self, uid: str, **fields: Any) -> dict[str, Any]:
        data = {"name": uid.title(), **fields}
        self.db.collection("users").document(uid).set(data)
        return data

    def add_place(self, place_id: str, **fields: Any) -> dict[str, Any]:
        data = {"name": place_id.title(), "city": "Izmir", "photos": [], **fields}
        self.db.collection("places").document(place_id).set(data)
        return data

    def get_doc(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        snapshot = self.db.collection(collection).document(doc_id).get()
        return snapshot.to_dict() if snapshot.exists else None

    def login_as(self, uid: str) -> dict[str, str]:
        """Make bearer tokens verify as uid and return matching headers."""
        patcher = patch(
            "firebase_admin.auth.verify_id_token", return_value={"uid": uid}
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        return {"Authorization": f"Bearer token-{uid}"}
