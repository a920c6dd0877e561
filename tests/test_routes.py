"""Tests for the JSON routes, authentication and error responses."""

from __future__ import annotations

import base64
from unittest.mock import patch

from firebase_admin import auth
from google.api_core import exceptions as google_exceptions

from placemate.teams.services import TeamService
from tests.helpers import LOGO_URL, FirestoreTestCase


class TestAuthentication(FirestoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.add_user("alice", role="user", banType="none")

    def test_missing_token_is_unauthorized(self) -> None:
        response = self.client.get("/auth/me")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.get_json(),
            {
                "success": False,
                "error": "NO_TOKEN",
                "message": "Authentication required.",
            },
        )

    def test_invalid_token_is_unauthorized(self) -> None:
        with patch(
            "firebase_admin.auth.verify_id_token",
            side_effect=auth.InvalidIdTokenError("bad token"),
        ):
            response = self.client.get(
                "/auth/me", headers={"Authorization": "Bearer nope"}
            )

        self.assertEqual(response.status_code, 401)

    def test_me_returns_profile(self) -> None:
        headers = self.login_as("alice")

        response = self.client.get("/auth/me", headers=headers)

        self.assertEqual(response.status_code, 200)
        user = response.get_json()["user"]
        self.assertEqual(user["uid"], "alice")
        self.assertEqual(user["banType"], "none")

    def test_unknown_route_is_json(self) -> None:
        response = self.client.get("/nowhere")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "ROUTE_NOT_FOUND")


class TestTeamRoutes(FirestoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.add_user("owner")
        self.add_user("bob")

    def test_create_invite_accept(self) -> None:
        headers = self.login_as("owner")
        logo = base64.b64encode(b"jpeg-bytes").decode()
        response = self.client.post(
            "/teams/create",
            json={"teamName": "Explorers", "logo": f"data:image/jpeg;base64,{logo}"},
            headers=headers,
        )
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        team_id = body["teamId"]
        self.assertEqual(body["team"]["logo"], LOGO_URL)
        upload = self.mock_bucket.blob.return_value.upload_from_string
        self.assertEqual(upload.call_args[0][0], b"jpeg-bytes")

        response = self.client.post(
            "/teams/invite", json={"teamId": team_id, "toId": "bob"}, headers=headers
        )
        self.assertEqual(response.status_code, 200)
        request_id = response.get_json()["requestId"]

        headers = self.login_as("bob")
        notifications = self.client.get("/notifications", headers=headers).get_json()
        self.assertEqual(
            [n["type"] for n in notifications["notifications"]], ["team_invite"]
        )

        response = self.client.post(
            "/teams/requests/accept", json={"requestId": request_id}, headers=headers
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["team"]["members"], ["owner", "bob"])

        response = self.client.get("/teams/my", headers=headers)
        self.assertEqual([t["id"] for t in response.get_json()["teams"]], [team_id])

        notifications = self.client.get("/notifications", headers=headers).get_json()
        self.assertEqual(notifications["notifications"], [])
        headers = self.login_as("owner")
        notifications = self.client.get("/notifications", headers=headers).get_json()
        self.assertEqual(
            [n["type"] for n in notifications["notifications"]], ["team_invite_accept"]
        )

    def test_repeated_invite_sends_one_notification(self) -> None:
        team_id = TeamService.create_team(self.db, "Explorers", "owner")
        headers = self.login_as("owner")

        request_ids = [
            self.client.post(
                "/teams/invite",
                json={"teamId": team_id, "toId": "bob"},
                headers=headers,
            ).get_json()["requestId"]
            for _ in range(2)
        ]

        self.assertEqual(request_ids[0], request_ids[1])
        headers = self.login_as("bob")
        notifications = self.client.get("/notifications", headers=headers).get_json()
        self.assertEqual(len(notifications["notifications"]), 1)
        self.assertEqual(notifications["notifications"][0]["requestId"], request_ids[0])

    def test_reject_withdraws_invite_notification(self) -> None:
        team_id = TeamService.create_team(self.db, "Explorers", "owner")
        headers = self.login_as("owner")
        request_id = self.client.post(
            "/teams/invite", json={"teamId": team_id, "toId": "bob"}, headers=headers
        ).get_json()["requestId"]

        headers = self.login_as("bob")
        response = self.client.post(
            "/teams/requests/reject", json={"requestId": request_id}, headers=headers
        )

        self.assertEqual(response.status_code, 200)
        notifications = self.client.get("/notifications", headers=headers).get_json()
        self.assertEqual(notifications["notifications"], [])

    def test_update_logo(self) -> None:
        team_id = TeamService.create_team(self.db, "Explorers", "owner")
        headers = self.login_as("owner")
        logo = base64.b64encode(b"new-logo").decode()

        response = self.client.post(
            "/teams/logo", json={"teamId": team_id, "logo": logo}, headers=headers
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["logo"], LOGO_URL)
        self.assertEqual((self.get_doc("teams", team_id) or {})["logo"], LOGO_URL)

    def test_my_team_ids(self) -> None:
        team_id = TeamService.create_team(self.db, "Explorers", "owner")
        headers = self.login_as("owner")

        response = self.client.get("/teams/my/ids", headers=headers)

        self.assertEqual(response.get_json(), {"success": True, "teamIds": [team_id]})

    def test_listing_routes_report_success(self) -> None:
        team_id = TeamService.create_team(self.db, "Explorers", "owner")
        headers = self.login_as("owner")

        paths = ("/teams/requests", f"/teams/{team_id}", f"/teams/{team_id}/members")
        for path in paths:
            body = self.client.get(path, headers=headers).get_json()
            self.assertTrue(body["success"])

    def test_invalid_logo_is_rejected(self) -> None:
        headers = self.login_as("owner")

        response = self.client.post(
            "/teams/create",
            json={"teamName": "Explorers", "logo": "not base64!"},
            headers=headers,
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "MISSING_FIELDS")

    def test_missing_fields(self) -> None:
        headers = self.login_as("owner")

        response = self.client.post("/teams/invite", json={}, headers=headers)

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.get_json()["success"])

    def test_non_owner_cannot_rename(self) -> None:
        team_id = TeamService.create_team(self.db, "Explorers", "owner")
        headers = self.login_as("bob")

        response = self.client.post(
            "/teams/rename",
            json={"teamId": team_id, "newName": "Mine"},
            headers=headers,
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["error"], "NO_PERMISSION")

    def test_missing_team_is_not_found(self) -> None:
        headers = self.login_as("owner")

        response = self.client.get("/teams/missing", headers=headers)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "TEAM_NOT_FOUND")

    def test_store_unavailable(self) -> None:
        headers = self.login_as("owner")

        with patch(
            "placemate.teams.routes.TeamService.list_user_teams",
            side_effect=google_exceptions.ServiceUnavailable("down"),
        ):
            response = self.client.get("/teams/my", headers=headers)

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.get_json()["error"], "STORE_UNAVAILABLE")

    def test_transaction_contention_is_conflict(self) -> None:
        team_id = TeamService.create_team(self.db, "Explorers", "owner")
        headers = self.login_as("owner")

        with patch(
            "placemate.teams.routes.TeamService.add_member_by_owner",
            side_effect=google_exceptions.Aborted("contention"),
        ):
            response = self.client.post(
                "/teams/addMember",
                json={"teamId": team_id, "userId": "bob"},
                headers=headers,
            )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()["error"], "CONFLICT")


class TestFavoriteAndVisitRoutes(FirestoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.add_user("alice")
        self.add_user("bob")
        self.add_place("cafe")
        self.headers = self.login_as("alice")

    def test_favorite_routes(self) -> None:
        response = self.client.post(
            "/favorites/add", json={"placeId": "cafe"}, headers=self.headers
        )
        self.assertEqual(response.status_code, 200)

        favorites = self.client.get("/favorites", headers=self.headers).get_json()
        self.assertTrue(favorites["success"])
        self.assertEqual([f["id"] for f in favorites["favorites"]], ["cafe"])

        self.client.post(
            "/favorites/remove", json={"placeId": "cafe"}, headers=self.headers
        )
        favorites = self.client.get("/favorites/alice", headers=self.headers).get_json()
        self.assertEqual(favorites, {"success": True, "favorites": []})

    def test_place_view_reports_favorite(self) -> None:
        place = self.client.get("/places/cafe", headers=self.headers).get_json()
        self.assertFalse(place["place"]["isFavorite"])

        self.client.post(
            "/favorites/add", json={"placeId": "cafe"}, headers=self.headers
        )
        place = self.client.get("/places/cafe", headers=self.headers).get_json()
        self.assertTrue(place["place"]["isFavorite"])

    def test_visit_routes(self) -> None:
        response = self.client.post(
            "/visits/addOrUpdate",
            json={
                "placeId": "cafe",
                "teammates": ["alice", "bob"],
                "startDate": "2024-05-01",
                "endDate": "2024-05-02",
                "experience": "Lovely",
            },
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        visit_id = response.get_json()["id"]

        visited = self.client.get("/visited/bob", headers=self.headers).get_json()
        self.assertEqual(visited["visits"], {visit_id: True})

        response = self.client.post(
            "/visits/detail", json={"ids": [visit_id]}, headers=self.headers
        )
        visits = response.get_json()["visits"]
        self.assertEqual(visits[0]["placeName"], "Cafe")
        self.assertEqual(visits[0]["experience"], "Lovely")

    def test_visit_with_reversed_dates(self) -> None:
        response = self.client.post(
            "/visits/addOrUpdate",
            json={
                "placeId": "cafe",
                "teammates": ["alice"],
                "startDate": "2024-05-03",
                "endDate": "2024-05-02",
            },
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "INVALID_DATE_RANGE")

    def test_visit_with_non_finite_date(self) -> None:
        response = self.client.post(
            "/visits/addOrUpdate",
            data='{"placeId": "cafe", "teammates": ["alice"], '
            '"startDate": NaN, "endDate": 1714557600000}',
            content_type="application/json",
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "INVALID_DATE")


class TestAdminRoutes(FirestoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.add_user("root", role="admin")
        self.add_user("alice")

    def test_non_admin_is_forbidden(self) -> None:
        headers = self.login_as("alice")

        response = self.client.get("/admin/users", headers=headers)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["error"], "ADMIN_REQUIRED")

    def test_admin_without_token_is_unauthorized(self) -> None:
        response = self.client.get("/admin/users")

        self.assertEqual(response.status_code, 401)

    def test_ban_user(self) -> None:
        headers = self.login_as("root")

        response = self.client.post(
            "/admin/users/ban",
            json={"targetId": "alice", "hours": 24},
            headers=headers,
        )

        self.assertEqual(response.status_code, 200)
        user = self.get_doc("users", "alice") or {}
        self.assertEqual(user["banType"], "all")
        self.assertEqual(user["banExpiresAt"], response.get_json()["banExpiresAt"])

    def test_ban_with_infinite_hours(self) -> None:
        headers = self.login_as("root")

        response = self.client.post(
            "/admin/users/ban",
            data='{"targetId": "alice", "hours": Infinity}',
            content_type="application/json",
            headers=headers,
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "INVALID_BAN")
