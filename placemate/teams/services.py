"""Service layer for team membership operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore
from flask import current_app
from google.api_core import exceptions as google_exceptions

from placemate.core.constants import (
    REQUEST_ACCEPTED,
    REQUEST_PENDING,
    REQUEST_REJECTED,
    TEAM_REQUESTS,
    TEAMS,
    USER_TEAMS,
    USERS,
)
from placemate.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from placemate.user.helpers import display_name, get_user_by_id, get_users_map
from placemate.utils import now_ms

from .utils import delete_team_logo, upload_team_logo

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference
    from google.cloud.firestore_v1.transaction import Transaction

    from .models import Team, TeamRequest


class TeamService:
    """Service class for team-related operations."""

    @staticmethod
    def get_owner_id(team: dict[str, Any]) -> str | None:
        """Return the team owner, falling back to the first member on old documents."""
        if team.get("ownerId"):
            return cast(str, team["ownerId"])
        members = team.get("members") or []
        return members[0] if members else None

    @staticmethod
    def _get_team_doc(db: Client, team_id: str) -> tuple[DocumentReference, Team]:
        if not team_id:
            raise ValidationError("teamId is required.", code="TEAM_ID_REQUIRED")
        team_ref = db.collection(TEAMS).document(team_id)
        snapshot = cast("DocumentSnapshot", team_ref.get())
        if not snapshot.exists:
            raise NotFoundError("Team not found.", code="TEAM_NOT_FOUND")
        team = cast("Team", snapshot.to_dict() or {})
        team["id"] = snapshot.id
        return team_ref, team

    @staticmethod
    def _require_owner(team: Team, user_id: str) -> str:
        owner_id = TeamService.get_owner_id(cast(dict[str, Any], team))
        if not owner_id:
            raise ValidationError("Team has no owner.", code="INVALID_TEAM_OWNER")
        if owner_id != user_id:
            raise ForbiddenError("Only the team owner can do that.")
        return owner_id

    @staticmethod
    def _get_request_doc(
        db: Client, request_id: str
    ) -> tuple[DocumentReference, TeamRequest]:
        if not request_id:
            raise ValidationError("requestId is required.", code="MISSING_REQUEST_ID")
        request_ref = db.collection(TEAM_REQUESTS).document(request_id)
        snapshot = cast("DocumentSnapshot", request_ref.get())
        if not snapshot.exists:
            raise NotFoundError("Team request not found.", code="REQUEST_NOT_FOUND")
        request = cast("TeamRequest", snapshot.to_dict() or {})
        request["id"] = snapshot.id
        return request_ref, request

    @staticmethod
    def get_request(db: Client, request_id: str) -> TeamRequest:
        """Fetch a single team request."""
        _, request = TeamService._get_request_doc(db, request_id)
        return request

    @staticmethod
    def _index_membership(db: Client, user_id: str, team_id: str) -> None:
        """Record team_id in the user's userTeams lookup."""
        db.collection(USER_TEAMS).document(user_id).set({team_id: True}, merge=True)

    @staticmethod
    def _unindex_membership(db: Client, user_id: str, team_id: str) -> None:
        db.collection(USER_TEAMS).document(user_id).set(
            {team_id: firestore.DELETE_FIELD}, merge=True
        )

    @staticmethod
    def create_team(
        db: Client, name: str, creator_id: str, logo_bytes: bytes | None = None
    ) -> str:
        """Create a team owned by its creator and return its ID."""
        name = (name or "").strip()
        if not name or not creator_id:
            raise ValidationError("Team name and creator are required.")

        team_ref = db.collection(TEAMS).document()
        logo_url = None
        if logo_bytes:
            try:
                logo_url = upload_team_logo(team_ref.id, logo_bytes)
            except Exception as e:
                current_app.logger.error(
                    f"Error uploading logo for team {team_ref.id}: {e}"
                )

        team_data = {
            "id": team_ref.id,
            "teamName": name,
            "logo": logo_url,
            "ownerId": creator_id,
            "members": [creator_id],
            "createdAt": now_ms(),
        }
        team_ref.set(team_data)
        TeamService._index_membership(db, creator_id, team_ref.id)
        current_app.logger.info(f"Team {team_ref.id} created by {creator_id}.")
        return team_ref.id

    @staticmethod
    def get_team(db: Client, team_id: str) -> Team:
        """Fetch a single team."""
        _, team = TeamService._get_team_doc(db, team_id)
        return team

    @staticmethod
    def get_team_members(db: Client, team_id: str) -> list[dict[str, Any]]:
        """Fetch member profiles in membership order, skipping deleted users."""
        _, team = TeamService._get_team_doc(db, team_id)
        member_ids = team.get("members") or []
        if not member_ids:
            return []

        refs = [db.collection(USERS).document(uid) for uid in member_ids]
        snapshots = {
            snap.id: snap
            for snap in cast(list["DocumentSnapshot"], list(db.get_all(refs)))
            if snap.exists
        }
        members = []
        for uid in member_ids:
            snapshot = snapshots.get(uid)
            if snapshot is None:
                current_app.logger.warning(
                    f"Team {team_id} lists missing user {uid}; skipping."
                )
                continue
            members.append({"id": uid, **(snapshot.to_dict() or {})})
        return members

    @staticmethod
    def list_user_teams(db: Client, user_id: str) -> list[Team]:
        """Fetch every team whose member list contains the user."""
        query = db.collection(TEAMS).where(
            filter=firestore.FieldFilter("members", "array_contains", user_id)
        )
        teams = []
        for doc in query.stream():
            team = cast("Team", doc.to_dict() or {})
            team["id"] = doc.id
            team["members"] = team.get("members") or []
            team["userMap"] = get_users_map(db, team["members"])
            teams.append(team)

        teams.sort(key=lambda t: t.get("createdAt") or 0)
        return teams

    @staticmethod
    def get_user_team_ids(db: Client, user_id: str) -> list[str]:
        """Read the userTeams lookup, dropping entries the teams no longer back."""
        index_doc = cast(
            "DocumentSnapshot", db.collection(USER_TEAMS).document(user_id).get()
        )
        if not index_doc.exists:
            return []

        team_ids = [tid for tid, flag in (index_doc.to_dict() or {}).items() if flag]
        valid = []
        for team_id in team_ids:
            snapshot = cast(
                "DocumentSnapshot", db.collection(TEAMS).document(team_id).get()
            )
            team = (snapshot.to_dict() or {}) if snapshot.exists else {}
            if user_id in (team.get("members") or []):
                valid.append(team_id)
            else:
                current_app.logger.warning(
                    f"Stale userTeams entry {team_id} for user {user_id}."
                )
        return valid

    @staticmethod
    def _add_member_transaction(
        transaction: Transaction, team_ref: DocumentReference, user_id: str
    ) -> Team:
        """Append a member unless already present."""
        snapshot = cast("DocumentSnapshot", team_ref.get(transaction=transaction))
        if not snapshot.exists:
            raise NotFoundError("Team not found.", code="TEAM_NOT_FOUND")

        team = cast("Team", snapshot.to_dict() or {})
        members = list(team.get("members") or [])
        if user_id not in members:
            members.append(user_id)
            transaction.update(team_ref, {"members": members})

        team["id"] = snapshot.id
        team["members"] = members
        return team

    @staticmethod
    def _remove_member_transaction(
        transaction: Transaction, team_ref: DocumentReference, user_id: str
    ) -> list[str]:
        """Drop a non-owner member from the list."""
        snapshot = cast("DocumentSnapshot", team_ref.get(transaction=transaction))
        if not snapshot.exists:
            raise NotFoundError("Team not found.", code="TEAM_NOT_FOUND")

        team = snapshot.to_dict() or {}
        if TeamService.get_owner_id(team) == user_id:
            raise ForbiddenError("The team owner cannot be removed.")

        members = list(team.get("members") or [])
        remaining = [uid for uid in members if uid != user_id]
        if remaining != members:
            transaction.update(team_ref, {"members": remaining})
        return remaining

    @staticmethod
    def add_member(db: Client, team_id: str, user_id: str) -> Team:
        """Add a user to a team and to their userTeams lookup.

        Safe to repeat: a user already in the team is not added twice.
        """
        team_ref = db.collection(TEAMS).document(team_id)
        add = firestore.transactional(TeamService._add_member_transaction)
        team = add(db.transaction(), team_ref, user_id)
        TeamService._index_membership(db, user_id, team_id)
        return team

    @staticmethod
    def add_member_by_owner(
        db: Client, team_id: str, user_id: str, owner_id: str
    ) -> Team:
        """Add a user directly, without an invitation."""
        if not user_id:
            raise ValidationError("userId is required.")
        _, team = TeamService._get_team_doc(db, team_id)
        TeamService._require_owner(team, owner_id)
        if get_user_by_id(db, user_id) is None:
            raise NotFoundError("User not found.", code="USER_NOT_FOUND")
        return TeamService.add_member(db, team_id, user_id)

    @staticmethod
    def invite(db: Client, from_id: str, to_id: str, team_id: str) -> str:
        """Create a pending invitation from the team owner.

        Repeating an invite returns the request that is still pending. No
        notification is sent here; callers fan one out themselves.
        """
        if not from_id or not to_id or not team_id:
            raise ValidationError("fromId, toId and teamId are required.")
        if from_id == to_id:
            raise ValidationError("You cannot invite yourself.", code="INVALID_INVITE")

        _, team = TeamService._get_team_doc(db, team_id)
        TeamService._require_owner(team, from_id)
        if to_id in (team.get("members") or []):
            raise ConflictError("User is already a member.", code="ALREADY_MEMBER")

        to_user = get_user_by_id(db, to_id)
        if to_user is None:
            raise NotFoundError("User not found.", code="USER_NOT_FOUND")
        from_user = get_user_by_id(db, from_id)

        existing = (
            db.collection(TEAM_REQUESTS)
            .where(filter=firestore.FieldFilter("teamId", "==", team_id))
            .where(filter=firestore.FieldFilter("toId", "==", to_id))
            .where(filter=firestore.FieldFilter("status", "==", REQUEST_PENDING))
            .limit(1)
            .stream()
        )
        for doc in existing:
            return cast(str, doc.id)

        request_ref = db.collection(TEAM_REQUESTS).document()
        request_ref.set(
            {
                "id": request_ref.id,
                "teamId": team_id,
                "teamName": team.get("teamName", ""),
                "fromId": from_id,
                "fromName": display_name(from_user),
                "toId": to_id,
                "toName": display_name(to_user),
                "status": REQUEST_PENDING,
                "createdAt": now_ms(),
            }
        )
        return request_ref.id

    @staticmethod
    def list_requests(db: Client, user_id: str) -> list[dict[str, Any]]:
        """Fetch pending invitations addressed to the user, newest first."""
        query = (
            db.collection(TEAM_REQUESTS)
            .where(filter=firestore.FieldFilter("toId", "==", user_id))
            .where(filter=firestore.FieldFilter("status", "==", REQUEST_PENDING))
        )
        requests = [{**(doc.to_dict() or {}), "id": doc.id} for doc in query.stream()]
        senders = get_users_map(db, [r.get("fromId") for r in requests if r.get("fromId")])
        for request in requests:
            request["user"] = senders.get(request.get("fromId"))

        requests.sort(key=lambda r: r.get("createdAt") or 0, reverse=True)
        return requests

    @staticmethod
    def accept_invite(db: Client, request_id: str, user_id: str) -> Team:
        """Accept an invitation and return the resulting team.

        Re-running after success, or after a partial failure, completes the
        remaining steps without duplicating the member.
        """
        request_ref, request = TeamService._get_request_doc(db, request_id)
        if request.get("toId") != user_id:
            raise ForbiddenError("This invite is addressed to someone else.")

        status = request.get("status", REQUEST_PENDING)
        if status == REQUEST_REJECTED:
            raise ConflictError(
                "This invite was already rejected.", code="REQUEST_REJECTED"
            )

        team = TeamService.add_member(db, request["teamId"], user_id)
        if status != REQUEST_ACCEPTED:
            request_ref.update({"status": REQUEST_ACCEPTED, "resolvedAt": now_ms()})
        current_app.logger.info(f"User {user_id} joined team {request['teamId']}.")
        return team

    @staticmethod
    def resolve_pending_requests(db: Client, team_id: str, user_id: str) -> int:
        """Mark the user's pending requests for a team accepted.

        Used when membership was granted through another path, such as a
        notification. Returns the number of requests updated.
        """
        query = (
            db.collection(TEAM_REQUESTS)
            .where(filter=firestore.FieldFilter("teamId", "==", team_id))
            .where(filter=firestore.FieldFilter("toId", "==", user_id))
            .where(filter=firestore.FieldFilter("status", "==", REQUEST_PENDING))
        )
        resolved = 0
        for doc in list(query.stream()):
            db.collection(TEAM_REQUESTS).document(doc.id).update(
                {"status": REQUEST_ACCEPTED, "resolvedAt": now_ms()}
            )
            resolved += 1
        return resolved

    @staticmethod
    def reject_invite(db: Client, request_id: str, user_id: str) -> None:
        """Mark an invitation rejected; the invitee or the inviter may do this."""
        request_ref, request = TeamService._get_request_doc(db, request_id)
        if user_id not in (request.get("toId"), request.get("fromId")):
            raise ForbiddenError("You cannot resolve this invite.")

        status = request.get("status", REQUEST_PENDING)
        if status == REQUEST_REJECTED:
            return
        if status == REQUEST_ACCEPTED:
            raise ConflictError(
                "This invite was already accepted.", code="REQUEST_ACCEPTED"
            )
        request_ref.update({"status": REQUEST_REJECTED, "resolvedAt": now_ms()})

    @staticmethod
    def remove_member(
        db: Client, team_id: str, target_id: str, acting_id: str
    ) -> list[str]:
        """Remove a member; the owner removing themself deletes the team.

        Returns:
            The remaining member IDs (empty when the team was deleted).
        """
        if not target_id:
            raise ValidationError("userId is required.")
        team_ref, team = TeamService._get_team_doc(db, team_id)
        owner_id = TeamService.get_owner_id(cast(dict[str, Any], team))

        if acting_id not in (owner_id, target_id):
            raise ForbiddenError("Only the owner can remove other members.")
        if target_id == owner_id:
            TeamService.delete_team(db, team_id, acting_id)
            return []

        remove = firestore.transactional(TeamService._remove_member_transaction)
        members = remove(db.transaction(), team_ref, target_id)
        TeamService._unindex_membership(db, target_id, team_id)
        return members

    @staticmethod
    def leave_team(db: Client, team_id: str, user_id: str) -> dict[str, Any]:
        """Leave a team, deleting it instead when the user owns it."""
        _, team = TeamService._get_team_doc(db, team_id)
        if TeamService.get_owner_id(cast(dict[str, Any], team)) == user_id:
            TeamService.delete_team(db, team_id, user_id)
            return {"action": "DELETE_TEAM"}

        members = TeamService.remove_member(db, team_id, user_id, user_id)
        return {"action": "LEAVE_TEAM", "members": members}

    @staticmethod
    def delete_team(db: Client, team_id: str, user_id: str) -> None:
        """Delete a team owned by the user.

        Pending requests and notifications that mention the team are left
        in place.
        """
        team_ref, team = TeamService._get_team_doc(db, team_id)
        TeamService._require_owner(team, user_id)

        if team.get("logo"):
            delete_team_logo(cast(str, team["logo"]))

        team_ref.delete()
        current_app.logger.info(f"Team {team_id} deleted by {user_id}.")

        for member_id in team.get("members") or []:
            try:
                TeamService._unindex_membership(db, member_id, team_id)
            except google_exceptions.GoogleAPICallError as e:
                current_app.logger.warning(
                    f"Could not clear userTeams entry {team_id} for {member_id}: {e}"
                )

    @staticmethod
    def update_team(
        db: Client,
        team_id: str,
        user_id: str,
        name: str | None = None,
        logo_bytes: bytes | None = None,
    ) -> dict[str, Any]:
        """Rename a team and/or replace its logo. Returns the applied fields."""
        team_ref, team = TeamService._get_team_doc(db, team_id)
        TeamService._require_owner(team, user_id)

        update_data: dict[str, Any] = {}
        if name and name.strip():
            update_data["teamName"] = name.strip()
        if logo_bytes:
            update_data["logo"] = upload_team_logo(team_id, logo_bytes)
        if not update_data:
            raise ValidationError("Nothing to update.", code="NOTHING_TO_UPDATE")

        team_ref.update(update_data)
        return update_data

    @staticmethod
    def rename_team(db: Client, team_id: str, user_id: str, name: str) -> str:
        """Rename a team owned by the user."""
        if not name or not name.strip():
            raise ValidationError("newName is required.")
        update = TeamService.update_team(db, team_id, user_id, name=name)
        return cast(str, update["teamName"])

    @staticmethod
    def update_logo(
        db: Client, team_id: str, user_id: str, logo_bytes: bytes
    ) -> str:
        """Replace the logo of a team owned by the user."""
        if not logo_bytes:
            raise ValidationError("Logo data is required.")
        update = TeamService.update_team(db, team_id, user_id, logo_bytes=logo_bytes)
        return cast(str, update["logo"])
