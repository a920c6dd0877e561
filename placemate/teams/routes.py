"""Routes for the teams blueprint."""

from firebase_admin import firestore
from flask import g, jsonify

from placemate.auth.decorators import login_required
from placemate.core.forms import validate_form

from . import bp
from .forms import (
    CreateTeamForm,
    InviteForm,
    RenameTeamForm,
    RequestActionForm,
    TeamIdForm,
    TeamMemberForm,
    UpdateLogoForm,
    UpdateTeamForm,
)
from .services import TeamService


@bp.route("/create", methods=["POST"])
@login_required
def create_team():
    """Create a team owned by the caller."""
    form = validate_form(CreateTeamForm())
    db = firestore.client()
    team_id = TeamService.create_team(
        db, form.teamName.data, g.user["uid"], form.logo.data
    )
    team = TeamService.get_team(db, team_id)
    return jsonify({"success": True, "teamId": team_id, "team": team})


@bp.route("/delete", methods=["POST"])
@login_required
def leave_or_delete_team():
    """Leave a team, or delete it when the caller owns it."""
    form = validate_form(TeamIdForm())
    result = TeamService.leave_team(firestore.client(), form.teamId.data, g.user["uid"])
    return jsonify({"success": True, **result})


@bp.route("/update", methods=["POST"])
@login_required
def update_team():
    """Rename a team and/or replace its logo."""
    form = validate_form(UpdateTeamForm())
    update = TeamService.update_team(
        firestore.client(),
        form.teamId.data,
        g.user["uid"],
        name=form.newName.data,
        logo_bytes=form.newLogoBase64.data,
    )
    return jsonify({"success": True, "update": update})


@bp.route("/rename", methods=["POST"])
@login_required
def rename_team():
    """Rename a team."""
    form = validate_form(RenameTeamForm())
    new_name = TeamService.rename_team(
        firestore.client(), form.teamId.data, g.user["uid"], form.newName.data
    )
    return jsonify({"success": True, "newName": new_name})


@bp.route("/logo", methods=["POST"])
@login_required
def update_logo():
    """Replace a team's logo."""
    form = validate_form(UpdateLogoForm())
    logo_url = TeamService.update_logo(
        firestore.client(), form.teamId.data, g.user["uid"], form.logo.data
    )
    return jsonify({"success": True, "logo": logo_url})


@bp.route("/remove-member", methods=["POST"])
@login_required
def remove_member():
    """Remove a member, or leave when the caller names themself."""
    form = validate_form(TeamMemberForm())
    members = TeamService.remove_member(
        firestore.client(), form.teamId.data, form.userId.data, g.user["uid"]
    )
    return jsonify({"success": True, "members": members})


@bp.route("/addMember", methods=["POST"])
@login_required
def add_member():
    """Add a user to the caller's team without an invitation."""
    form = validate_form(TeamMemberForm())
    team = TeamService.add_member_by_owner(
        firestore.client(), form.teamId.data, form.userId.data, g.user["uid"]
    )
    return jsonify({"success": True, "members": team["members"]})


@bp.route("/invite", methods=["POST"])
@login_required
def invite():
    """Invite a user to the caller's team and notify them."""
    from placemate.notifications.services import NotificationService

    form = validate_form(InviteForm())
    db = firestore.client()
    request_id = TeamService.invite(
        db, g.user["uid"], form.toId.data, form.teamId.data
    )
    NotificationService.send_team_invite(
        db, g.user["uid"], form.toId.data, form.teamId.data, request_id=request_id
    )
    return jsonify({"success": True, "requestId": request_id})


@bp.route("/requests", methods=["GET"])
@login_required
def list_requests():
    """List pending invitations addressed to the caller."""
    requests = TeamService.list_requests(firestore.client(), g.user["uid"])
    return jsonify({"success": True, "requests": requests})


@bp.route("/requests/accept", methods=["POST"])
@login_required
def accept_request():
    """Accept a pending invitation and let the inviter know."""
    from placemate.notifications.services import NotificationService

    form = validate_form(RequestActionForm())
    team = NotificationService.accept_team_request(
        firestore.client(), form.requestId.data, g.user["uid"]
    )
    return jsonify({"success": True, "team": team})


@bp.route("/requests/reject", methods=["POST"])
@login_required
def reject_request():
    """Reject a pending invitation and withdraw its notification."""
    from placemate.notifications.services import NotificationService

    form = validate_form(RequestActionForm())
    db = firestore.client()
    TeamService.reject_invite(db, form.requestId.data, g.user["uid"])
    NotificationService.clear_team_invite(db, form.requestId.data)
    return jsonify({"success": True})


@bp.route("/my", methods=["GET"])
@login_required
def my_teams():
    """List the caller's teams with member names and avatars."""
    teams = TeamService.list_user_teams(firestore.client(), g.user["uid"])
    return jsonify({"success": True, "teams": teams})


@bp.route("/my/ids", methods=["GET"])
@login_required
def my_team_ids():
    """List the IDs of the caller's teams from their userTeams lookup."""
    team_ids = TeamService.get_user_team_ids(firestore.client(), g.user["uid"])
    return jsonify({"success": True, "teamIds": team_ids})


@bp.route("/<string:team_id>", methods=["GET"])
@login_required
def view_team(team_id):
    """Display a single team."""
    team = TeamService.get_team(firestore.client(), team_id)
    return jsonify({"success": True, "team": team})


@bp.route("/<string:team_id>/members", methods=["GET"])
@login_required
def team_members(team_id):
    """List a team's member profiles."""
    members = TeamService.get_team_members(firestore.client(), team_id)
    return jsonify({"success": True, "members": members})
