"""Routes for the notifications blueprint."""

from firebase_admin import firestore
from flask import g, jsonify

from placemate.auth.decorators import login_required
from placemate.core.forms import validate_form

from . import bp
from .forms import NotificationIdForm, SendInviteForm
from .services import NotificationService


@bp.route("", methods=["GET"])
@login_required
def list_notifications():
    """List the caller's notifications, newest first."""
    notifications = NotificationService.list_notifications(
        firestore.client(), g.user["uid"]
    )
    return jsonify({"success": True, "notifications": notifications})


@bp.route("/send", methods=["POST"])
@login_required
def send_invite():
    """Send a team invite notification from the team owner."""
    form = validate_form(SendInviteForm())
    notif_id = NotificationService.send_team_invite(
        firestore.client(), g.user["uid"], form.toUserId.data, form.teamId.data
    )
    return jsonify({"success": True, "notifId": notif_id})


@bp.route("/accept", methods=["POST"])
@login_required
def accept():
    """Accept a team invite notification."""
    form = validate_form(NotificationIdForm())
    NotificationService.accept_notification(
        firestore.client(), form.notifId.data, g.user["uid"]
    )
    return jsonify({"success": True})


@bp.route("/delete", methods=["POST"])
@login_required
def delete():
    """Delete one of the caller's notifications."""
    form = validate_form(NotificationIdForm())
    NotificationService.delete_notification(
        firestore.client(), form.notifId.data, g.user["uid"]
    )
    return jsonify({"success": True})


@bp.route("/seen", methods=["POST"])
@login_required
def seen():
    """Mark one of the caller's notifications as seen."""
    form = validate_form(NotificationIdForm())
    NotificationService.mark_seen(firestore.client(), form.notifId.data, g.user["uid"])
    return jsonify({"success": True})
