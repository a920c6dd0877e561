"""Admin routes for the application."""

from firebase_admin import firestore
from flask import g, jsonify

from placemate.auth.decorators import login_required
from placemate.core.forms import validate_form

from . import bp
from .forms import (
    BanUserForm,
    PlaceIdForm,
    RemoveCommentForm,
    ReportIdForm,
    UserIdForm,
)
from .services import AdminService


@bp.route("/stats", methods=["GET"])
@login_required(admin_required=True)
def stats():
    """Return dashboard totals."""
    admin_stats = AdminService.get_admin_stats(firestore.client())
    return jsonify({"success": True, "stats": admin_stats})


@bp.route("/users", methods=["GET"])
@login_required(admin_required=True)
def list_users():
    """List every user."""
    return jsonify(
        {"success": True, "users": AdminService.list_users(firestore.client())}
    )


@bp.route("/users/ban", methods=["POST"])
@login_required(admin_required=True)
def ban_user():
    """Ban a user for a number of hours."""
    form = validate_form(BanUserForm())
    expires_at = AdminService.ban_user(
        firestore.client(), form.targetId.data, form.hours.data, form.banType.data
    )
    return jsonify({"success": True, "banExpiresAt": expires_at})


@bp.route("/users/unban", methods=["POST"])
@login_required(admin_required=True)
def unban_user():
    """Lift a user's ban."""
    form = validate_form(UserIdForm())
    AdminService.unban_user(firestore.client(), form.userId.data)
    return jsonify({"success": True})


@bp.route("/users/delete", methods=["POST"])
@login_required(admin_required=True)
def delete_user():
    """Delete a user's profile and auth account."""
    form = validate_form(UserIdForm())
    AdminService.delete_user(firestore.client(), form.userId.data)
    return jsonify({"success": True, "deletedBy": g.admin["uid"]})


@bp.route("/reports", methods=["GET"])
@login_required(admin_required=True)
def list_reports():
    """List open reports, newest first."""
    return jsonify(
        {"success": True, "reports": AdminService.list_reports(firestore.client())}
    )


@bp.route("/comments/delete", methods=["POST"])
@login_required(admin_required=True)
def remove_reported_comment():
    """Remove a reported comment and close its report."""
    form = validate_form(RemoveCommentForm())
    removed = AdminService.remove_reported_comment(
        firestore.client(), form.placeId.data, form.commentId.data, form.reportId.data
    )
    return jsonify({"success": True, "removed": removed})


@bp.route("/reports/dismiss", methods=["POST"])
@login_required(admin_required=True)
def dismiss_report():
    """Close a report and keep the comment."""
    form = validate_form(ReportIdForm())
    AdminService.dismiss_report(firestore.client(), form.reportId.data)
    return jsonify({"success": True})


@bp.route("/places", methods=["GET"])
@login_required(admin_required=True)
def list_places():
    """List every place."""
    return jsonify(
        {"success": True, "places": AdminService.list_places(firestore.client())}
    )


@bp.route("/places/delete", methods=["POST"])
@login_required(admin_required=True)
def delete_place():
    """Delete a place."""
    form = validate_form(PlaceIdForm())
    AdminService.delete_place(firestore.client(), form.placeId.data)
    return jsonify({"success": True})
