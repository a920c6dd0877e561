"""Routes for the user blueprint."""

from firebase_admin import firestore
from flask import g, jsonify

from placemate.auth.decorators import login_required
from placemate.core.forms import validate_form

from . import bp
from .forms import UpdateProfileForm
from .services import UserService


@bp.route("/<string:user_id>", methods=["GET"])
@login_required
def view_user(user_id):
    """Display a user's profile."""
    user = UserService.get_profile(firestore.client(), user_id)
    return jsonify({"success": True, "user": user})


@bp.route("/update", methods=["POST"])
@login_required
def update_profile():
    """Update the caller's own profile."""
    form = validate_form(UpdateProfileForm())
    changes = {
        "nickname": form.nickname.data or None,
        "bio": form.bio.data or None,
        "avatar": form.avatar.data or None,
        "coverPhoto": form.coverPhoto.data or None,
    }
    update = UserService.update_profile(firestore.client(), g.user["uid"], changes)
    return jsonify({"success": True, "update": update})
