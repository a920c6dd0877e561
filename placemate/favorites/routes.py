"""Routes for the favorites blueprint."""

from firebase_admin import firestore
from flask import g, jsonify

from placemate.auth.decorators import login_required
from placemate.core.forms import validate_form

from . import bp
from .forms import FavoriteForm
from .services import FavoriteService


@bp.route("/add", methods=["POST"])
@login_required
def add_favorite():
    """Favorite a place."""
    form = validate_form(FavoriteForm())
    FavoriteService.set_favorite(firestore.client(), g.user["uid"], form.placeId.data, True)
    return jsonify({"success": True})


@bp.route("/remove", methods=["POST"])
@login_required
def remove_favorite():
    """Unfavorite a place."""
    form = validate_form(FavoriteForm())
    FavoriteService.set_favorite(
        firestore.client(), g.user["uid"], form.placeId.data, False
    )
    return jsonify({"success": True})


@bp.route("", methods=["GET"])
@login_required
def my_favorites():
    """List the caller's favorite places."""
    favorites = FavoriteService.list_favorites(firestore.client(), g.user["uid"])
    return jsonify({"success": True, "favorites": favorites})


@bp.route("/<string:user_id>", methods=["GET"])
@login_required
def user_favorites(user_id):
    """List another user's favorite places."""
    favorites = FavoriteService.list_favorites(firestore.client(), user_id)
    return jsonify({"success": True, "favorites": favorites})
