"""Routes for the backpack blueprint."""

from firebase_admin import firestore
from flask import g, jsonify

from placemate.auth.decorators import login_required
from placemate.core.forms import validate_form

from . import bp
from .forms import AddItemForm, RemoveItemForm
from .services import BackpackService


@bp.route("", methods=["GET"])
@login_required
def my_backpack():
    """List the caller's backpack."""
    items = BackpackService.get_items(firestore.client(), g.user["uid"])
    return jsonify({"success": True, "items": items})


@bp.route("/<string:user_id>", methods=["GET"])
@login_required
def user_backpack(user_id):
    """List another user's backpack."""
    items = BackpackService.get_items(firestore.client(), user_id)
    return jsonify({"success": True, "items": items})


@bp.route("/add", methods=["POST"])
@login_required
def add_item():
    """Pack an item in the caller's backpack."""
    form = validate_form(AddItemForm())
    items = BackpackService.add_item(firestore.client(), g.user["uid"], form.item.data)
    return jsonify({"success": True, "items": items})


@bp.route("/remove", methods=["POST"])
@login_required
def remove_item():
    """Unpack an item from the caller's backpack."""
    form = validate_form(RemoveItemForm())
    items = BackpackService.remove_item(
        firestore.client(), g.user["uid"], form.itemId.data
    )
    return jsonify({"success": True, "items": items})
