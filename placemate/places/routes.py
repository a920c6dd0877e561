"""Routes for the places blueprint."""

from firebase_admin import firestore
from flask import g, jsonify

from placemate.auth.decorators import login_required
from placemate.core.forms import validate_form
from placemate.favorites.services import FavoriteService

from . import bp
from .forms import AddPlaceForm, CommentForm, ReportCommentForm
from .services import PlaceService


@bp.route("/add", methods=["POST"])
@login_required
def add_place():
    """Add a place as the caller."""
    form = validate_form(AddPlaceForm())
    place_id = PlaceService.add_place(
        firestore.client(),
        g.user["uid"],
        form.name.data,
        form.country.data,
        form.city.data,
        form.district.data,
        form.photos.data,
        form.location.data,
        description=form.description.data,
        properties=form.properties.data,
    )
    return jsonify({"success": True, "id": place_id})


@bp.route("/new", methods=["GET"])
@login_required
def new_places():
    """List the most recently added places."""
    places = PlaceService.list_new_places(firestore.client())
    return jsonify({"success": True, "places": places})


@bp.route("/popular", methods=["GET"])
@login_required
def popular_places():
    """List the places flagged as popular."""
    places = PlaceService.list_popular_places(firestore.client())
    return jsonify({"success": True, "places": places})


@bp.route("/user/<string:user_id>", methods=["GET"])
@login_required
def user_places(user_id):
    """List the places a user added."""
    places = PlaceService.list_user_places(firestore.client(), user_id)
    return jsonify({"success": True, "places": places})


@bp.route("/<string:place_id>", methods=["GET"])
@login_required
def view_place(place_id):
    """Display a single place, flagged with whether the caller favorited it."""
    db = firestore.client()
    place = PlaceService.get_place(db, place_id)
    place["isFavorite"] = FavoriteService.is_favorite(db, g.user["uid"], place_id)
    return jsonify({"success": True, "place": place})


@bp.route("/<string:place_id>/comments", methods=["GET"])
@login_required
def list_comments(place_id):
    """List a place's comments, newest first."""
    comments = PlaceService.list_comments(firestore.client(), place_id)
    return jsonify({"success": True, "comments": comments})


@bp.route("/<string:place_id>/comments", methods=["POST"])
@login_required
def add_comment(place_id):
    """Comment on a place as the caller."""
    form = validate_form(CommentForm())
    comment = PlaceService.add_comment(
        firestore.client(), place_id, g.user["uid"], form.comment.data
    )
    return jsonify({"success": True, "comment": comment})


@bp.route("/<string:place_id>/comments/report", methods=["POST"])
@login_required
def report_comment(place_id):
    """Report a comment on a place."""
    form = validate_form(ReportCommentForm())
    report_id = PlaceService.report_comment(
        firestore.client(),
        place_id,
        form.commentId.data,
        g.user["uid"],
        form.reason.data,
    )
    return jsonify({"success": True, "reportId": report_id})
