"""Routes for the visits blueprint."""

from firebase_admin import firestore
from flask import g, jsonify

from placemate.auth.decorators import login_required
from placemate.core.forms import validate_form

from . import bp
from .forms import VisitDetailForm, VisitForm
from .services import VisitService


@bp.route("/visits/addOrUpdate", methods=["POST"])
@login_required
def add_or_update_visit():
    """Record a visit, or overwrite one when visitId is given."""
    form = validate_form(VisitForm())
    visit_id = VisitService.upsert_visit(
        firestore.client(),
        form.placeId.data,
        form.teammates.data,
        form.startDate.data,
        form.endDate.data,
        visit_id=form.visitId.data or None,
        name=form.name.data,
        city=form.city.data,
        experience=form.experience.data,
        photos=form.photos.data,
    )
    return jsonify({"success": True, "id": visit_id})


@bp.route("/visits/detail", methods=["POST"])
@login_required
def visit_details():
    """Expand a list of visit IDs into full visit records."""
    form = validate_form(VisitDetailForm())
    visits = VisitService.get_visit_details(firestore.client(), form.ids.data or [])
    return jsonify({"success": True, "visits": visits})


@bp.route("/visits/<string:visit_id>", methods=["GET"])
@login_required
def view_visit(visit_id):
    """Display a single visit."""
    visit = VisitService.get_visit(firestore.client(), visit_id)
    return jsonify({"success": True, "visit": visit})


@bp.route("/visited/<string:user_id>", methods=["GET"])
@login_required
def visited(user_id):
    """Return a user's visited index."""
    visits = VisitService.get_visited(firestore.client(), user_id)
    return jsonify({"success": True, "visits": visits})


@bp.route("/visited/reconcile", methods=["POST"])
@login_required
def reconcile_visited():
    """Repair the caller's visited index."""
    removed = VisitService.reconcile_visited(firestore.client(), g.user["uid"])
    return jsonify({"success": True, "removed": removed})
