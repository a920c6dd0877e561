"""Routes for the auth blueprint."""

from flask import g, jsonify

from placemate.auth.decorators import login_required

from . import bp


@bp.route("/me")
@login_required
def me():
    """Return the caller's own profile, including ban state."""
    return jsonify({"success": True, "user": g.user})
