"""Blueprint for user favorites."""

from flask import Blueprint

bp = Blueprint("favorites", __name__, url_prefix="/favorites")

from . import routes  # noqa: E402, F401
