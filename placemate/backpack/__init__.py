"""Blueprint for user backpacks."""

from flask import Blueprint

bp = Blueprint("backpack", __name__, url_prefix="/backpack")

from . import routes  # noqa: E402, F401
