"""Blueprint for user posts."""

from flask import Blueprint

bp = Blueprint("posts", __name__, url_prefix="/post")

from . import routes  # noqa: E402, F401
