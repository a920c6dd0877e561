"""Decorators for the auth blueprint."""

from functools import wraps

from firebase_admin import firestore
from flask import g

from placemate.errors import UnauthorizedError


def login_required(f=None, admin_required=False):
    """Reject the request unless a verified identity was loaded into g.user.

    Usage:
    @login_required
    def protected_view():
        ...

    @login_required(admin_required=True)
    def admin_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if not g.get("user"):
                raise UnauthorizedError(code="NO_TOKEN")
            if admin_required:
                from placemate.admin.services import AdminService

                g.admin = AdminService.require_admin(
                    firestore.client(), g.user["uid"]
                )
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator
