from flask import Blueprint, current_app, jsonify
from google.api_core import exceptions as google_exceptions

from .errors import (
    AppError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StoreUnavailableError,
    UnauthorizedError,
    ValidationError,
)

error_handlers_bp = Blueprint("error_handlers", __name__)


def _error_response(error):
    body = {"success": False, "error": error.code, "message": error.message}
    return jsonify(body), error.status_code


@error_handlers_bp.app_errorhandler(ValidationError)
def handle_validation_error(error):
    """Handles validation errors."""
    current_app.logger.warning(f"Validation Error: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(UnauthorizedError)
def handle_unauthorized_error(error):
    """Handles requests without a valid identity."""
    current_app.logger.warning(f"Unauthorized: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(ForbiddenError)
def handle_forbidden_error(error):
    """Handles failed authority checks."""
    current_app.logger.warning(f"Forbidden: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(NotFoundError)
def handle_not_found_error(error):
    """Handles not found errors."""
    current_app.logger.warning(f"Not Found Error: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(ConflictError)
def handle_conflict_error(error):
    """Handles state conflicts."""
    current_app.logger.warning(f"Conflict: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles generic application errors."""
    current_app.logger.error(f"Application Error: {error.message}")
    return _error_response(error)


@error_handlers_bp.app_errorhandler(google_exceptions.ServiceUnavailable)
@error_handlers_bp.app_errorhandler(google_exceptions.DeadlineExceeded)
def handle_store_unavailable(e):
    """Handles transient Firestore failures; the caller may retry."""
    current_app.logger.error(f"Firestore unavailable: {e}")
    return _error_response(StoreUnavailableError())


@error_handlers_bp.app_errorhandler(google_exceptions.Aborted)
def handle_transaction_aborted(e):
    """Handles transactions that ran out of retries under contention."""
    current_app.logger.warning(f"Transaction aborted: {e}")
    return _error_response(
        ConflictError("The resource was modified concurrently. Try again.")
    )


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return jsonify({"success": False, "error": "ROUTE_NOT_FOUND"}), 404


@error_handlers_bp.app_errorhandler(405)
def handle_405(e):
    """Handles requests with an unsupported method."""
    return jsonify({"success": False, "error": "METHOD_NOT_ALLOWED"}), 405


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return jsonify({"success": False, "error": "INTERNAL_ERROR"}), 500
