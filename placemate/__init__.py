"""Initialize the Flask app and its extensions."""

import os

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials, firestore
from flask import Flask, current_app, g, request
from werkzeug.middleware.proxy_fix import ProxyFix

from .core.constants import USERS


def _bearer_token():
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        FIREBASE_STORAGE_BUCKET=os.environ.get("FIREBASE_STORAGE_BUCKET"),
        TEAM_LOGO_FOLDER=os.environ.get("TEAM_LOGO_FOLDER") or "teamLogos",
        # Callers authenticate with bearer tokens, not cookies
        WTF_CSRF_ENABLED=False,
    )

    if test_config:
        app.config.update(test_config)

    # Initialize Firebase Admin SDK only if not in testing mode
    if not app.config.get("TESTING"):
        cred = None
        project_id = None
        cred_info = {}

        # First, try to load from environment variable (for production)
        cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
        if cred_json:
            import json

            try:
                cred_info = json.loads(cred_json)
                project_id = cred_info.get("project_id")
                cred = credentials.Certificate(cred_info)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

        # If env var fails or is not present, try loading from file (for local dev)
        if not cred:
            cred_path = os.path.join(
                os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
            )
            if os.path.exists(cred_path):
                import json

                try:
                    with open(cred_path, "r") as f:
                        cred_info = json.load(f)
                    project_id = cred_info.get("project_id")
                    cred = credentials.Certificate(cred_path)
                except (json.JSONDecodeError, ValueError) as e:
                    app.logger.error(f"Error loading credentials from file: {e}")

        # Fall back to application default credentials
        if not cred:
            try:
                cred = credentials.ApplicationDefault()
                project_id = os.environ.get("FIREBASE_PROJECT_ID")
            except Exception as e:
                app.logger.error(
                    f"Could not find any valid credentials (env, file, or default): {e}"
                )

        if cred and not firebase_admin._apps:
            try:
                storage_bucket = app.config.get("FIREBASE_STORAGE_BUCKET")
                if not storage_bucket and project_id:
                    storage_bucket = f"{project_id}.firebasestorage.app"

                firebase_options = {"storageBucket": storage_bucket}
                if project_id:
                    firebase_options["projectId"] = project_id

                firebase_admin.initialize_app(cred, firebase_options)
            except ValueError:
                app.logger.info("Firebase app already initialized.")

    # Register blueprints
    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import user as user_bp

    app.register_blueprint(user_bp.bp)

    from . import teams as teams_bp

    app.register_blueprint(teams_bp.bp)

    from . import favorites as favorites_bp

    app.register_blueprint(favorites_bp.bp)

    from . import visits as visits_bp

    app.register_blueprint(visits_bp.bp)

    from . import notifications as notifications_bp

    app.register_blueprint(notifications_bp.bp)

    from . import places as places_bp

    app.register_blueprint(places_bp.bp)

    from . import backpack as backpack_bp

    app.register_blueprint(backpack_bp.bp)

    from . import posts as posts_bp

    app.register_blueprint(posts_bp.bp)

    from . import admin as admin_bp

    app.register_blueprint(admin_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.before_request
    def load_authenticated_user():
        """Verify the bearer token, if any, and store the caller's profile in g."""
        g.user = None
        token = _bearer_token()
        if token is None:
            return

        try:
            decoded = firebase_auth.verify_id_token(token)
        except (firebase_auth.InvalidIdTokenError, ValueError) as e:
            current_app.logger.warning(f"Rejected bearer token: {e}")
            return

        uid = decoded["uid"]
        user_doc = firestore.client().collection(USERS).document(uid).get()
        g.user = (user_doc.to_dict() or {}) if user_doc.exists else {}
        g.user["uid"] = uid

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
