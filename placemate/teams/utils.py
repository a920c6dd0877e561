"""Team logo storage helpers."""

from __future__ import annotations

from urllib.parse import unquote

from firebase_admin import storage
from flask import current_app


def _logo_path(team_id: str) -> str:
    folder = current_app.config.get("TEAM_LOGO_FOLDER", "teamLogos")
    return f"{folder}/{team_id}.jpg"


def upload_team_logo(team_id: str, logo_bytes: bytes) -> str:
    """Store a team logo in Cloud Storage and return its public URL."""
    bucket = storage.bucket()
    blob = bucket.blob(_logo_path(team_id))
    blob.upload_from_string(logo_bytes, content_type="image/jpeg")
    blob.make_public()
    return str(blob.public_url)


def delete_team_logo(logo_url: str) -> bool:
    """Delete a team logo, logging instead of raising on failure.

    Returns:
        True if the blob was deleted.
    """
    try:
        bucket = storage.bucket()
        _, _, path = logo_url.partition(f"{bucket.name}/")
        if not path:
            current_app.logger.warning(
                f"Logo URL {logo_url} is not in bucket {bucket.name}; skipping."
            )
            return False
        bucket.blob(unquote(path)).delete()
        return True
    except Exception as e:
        current_app.logger.error(f"Error deleting team logo {logo_url}: {e}")
        return False
