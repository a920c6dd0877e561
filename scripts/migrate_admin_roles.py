"""
This script moves admin authority from a static list of uids onto user roles.

- Reads the uids to promote from the command line or the ADMIN_UIDS
  environment variable (comma separated).
- Sets role = "admin" on each existing user document.
- Reports uids that have no user document so they can be checked by hand.

Run from the project root with: python -m scripts.migrate_admin_roles [uid ...]
"""

import json
import os
import sys
from pathlib import Path

import firebase_admin
from firebase_admin import credentials, firestore
from mockfirestore import MockFirestore

from placemate.core.constants import ROLE_ADMIN, USERS

project_root = Path(__file__).resolve().parent.parent


def initialize_firebase():
    """Initializes the Firebase Admin SDK."""
    cred = None
    cred_path = project_root / "firebase_credentials.json"
    if cred_path.exists():
        try:
            cred = credentials.Certificate(str(cred_path))
        except (OSError, ValueError) as e:
            print(f"Error loading credentials from file: {e}")
            return False
    else:
        cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
        if cred_json:
            try:
                cred = credentials.Certificate(json.loads(cred_json))
            except (json.JSONDecodeError, ValueError) as e:
                print(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")
                return False

    if not cred:
        print("Could not find Firebase credentials in file or environment variable.")
        return False

    if not firebase_admin._apps:
        firebase_admin.initialize_app(cred)
    return True


def get_admin_uids(argv):
    """Collect the uids to promote from argv or the environment."""
    raw = argv or os.environ.get("ADMIN_UIDS", "").split(",")
    return [uid.strip() for uid in raw if uid.strip()]


def migrate_admin_roles(db, admin_uids):
    """Promote each listed user and return the uids that were missing."""
    missing = []
    for uid in admin_uids:
        user_ref = db.collection(USERS).document(uid)
        user_doc = user_ref.get()
        if not user_doc.exists:
            print(f"User {uid} not found; skipping.")
            missing.append(uid)
            continue
        if (user_doc.to_dict() or {}).get("role") == ROLE_ADMIN:
            print(f"User {uid} is already an admin.")
            continue
        user_ref.update({"role": ROLE_ADMIN})
        print(f"Promoted {uid} to admin.")
    return missing


def main():
    """Main migration logic."""
    if os.environ.get("MOCK_DB"):
        db = MockFirestore()
        db.collection("users").document("admin1").set({"name": "Admin One"})
        db.collection("users").document("admin2").set(
            {"name": "Admin Two", "role": ROLE_ADMIN}
        )
        admin_uids = get_admin_uids(sys.argv[1:]) or ["admin1", "admin2", "ghost"]
    else:
        if not initialize_firebase():
            return
        db = firestore.client()
        admin_uids = get_admin_uids(sys.argv[1:])

    if not admin_uids:
        print("No admin uids given. Pass them as arguments or set ADMIN_UIDS.")
        return

    missing = migrate_admin_roles(db, admin_uids)
    print("\nMigration complete.")
    if missing:
        print(f"Missing users: {', '.join(missing)}")


if __name__ == "__main__":
    main()
