"""
This script backfills explicit ownership on teams created before ownerId existed.

- Sets ownerId from the first member on every team that lacks it.
- Rebuilds each member's userTeams lookup from the team member lists.
- Safe to run more than once.

Run from the project root with: python -m scripts.backfill_team_owners
"""

import os

from firebase_admin import firestore
from mockfirestore import MockFirestore

from placemate.core.constants import TEAMS, USER_TEAMS
from scripts.migrate_admin_roles import initialize_firebase


def backfill_team_owners(db):
    """Set ownerId where missing and return the number of teams updated."""
    updated = 0
    index = {}
    for team in db.collection(TEAMS).stream():
        team_data = team.to_dict() or {}
        members = team_data.get("members") or []
        if not members:
            print(f"Team {team.id} has no members; skipping.")
            continue

        for uid in members:
            index.setdefault(uid, {})[team.id] = True

        if not team_data.get("ownerId"):
            db.collection(TEAMS).document(team.id).update({"ownerId": members[0]})
            print(f"Team {team.id}: ownerId set to {members[0]}.")
            updated += 1

    for uid, team_ids in index.items():
        db.collection(USER_TEAMS).document(uid).set(team_ids, merge=True)
    print(f"Rebuilt userTeams for {len(index)} users.")
    return updated


def main():
    """Main backfill logic."""
    if os.environ.get("MOCK_DB"):
        db = MockFirestore()
        db.collection(TEAMS).document("legacy").set(
            {"teamName": "Legacy", "members": ["user1", "user2"]}
        )
        db.collection(TEAMS).document("current").set(
            {"teamName": "Current", "ownerId": "user3", "members": ["user3"]}
        )
    else:
        if not initialize_firebase():
            return
        db = firestore.client()

    updated = backfill_team_owners(db)
    print(f"\nBackfill complete. {updated} teams updated.")


if __name__ == "__main__":
    main()
