#!/usr/bin/env python
"""
Seed database with a sample recovery circle for testing.

This script creates sample circle members in the database to populate
the account pages with meaningful data.
"""

import sys

from pydantic import ValidationError

from milestones.circle import CircleMemberForm, first_error_message
from milestones.circle_db import DBCircleManager
from milestones.db import create_all

DEMO_OWNER = "demo-customer"

# Sample members spread across the milestone table
SAMPLE_MEMBERS = [
    {"name": "Jordan Smith", "clean_date": "2024-03-15", "relationship": "spouse", "recovery_program": "AA"},
    {"name": "Maria Garcia", "clean_date": "2019-06-22", "relationship": "sponsor", "recovery_program": "NA"},
    {"name": "David Kim", "clean_date": "2023-11-02", "relationship": "friend", "recovery_program": "SMART"},
    {"name": "Pat Doe", "clean_date": "1996-01-10", "relationship": "parent"},
]


def seed_database(owner: str = DEMO_OWNER) -> None:
    """Replace *owner*'s circle with the sample members."""
    create_all()

    with DBCircleManager(owner) as cm:
        for member in list(cm):
            cm.remove(member.id)

        for data in SAMPLE_MEMBERS:
            try:
                member = cm.add(CircleMemberForm.model_validate(data))
            except ValidationError as e:
                print(f"Skipping {data['name']}: {first_error_message(e)}")
                continue
            print(f"Added {member.name} ({member.id})")

        print(f"\nSeeded {len(cm)} members for owner '{owner}'")


if __name__ == "__main__":
    seed_database(sys.argv[1] if len(sys.argv) > 1 else DEMO_OWNER)
    print("Now run the API:")
    print("uvicorn api.main:app --reload --port 8001")
