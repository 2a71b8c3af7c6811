"""
tests/test_circle_db.py
=======================

Integration‑style tests for the SQLite‑backed circle manager.

These tests mirror `test_circle.py` but use DBCircleManager against an
in‑memory database to ensure persistence and API parity with the
in‑memory version.
"""

from datetime import datetime, timezone

import pytest
from sqlmodel import Session

from milestones.circle import CircleMemberForm
from milestones.circle_db import DBCircleManager

NOW = datetime(2024, 6, 1, 12, 0)


def _form(**overrides):
    data = {"name": "Beta", "clean_date": "2021-03-04", "relationship": "sibling"}
    data.update(overrides)
    return CircleMemberForm.model_validate(data, context={"now": NOW})


def test_add_and_get(engine):
    cm = DBCircleManager("cust-1", Session(engine))
    member = cm.add(_form())
    assert cm.get(member.id) == member
    assert list(cm) == [member]


def test_persistence_across_sessions(engine):
    # write in first session
    with DBCircleManager("cust-1", Session(engine)) as cm:
        member = cm.add(_form(name="Gamma", recovery_program="SMART"))

    # read in a brand‑new session
    with DBCircleManager("cust-1", Session(engine)) as cm2:
        fetched = cm2.get(member.id)

    assert fetched.name == "Gamma"
    assert fetched.recovery_program == "SMART"


def test_owners_are_isolated(engine):
    session = Session(engine)
    mine = DBCircleManager("cust-1", session)
    theirs = DBCircleManager("cust-2", session)
    member = mine.add(_form())

    assert len(mine) == 1
    assert len(theirs) == 0
    with pytest.raises(KeyError):
        theirs.get(member.id)
    assert theirs.remove(member.id) is False
    assert len(mine) == 1


def test_update_and_remove(engine):
    cm = DBCircleManager("cust-1", Session(engine))
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    member = cm.add(_form(), now=created)

    updated = cm.update(member.id, _form(name="Beta Two"), now=datetime(2024, 2, 1, tzinfo=timezone.utc))
    assert cm.get(member.id).name == "Beta Two"
    assert updated.created_at == member.created_at

    assert cm.remove(member.id) is True
    assert len(cm) == 0


def test_update_unknown_raises(engine):
    with pytest.raises(KeyError):
        DBCircleManager("cust-1", Session(engine)).update("rc_missing", _form())


def test_iteration_is_oldest_first(engine):
    cm = DBCircleManager("cust-1", Session(engine))
    cm.add(_form(name="Later"), now=datetime(2024, 3, 1, tzinfo=timezone.utc))
    cm.add(_form(name="Earlier"), now=datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert [m.name for m in cm] == ["Earlier", "Later"]
    assert '"name": "Earlier"' in cm.to_json()
