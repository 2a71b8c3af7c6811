"""
milestones.circle_db
====================

SQLite‑backed implementation of the CircleManager public surface.

This adapter wraps the CRUD helpers in :pymod:`milestones.db` so that any
code expecting the in‑memory CircleManager can switch to a persistent
store without changing its API calls.  One instance manages the circle of
a single *owner* (customer id).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterator, Optional

from sqlmodel import Session

from milestones.circle import CircleMemberForm, apply_form, new_member, serialize_recovery_circle
from milestones.db import SessionLocal, delete_member, get_member, owner_members, upsert_member
from milestones.models import RecoveryCircleMember

logger = logging.getLogger(__name__)


class DBCircleManager:
    """
    Drop‑in replacement backed by SQLite.

    Methods mirror the in‑memory CircleManager:
    * add(form) / update(member_id, form) / remove(member_id)
    * get(member_id)
    * iteration / len() / to_json()
    """

    def __init__(self, owner: str, session: Session | None = None) -> None:
        self.owner = owner
        self._session: Session = session or SessionLocal()

    # ------------------------------------------------------------------ CRUD
    def add(self, form: CircleMemberForm, now: Optional[datetime] = None) -> RecoveryCircleMember:
        member = new_member(form, now)
        upsert_member(self._session, self.owner, member)
        logger.info(f"Added circle member {member.id} for owner {self.owner}")
        return member

    def update(
        self,
        member_id: str,
        form: CircleMemberForm,
        now: Optional[datetime] = None,
    ) -> RecoveryCircleMember:
        member = apply_form(self.get(member_id), form, now)
        upsert_member(self._session, self.owner, member)
        logger.info(f"Updated circle member {member_id} for owner {self.owner}")
        return member

    def remove(self, member_id: str) -> bool:
        removed = delete_member(self._session, self.owner, member_id)
        if removed:
            logger.info(f"Removed circle member {member_id} for owner {self.owner}")
        return removed

    def get(self, member_id: str) -> RecoveryCircleMember:
        member = get_member(self._session, self.owner, member_id)
        if member is None:
            raise KeyError(member_id)
        return member

    def to_json(self) -> str:
        return serialize_recovery_circle(self)

    # ------------------------------------------------------ dunder helpers
    def __iter__(self) -> Iterator[RecoveryCircleMember]:
        yield from owner_members(self._session, self.owner)

    def __len__(self) -> int:
        return len(owner_members(self._session, self.owner))

    # ----------------------------------------------------- context manager
    def __enter__(self) -> "DBCircleManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._session.close()
