"""
milestones.db
=============

SQLite persistence layer for recovery circles.

This module exposes:

* ``engine`` – a global SQLModel engine pointing at *milestones.db*
* ``SessionLocal`` – a session factory used via ``with SessionLocal() as s:``
* ``create_all()`` – helper to create tables at first run
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Field, Session, SQLModel, create_engine, select

from milestones.models import RecoveryCircleMember
from milestones.settings import DB_ECHO, DB_URL


# ---------------------------------------------------------------------------
# Engine (SQLite file lives in project root unless MILESTONES_DB_FILE is set)
# ---------------------------------------------------------------------------
def make_engine(url: str = DB_URL, echo: bool = DB_ECHO) -> Engine:
    """
    Build an engine for *url*.

    ``sqlite://`` (no path) gives a private in‑memory database shared by
    every session of the returned engine, which is what the tests use.
    """
    if url == "sqlite://":
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo, connect_args={"check_same_thread": False})


engine = make_engine()


# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def SessionLocal(bind: Optional[Engine] = None) -> Session:  # noqa: N802 (factory camel‑case for consistency with FastAPI docs)
    """Return a new Session bound to *bind* or the global engine."""
    return Session(bind or engine)


# ---------------------------------------------------------------------------
# ORM model that mirrors milestones.models.RecoveryCircleMember
# ---------------------------------------------------------------------------
class CircleMemberDB(SQLModel, table=True):
    """
    SQLite‑backed representation of a :class:`milestones.models.RecoveryCircleMember`.

    ``owner`` is the id of the customer whose circle the row belongs to.
    """

    __tablename__ = "circle_member"

    id: str = Field(primary_key=True)
    owner: str = Field(index=True)
    name: str
    clean_date: str
    relationship: str
    recovery_program: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""

    # ---------------------------------------------------------------------
    # Converters
    # ---------------------------------------------------------------------
    @classmethod
    def from_member(cls, owner: str, member: RecoveryCircleMember) -> "CircleMemberDB":
        """Create a DB row from an in‑memory member."""
        return cls(
            id=member.id,
            owner=owner,
            name=member.name,
            clean_date=member.clean_date,
            relationship=member.relationship,
            recovery_program=member.recovery_program,
            created_at=member.created_at,
            updated_at=member.updated_at,
        )

    def to_member(self) -> RecoveryCircleMember:
        """Convert the DB row back into a plain RecoveryCircleMember."""
        return RecoveryCircleMember(
            id=self.id,
            name=self.name,
            clean_date=self.clean_date,
            relationship=self.relationship,
            recovery_program=self.recovery_program,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


# ---------------------------------------------------------------------------
# Convenience CRUD helpers
# ---------------------------------------------------------------------------
def upsert_member(s: Session, owner: str, member: RecoveryCircleMember) -> None:
    """Insert or update a member row."""
    s.merge(CircleMemberDB.from_member(owner, member))
    s.commit()


def get_member(s: Session, owner: str, member_id: str) -> RecoveryCircleMember | None:
    """Return a member of *owner*'s circle or *None* if missing."""
    row = s.get(CircleMemberDB, member_id)
    if row is None or row.owner != owner:
        return None
    return row.to_member()


def owner_members(s: Session, owner: str) -> List[RecoveryCircleMember]:
    """Return every member of *owner*'s circle, oldest first."""
    stmt = (
        select(CircleMemberDB)
        .where(CircleMemberDB.owner == owner)
        .order_by(CircleMemberDB.created_at, CircleMemberDB.id)
    )
    return [row.to_member() for row in s.exec(stmt).all()]


def delete_member(s: Session, owner: str, member_id: str) -> bool:
    """Delete a member row; return False if it did not exist."""
    row = s.get(CircleMemberDB, member_id)
    if row is None or row.owner != owner:
        return False
    s.delete(row)
    s.commit()
    return True


# ---------------------------------------------------------------------------
# Utility: create tables
# ---------------------------------------------------------------------------
def create_all(bind: Optional[Engine] = None) -> None:
    """Create all tables for imported SQLModel subclasses, including CircleMemberDB."""
    SQLModel.metadata.create_all(bind or engine)


# ---------------------------------------------------------------------------
# Lightweight CLI
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    """
    Quick bootstrap helper.

    Examples
    --------
    $ python -m milestones.db --create        # first‑time table creation
    """
    import argparse
    import textwrap

    parser = argparse.ArgumentParser(
        prog="python -m milestones.db",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Milestones DB utilities
            -----------------------
            --create   Create all SQLModel tables (safe if they already exist)
            """
        ),
    )
    parser.add_argument("--create", action="store_true", help="create tables")
    args = parser.parse_args()

    if args.create:
        create_all()
        print("✅ milestones.db schema initialised")
    else:
        parser.print_help()
