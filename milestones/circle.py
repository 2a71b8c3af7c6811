"""
milestones.circle
=================

The *recovery circle*: people whose clean dates a customer follows.

This module carries its own, smaller milestone table and a different
rule for the next milestone than :pymod:`milestones.calculator`: past the
last fixed entry it keeps going in five‑year steps instead of stopping.
The two are kept apart on purpose; do not route one through the other.

It also provides the roster helpers used by the account pages:

* option lists + :class:`CircleMemberForm` validation
* JSON (de)serialisation of a whole circle
* :class:`CircleManager`, an in‑memory roster keyed by member id
"""

from __future__ import annotations

import json
import logging
import math
import random
import string
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from .calculator import as_datetime, elapsed_days
from .models import CircleMilestone, NextCircleMilestone, RecoveryCircleMember

logger = logging.getLogger(__name__)

CleanDate = Union[str, date, datetime]

# ---------------------------------------------------------------------
# Option lists: value → label, in display order
# ---------------------------------------------------------------------
RELATIONSHIP_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("spouse", "Spouse / Partner"),
    ("parent", "Parent"),
    ("child", "Son / Daughter"),
    ("sibling", "Sibling"),
    ("friend", "Friend"),
    ("sponsor", "Sponsor"),
    ("sponsee", "Sponsee"),
    ("colleague", "Colleague"),
    ("other", "Other"),
)

RECOVERY_PROGRAM_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("AA", "Alcoholics Anonymous (AA)"),
    ("NA", "Narcotics Anonymous (NA)"),
    ("SMART", "SMART Recovery"),
    ("Celebrate Recovery", "Celebrate Recovery"),
    ("Refuge Recovery", "Refuge Recovery"),
    ("Other", "Other"),
    ("None", "Prefer not to say"),
)

CIRCLE_MILESTONES: Tuple[CircleMilestone, ...] = (
    CircleMilestone(30, "30 Days"),
    CircleMilestone(60, "60 Days"),
    CircleMilestone(90, "90 Days"),
    CircleMilestone(180, "6 Months"),
    CircleMilestone(365, "1 Year"),
    CircleMilestone(547, "18 Months"),
    CircleMilestone(730, "2 Years"),
    CircleMilestone(1095, "3 Years"),
    CircleMilestone(1825, "5 Years"),
    CircleMilestone(3650, "10 Years"),
    CircleMilestone(7300, "20 Years"),
    CircleMilestone(9125, "25 Years"),
)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def get_relationship_label(value: str) -> str:
    """Display label for a relationship value (the value itself if unknown)."""
    return dict(RELATIONSHIP_OPTIONS).get(value, value)


# ---------------------------------------------------------------------
# Day counting + next milestone
# ---------------------------------------------------------------------
def parse_clean_date(value: CleanDate) -> datetime:
    """Parse an ISO date / datetime string (raise ValueError if unparseable)."""
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    return as_datetime(value)


def calculate_days_sober(clean_date: CleanDate, now: Optional[datetime] = None) -> int:
    """Whole 24‑hour periods since *clean_date*."""
    start = parse_clean_date(clean_date)
    return elapsed_days(start, now if now is not None else datetime.now(start.tzinfo))


def get_next_milestone(clean_date: CleanDate, now: Optional[datetime] = None) -> NextCircleMilestone:
    """
    Next circle milestone for *clean_date*.

    Beyond the last table entry the next milestone is the following
    multiple of five years (365‑day years), so a result is always
    returned.

    Examples
    --------
    >>> get_next_milestone("2024-01-01", now=datetime(2024, 1, 11))
    NextCircleMilestone(days=30, label='30 Days', days_until=20)
    """
    days_sober = calculate_days_sober(clean_date, now)

    for milestone in CIRCLE_MILESTONES:
        if milestone.days > days_sober:
            return NextCircleMilestone(
                days=milestone.days,
                label=milestone.label,
                days_until=milestone.days - days_sober,
            )

    years = days_sober // 365
    next_years = math.ceil((years + 1) / 5) * 5
    next_days = next_years * 365
    return NextCircleMilestone(
        days=next_days,
        label=f"{next_years} Years",
        days_until=next_days - days_sober,
    )


# ---------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------
class CircleMemberForm(BaseModel):
    """
    Submitted add / edit form for a circle member.

    Pass ``context={"now": ...}`` to :pymeth:`model_validate` to pin the
    clock used by the "not in the future" check.
    """

    name: str
    clean_date: str
    relationship: str
    recovery_program: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_long_enough(cls, v: str) -> str:
        if len(v) < 2:
            raise PydanticCustomError("name_too_short", "Name must be at least 2 characters")
        return v

    @field_validator("clean_date")
    @classmethod
    def _clean_date_in_past(cls, v: str, info: ValidationInfo) -> str:
        now = (info.context or {}).get("now")
        try:
            parsed = parse_clean_date(v)
        except ValueError:
            parsed = None
        if parsed is None or elapsed_days(parsed, now or datetime.now(parsed.tzinfo)) < 0:
            raise PydanticCustomError("clean_date_invalid", "Clean date must be a valid date in the past")
        return v

    @field_validator("relationship")
    @classmethod
    def _relationship_selected(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("relationship_missing", "Please select a relationship")
        return v

    @field_validator("recovery_program")
    @classmethod
    def _blank_program_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


def first_error_message(exc: ValidationError) -> str:
    """The message of the first validation issue, for display."""
    errors = exc.errors()
    return errors[0]["msg"] if errors else "Invalid input"


# ---------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------
def _timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_member_id(now: Optional[datetime] = None) -> str:
    """``rc_<epoch ms>_<7 random base‑36 chars>``."""
    now = now or datetime.now(timezone.utc)
    suffix = "".join(random.choices(_ID_ALPHABET, k=7))
    return f"rc_{int(now.timestamp() * 1000)}_{suffix}"


def new_member(form: CircleMemberForm, now: Optional[datetime] = None) -> RecoveryCircleMember:
    """Create a fresh member record from a validated form."""
    stamp = _timestamp(now)
    return RecoveryCircleMember(
        id=generate_member_id(now),
        name=form.name,
        clean_date=form.clean_date,
        relationship=form.relationship,
        recovery_program=form.recovery_program,
        created_at=stamp,
        updated_at=stamp,
    )


def apply_form(
    member: RecoveryCircleMember,
    form: CircleMemberForm,
    now: Optional[datetime] = None,
) -> RecoveryCircleMember:
    """Return *member* with the form's fields and a refreshed ``updated_at``."""
    return replace(
        member,
        name=form.name,
        clean_date=form.clean_date,
        relationship=form.relationship,
        recovery_program=form.recovery_program,
        updated_at=_timestamp(now),
    )


def parse_recovery_circle(value: Optional[str]) -> List[RecoveryCircleMember]:
    """
    Decode a serialised circle.

    Missing, malformed or non‑list input yields an empty circle; entries
    lacking required fields are skipped.
    """
    if not value:
        return []
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        logger.warning("Discarding unparseable recovery circle payload")
        return []
    if not isinstance(parsed, list):
        return []

    members: List[RecoveryCircleMember] = []
    for entry in parsed:
        if not isinstance(entry, dict):
            logger.warning(f"Skipping non-object circle entry: {entry!r}")
            continue
        try:
            members.append(RecoveryCircleMember.from_dict(entry))
        except KeyError as e:
            logger.warning(f"Skipping circle entry missing field {e}")
    return members


def serialize_recovery_circle(circle: Iterable[RecoveryCircleMember]) -> str:
    return json.dumps([m.to_dict() for m in circle], ensure_ascii=False)


class CircleManager:
    """
    Dictionary‑backed roster of circle members.

    Example
    -------
    >>> cm = CircleManager()
    >>> form = CircleMemberForm(name="Sam", clean_date="2020-02-02", relationship="friend")
    >>> member = cm.add(form)
    >>> cm.get(member.id).name
    'Sam'
    """

    def __init__(self, members: Iterable[RecoveryCircleMember] = ()) -> None:
        self._members: Dict[str, RecoveryCircleMember] = {m.id: m for m in members}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def add(self, form: CircleMemberForm, now: Optional[datetime] = None) -> RecoveryCircleMember:
        """Append a new member built from *form*."""
        member = new_member(form, now)
        self._members[member.id] = member
        logger.info(f"Added circle member {member.id}")
        return member

    def update(
        self,
        member_id: str,
        form: CircleMemberForm,
        now: Optional[datetime] = None,
    ) -> RecoveryCircleMember:
        """Overwrite a member's fields (raise KeyError if not present)."""
        member = apply_form(self._members[member_id], form, now)
        self._members[member_id] = member
        logger.info(f"Updated circle member {member_id}")
        return member

    def remove(self, member_id: str) -> bool:
        """Drop a member; return False if it was not present."""
        removed = self._members.pop(member_id, None) is not None
        if removed:
            logger.info(f"Removed circle member {member_id}")
        return removed

    def get(self, member_id: str) -> RecoveryCircleMember:
        """Retrieve by id (raise KeyError if not present)."""
        return self._members[member_id]

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_json(self) -> str:
        return serialize_recovery_circle(self)

    @classmethod
    def from_json(cls, value: Optional[str]) -> "CircleManager":
        return cls(parse_recovery_circle(value))

    # ------------------------------------------------------------------
    # Dunder helpers for convenience
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[RecoveryCircleMember]:
        return iter(self._members.values())

    def __len__(self) -> int:
        return len(self._members)
