"""
milestones.calculator
=====================

Pure milestone calculation for a sobriety date.

Two independent notions of "elapsed time" are produced:

* ``total_days`` – whole 24‑hour periods between the start and *now*
  (fixed day length, sensitive to time of day).  Milestone thresholds are
  compared against this number.
* ``years`` / ``months`` / ``days`` – a calendar‑field breakdown with
  borrowing, used for display only.

Nothing here reads the clock except the ``now=None`` default of
:pyfunc:`calculate_milestones`, so every function is deterministic when
*now* is supplied.

Examples
--------
>>> from datetime import date, datetime
>>> res = calculate_milestones(date(2024, 1, 1), now=datetime(2024, 1, 2))
>>> res.total_days, [a.milestone.label for a in res.achieved]
(1, ['24 Hours'])
>>> res.next.milestone.label, res.next.days_remaining
('1 Week', 6)
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union

from .catalog import MILESTONES
from .models import AchievedMilestone, CalculationResult, NextMilestone

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

DAY = timedelta(days=1)


# ---------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------
def as_datetime(value: DateLike, tzinfo=None) -> datetime:
    """
    Promote *value* to a datetime.

    A bare ``date`` becomes midnight.  A naive result picks up *tzinfo*
    when one is given so it can be subtracted from an aware datetime.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None and tzinfo is not None:
        value = value.replace(tzinfo=tzinfo)
    return value


def _align(start: DateLike, now: DateLike) -> Tuple[datetime, datetime]:
    start_dt = as_datetime(start)
    now_dt = as_datetime(now, start_dt.tzinfo)
    if start_dt.tzinfo is None and now_dt.tzinfo is not None:
        start_dt = start_dt.replace(tzinfo=now_dt.tzinfo)
    return start_dt, now_dt


def _milestone_date(start: datetime, days: int) -> datetime:
    """*start* plus *days* fixed‑length days, capped at ``datetime.max``."""
    try:
        return start + days * DAY
    except OverflowError:
        return datetime.max.replace(tzinfo=start.tzinfo)


def _days_in_previous_month(moment: datetime) -> int:
    year, month = moment.year, moment.month - 1
    if month == 0:
        year, month = year - 1, 12
    return calendar.monthrange(year, month)[1]


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------
def elapsed_days(start: DateLike, now: DateLike) -> int:
    """Whole 24‑hour periods from *start* to *now* (negative if *start* is later)."""
    start_dt, now_dt = _align(start, now)
    return (now_dt - start_dt) // DAY


def calendar_breakdown(start: DateLike, now: DateLike) -> Tuple[int, int, int]:
    """
    Return ``(years, months, days)`` by calendar‑field subtraction.

    A negative day component borrows the length of the month preceding
    *now*; a negative month component then borrows twelve months.
    """
    start_dt, now_dt = _align(start, now)
    years = now_dt.year - start_dt.year
    months = now_dt.month - start_dt.month
    days = now_dt.day - start_dt.day

    if days < 0:
        months -= 1
        days += _days_in_previous_month(now_dt)
    if months < 0:
        years -= 1
        months += 12
    return years, months, days


def calculate_milestones(start: DateLike, now: Optional[DateLike] = None) -> CalculationResult:
    """
    Compute elapsed time, achieved milestones and the next milestone.

    Parameters
    ----------
    start : date | datetime
        Sobriety date.  A ``date`` is treated as midnight.
    now : date | datetime | None
        Evaluation instant; defaults to the current wall‑clock time.

    Any input is accepted.  A start date in the future simply yields a
    negative ``total_days`` and no achieved milestones.
    """
    start_dt = as_datetime(start)
    if now is None:
        now = datetime.now(start_dt.tzinfo)
    start_dt, now_dt = _align(start_dt, now)

    total_days = elapsed_days(start_dt, now_dt)
    years, months, days = calendar_breakdown(start_dt, now_dt)

    achieved = [
        AchievedMilestone(milestone=m, date_achieved=_milestone_date(start_dt, m.days))
        for m in MILESTONES
        if m.days <= total_days
    ]

    next_def = next((m for m in MILESTONES if m.days > total_days), None)
    upcoming = None
    if next_def is not None:
        upcoming = NextMilestone(
            milestone=next_def,
            target_date=_milestone_date(start_dt, next_def.days),
            days_remaining=next_def.days - total_days,
        )

    logger.debug(
        "calculated %d days (%d achieved, next=%s)",
        total_days, len(achieved), next_def.id if next_def else None,
    )
    return CalculationResult(
        total_days=total_days,
        years=years,
        months=months,
        days=days,
        achieved=achieved,
        next=upcoming,
    )
