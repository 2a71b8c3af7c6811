"""
tests/test_calculator.py
========================

Unit tests for milestones.calculator.calculate_milestones and helpers.
"""

from datetime import date, datetime, timedelta, timezone

from milestones.calculator import calculate_milestones, calendar_breakdown, elapsed_days
from milestones.catalog import MAX_THRESHOLD, MILESTONES


def _ids(result):
    return [a.milestone.id for a in result.achieved]


# ---------------------------------------------------------------------------
# Concrete scenarios
# ---------------------------------------------------------------------------
def test_first_day():
    """One day in: 24 Hours achieved, 1 Week is six days away."""
    res = calculate_milestones(date(2024, 1, 1), now=datetime(2024, 1, 2))
    assert res.total_days == 1
    assert _ids(res) == ["24h"]
    assert res.achieved[0].date_achieved == datetime(2024, 1, 2)
    assert res.next.milestone.label == "1 Week"
    assert res.next.days_remaining == 6
    assert res.next.target_date == datetime(2024, 1, 8)


def test_one_year():
    """2023 has no leap day, so Jan 1 → Jan 1 is exactly 365 days."""
    res = calculate_milestones(date(2023, 1, 1), now=datetime(2024, 1, 1))
    assert res.total_days == 365
    assert _ids(res) == ["24h", "1w", "30d", "60d", "90d", "6m", "9m", "1y"]
    assert (res.years, res.months, res.days) == (1, 0, 0)
    assert res.next.milestone.id == "18m"
    assert res.next.days_remaining == 548 - 365


def test_future_start_date():
    """A start date tomorrow yields negative days and nothing achieved."""
    res = calculate_milestones(date(2024, 1, 2), now=datetime(2024, 1, 1))
    assert res.total_days == -1
    assert res.achieved == []
    assert res.next.milestone.id == "24h"
    assert res.next.days_remaining == 2


def test_start_date_near_calendar_end_caps_target_date():
    """A target date past year 9999 is capped instead of overflowing."""
    res = calculate_milestones(date(9999, 12, 31), now=datetime(2024, 1, 1))
    assert res.achieved == []
    assert res.next.milestone.id == "24h"
    assert res.next.target_date == datetime.max
    assert res.next.days_remaining == 1 - res.total_days


def test_achieved_dates_near_calendar_end_are_capped():
    res = calculate_milestones(datetime(9999, 12, 30), now=datetime.max)
    assert [a.milestone.id for a in res.achieved] == ["24h"]
    assert res.achieved[0].date_achieved == datetime(9999, 12, 31)
    assert res.next.target_date == datetime.max


def test_time_of_day_counts():
    """23h59m after midnight is still day zero."""
    res = calculate_milestones(date(2024, 1, 1), now=datetime(2024, 1, 1, 23, 59))
    assert res.total_days == 0
    assert res.achieved == []
    assert res.next.days_remaining == 1


def test_next_absent_exactly_at_max_threshold():
    start = date(2000, 1, 1)
    at_max = calculate_milestones(start, now=datetime(2000, 1, 1) + timedelta(days=MAX_THRESHOLD))
    assert at_max.next is None
    assert len(at_max.achieved) == len(MILESTONES)

    just_before = calculate_milestones(start, now=datetime(2000, 1, 1) + timedelta(days=MAX_THRESHOLD - 1))
    assert just_before.next.milestone.id == "25y"
    assert just_before.next.days_remaining == 1


def test_aware_now_with_plain_start_date():
    utc = timezone.utc
    res = calculate_milestones(date(2024, 1, 1), now=datetime(2024, 1, 8, 6, tzinfo=utc))
    assert res.total_days == 7
    assert res.achieved[-1].milestone.id == "1w"
    assert res.achieved[-1].date_achieved == datetime(2024, 1, 8, tzinfo=utc)


def test_default_now_uses_current_time():
    res = calculate_milestones(date.today() - timedelta(days=30))
    assert res.total_days >= 30
    assert "30d" in _ids(res)


# ---------------------------------------------------------------------------
# Calendar breakdown
# ---------------------------------------------------------------------------
def test_breakdown_borrows_from_month_before_now():
    """
    Mar 31 → May 1: the naive day component is negative, so a month is
    borrowed and April's 30 days are added back.
    """
    assert calendar_breakdown(date(2024, 3, 31), datetime(2024, 5, 1)) == (0, 1, 0)


def test_breakdown_borrows_across_new_year():
    """In January the month before *now* is the previous December."""
    assert calendar_breakdown(date(2023, 12, 15), datetime(2024, 1, 10)) == (0, 0, 26)


def test_breakdown_is_independent_of_total_days():
    res = calculate_milestones(date(2024, 1, 31), now=datetime(2024, 3, 1))
    assert res.total_days == 30
    assert (res.years, res.months) == (0, 1)


def test_breakdown_plain_subtraction():
    assert calendar_breakdown(date(2020, 2, 10), datetime(2024, 6, 25)) == (4, 4, 15)


# ---------------------------------------------------------------------------
# Properties over a sweep of evaluation times
# ---------------------------------------------------------------------------
def test_elapsed_days_matches_floor_of_whole_days():
    start = datetime(2024, 2, 1, 18, 30)
    for hours in range(0, 24 * 10, 5):
        now = start + timedelta(hours=hours)
        assert elapsed_days(start, now) == hours // 24


def test_achieved_is_growing_prefix_and_next_is_consistent():
    start = date(2020, 1, 1)
    previous = 0
    for offset in range(-3, MAX_THRESHOLD + 10, 97):
        res = calculate_milestones(start, now=datetime(2020, 1, 1) + timedelta(days=offset))
        n = len(res.achieved)
        assert list(MILESTONES[:n]) == [a.milestone for a in res.achieved]
        assert all(a.milestone.days <= res.total_days for a in res.achieved)
        assert n >= previous
        previous = n

        if res.next is None:
            assert res.total_days >= MAX_THRESHOLD
        else:
            assert res.next.milestone is MILESTONES[n]
            assert res.next.days_remaining == res.next.milestone.days - res.total_days
            assert res.next.days_remaining > 0
