"""
tests/test_catalog.py
=====================

Unit tests for the fixed milestone catalog.
"""

import dataclasses

import pytest

from milestones.catalog import MAX_THRESHOLD, MILESTONES, get_milestone


def test_catalog_is_sorted_and_complete():
    days = [m.days for m in MILESTONES]
    assert days == sorted(days)
    assert len(MILESTONES) == 15
    assert days[0] == 1
    assert MAX_THRESHOLD == 9131


def test_ids_are_unique():
    ids = [m.id for m in MILESTONES]
    assert len(ids) == len(set(ids))


def test_get_milestone_by_id():
    one_year = get_milestone("1y")
    assert one_year.label == "1 Year"
    assert one_year.days == 365
    assert one_year.shop_link.label == "Shop 1-Year Tokens"


def test_unknown_id_raises():
    with pytest.raises(KeyError):
        get_milestone("100y")


def test_definitions_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        MILESTONES[0].days = 2
