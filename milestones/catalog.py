"""
milestones.catalog
==================

The fixed, ordered catalog of recovery milestones.

The calculator finds the *next* milestone by first match, so the tuple
below must stay sorted by ascending day threshold.
"""

from __future__ import annotations

from typing import Dict, Tuple

from .models import MilestoneDefinition, ShopLink

_COLLECTIONS = "/collections"

MILESTONES: Tuple[MilestoneDefinition, ...] = (
    MilestoneDefinition(
        "24h", "24 Hours", "🌅", 1,
        "The most important day — the first one.",
        ShopLink("Shop 24-Hour Tokens", _COLLECTIONS),
    ),
    MilestoneDefinition(
        "1w", "1 Week", "🌱", 7,
        "One full week of strength and courage.",
    ),
    MilestoneDefinition(
        "30d", "30 Days", "🌿", 30,
        "A full month of new habits forming.",
        ShopLink("Shop 30-Day Tokens", _COLLECTIONS),
    ),
    MilestoneDefinition(
        "60d", "60 Days", "💪", 60,
        "Two months of growing resilience.",
    ),
    MilestoneDefinition(
        "90d", "90 Days", "⭐", 90,
        "A quarter year — a major milestone in early recovery.",
        ShopLink("Shop 90-Day Tokens", _COLLECTIONS),
    ),
    MilestoneDefinition(
        "6m", "6 Months", "🔥", 183,
        "Half a year of dedication and growth.",
        ShopLink("Shop 6-Month Tokens", _COLLECTIONS),
    ),
    MilestoneDefinition(
        "9m", "9 Months", "🌟", 274,
        "Three quarters of a year — the home stretch to one year.",
    ),
    MilestoneDefinition(
        "1y", "1 Year", "🏆", 365,
        "One full year — an incredible achievement worth celebrating.",
        ShopLink("Shop 1-Year Tokens", _COLLECTIONS),
    ),
    MilestoneDefinition(
        "18m", "18 Months", "💎", 548,
        "A year and a half of unwavering commitment.",
    ),
    MilestoneDefinition(
        "2y", "2 Years", "🎯", 730,
        "Two years of building a new life.",
        ShopLink("Shop 2-Year Tokens", _COLLECTIONS),
    ),
    MilestoneDefinition(
        "5y", "5 Years", "👑", 1826,
        "Five years — a testament to enduring strength.",
        ShopLink("Shop 5-Year Tokens", _COLLECTIONS),
    ),
    MilestoneDefinition(
        "10y", "10 Years", "🏅", 3652,
        "A decade of recovery — truly inspiring.",
        ShopLink("Shop 10-Year Tokens", _COLLECTIONS),
    ),
    MilestoneDefinition(
        "15y", "15 Years", "🌈", 5479,
        "Fifteen years of living proof that recovery works.",
    ),
    MilestoneDefinition(
        "20y", "20 Years", "✨", 7305,
        "Two decades of transformation and service.",
    ),
    MilestoneDefinition(
        "25y", "25 Years", "🏛️", 9131,
        "A quarter century — a legacy of recovery.",
    ),
)

if any(a.days >= b.days for a, b in zip(MILESTONES, MILESTONES[1:])):
    raise ValueError("milestone catalog must be sorted by ascending days")

MAX_THRESHOLD: int = MILESTONES[-1].days

_BY_ID: Dict[str, MilestoneDefinition] = {m.id: m for m in MILESTONES}


def get_milestone(milestone_id: str) -> MilestoneDefinition:
    """Retrieve a catalog entry by id (raise KeyError if not present)."""
    return _BY_ID[milestone_id]
