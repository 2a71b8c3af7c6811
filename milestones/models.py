"""
milestones.models
=================

Dataclasses describing recovery milestones, the results derived from a
sobriety date, and the members of a customer's recovery circle.  These
objects are intentionally lightweight; they carry **no** external‑library
dependencies so that importing `milestones` stays fast.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ShopLink:
    """Promotional link shown next to a milestone."""
    label: str
    href: str


@dataclass(frozen=True)
class MilestoneDefinition:
    """
    One entry of the fixed milestone catalog.

    Parameters
    ----------
    id : str
        Short stable identifier (e.g., "90d").
    label : str
        Display label (e.g., "90 Days").
    emoji : str
        Decorative glyph used by the storefront cards.
    days : int
        Threshold in whole days since the sobriety date.
    description : str
        One‑line encouragement text.
    shop_link : ShopLink | None, default=None
        Optional link to the matching token collection.
    """
    id: str
    label: str
    emoji: str
    days: int
    description: str
    shop_link: Optional[ShopLink] = None


@dataclass(frozen=True)
class AchievedMilestone:
    milestone: MilestoneDefinition
    date_achieved: datetime


@dataclass(frozen=True)
class NextMilestone:
    milestone: MilestoneDefinition
    target_date: datetime
    days_remaining: int


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'' if n == 1 else 's'}"


@dataclass(frozen=True)
class CalculationResult:
    """
    Everything the calculator knows about one sobriety date at one instant.

    ``total_days`` drives the milestone thresholds while ``years``,
    ``months`` and ``days`` are the calendar breakdown used for display.
    The two are computed independently and are not expected to agree.
    """
    total_days: int
    years: int
    months: int
    days: int
    achieved: List[AchievedMilestone] = field(default_factory=list)
    next: Optional[NextMilestone] = None

    # Convenience helpers -------------------------------------------------
    @property
    def total_months(self) -> int:
        """Whole months of the calendar breakdown (years folded in)."""
        return self.years * 12 + self.months

    def duration_text(self) -> str:
        """Human readable breakdown such as ``"1 year, 2 months, 3 days"``."""
        parts = []
        if self.years > 0:
            parts.append(_plural(self.years, "year"))
        if self.months > 0:
            parts.append(_plural(self.months, "month"))
        if self.days > 0:
            parts.append(_plural(self.days, "day"))
        return ", ".join(parts) or "0 days"

    def share_text(self) -> str:
        """Sentence offered to the user for copy / social sharing."""
        return (
            f"I'm celebrating {self.duration_text()} of recovery — "
            f"that's {self.total_days:,} days! Every day counts. 💪 "
            "#Recovery #Sobriety"
        )


# ---------------------------------------------------------------------
# Recovery circle
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class CircleMilestone:
    days: int
    label: str


@dataclass(frozen=True)
class NextCircleMilestone:
    days: int
    label: str
    days_until: int


@dataclass
class RecoveryCircleMember:
    """
    A person whose clean date the customer follows.

    ``clean_date``, ``created_at`` and ``updated_at`` are kept as ISO
    strings, exactly as they are stored in the serialised circle.
    """
    id: str
    name: str
    clean_date: str
    relationship: str
    recovery_program: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""

    # Wire format ---------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "cleanDate": self.clean_date,
            "relationship": self.relationship,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.recovery_program is not None:
            data["recoveryProgram"] = self.recovery_program
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecoveryCircleMember":
        """Build a member from its camelCase dict (raise KeyError if incomplete)."""
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            clean_date=str(data["cleanDate"]),
            relationship=str(data["relationship"]),
            recovery_program=data.get("recoveryProgram"),
            created_at=str(data.get("createdAt", "")),
            updated_at=str(data.get("updatedAt", "")),
        )
