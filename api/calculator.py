"""
api.calculator
==============

FastAPI router for the milestone catalog and the milestone calculator.
"""

import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from milestones.calculator import calculate_milestones, elapsed_days
from milestones.catalog import MILESTONES
from milestones.models import MilestoneDefinition
from milestones.settings import Settings
from .deps import get_now, get_settings

router = APIRouter(prefix="/milestones", tags=["milestones"])

logger = logging.getLogger(__name__)


# ---------- response projections ----------
class ShopLinkOut(BaseModel):
    label: str
    href: str


class MilestoneOut(BaseModel):
    id: str
    label: str
    emoji: str
    days: int
    description: str
    shop_link: Optional[ShopLinkOut] = None


class AchievedOut(BaseModel):
    milestone: MilestoneOut
    date_achieved: datetime


class NextOut(BaseModel):
    milestone: MilestoneOut
    target_date: datetime
    days_remaining: int


class CalculationOut(BaseModel):
    sobriety_date: date
    total_days: int
    years: int
    months: int
    days: int
    total_months: int
    achieved: List[AchievedOut]
    next: Optional[NextOut] = None
    share_text: str


def _milestone_out(m: MilestoneDefinition, settings: Settings) -> MilestoneOut:
    shop = None
    if m.shop_link is not None:
        base = str(settings.shop_base_url).rstrip("/")
        shop = ShopLinkOut(label=m.shop_link.label, href=f"{base}{m.shop_link.href}")
    return MilestoneOut(
        id=m.id,
        label=m.label,
        emoji=m.emoji,
        days=m.days,
        description=m.description,
        shop_link=shop,
    )


# ---------- GET /milestones ----------
@router.get("", response_model=List[MilestoneOut])
def list_milestones(settings: Settings = Depends(get_settings)):
    """The full catalog, ascending by day threshold."""
    return [_milestone_out(m, settings) for m in MILESTONES]


# ---------- GET /milestones/calculate ----------
@router.get("/calculate", response_model=CalculationOut)
def calculate(
    sobriety_date: date = Query(..., description="Sobriety date (YYYY-MM-DD)"),
    now: datetime = Depends(get_now),
    settings: Settings = Depends(get_settings),
):
    """
    Days sober, calendar breakdown, achieved milestones and the next one.

    Dates in the future are rejected here even though the calculator
    itself accepts them.
    """
    if elapsed_days(sobriety_date, now) < 0:
        raise HTTPException(status_code=400, detail="The sobriety date cannot be in the future.")

    result = calculate_milestones(sobriety_date, now=now)
    logger.info(f"Calculated milestones for {sobriety_date}: {result.total_days} days")

    upcoming = None
    if result.next is not None:
        upcoming = NextOut(
            milestone=_milestone_out(result.next.milestone, settings),
            target_date=result.next.target_date,
            days_remaining=result.next.days_remaining,
        )

    return CalculationOut(
        sobriety_date=sobriety_date,
        total_days=result.total_days,
        years=result.years,
        months=result.months,
        days=result.days,
        total_months=result.total_months,
        achieved=[
            AchievedOut(milestone=_milestone_out(a.milestone, settings), date_achieved=a.date_achieved)
            for a in result.achieved
        ],
        next=upcoming,
        share_text=result.share_text(),
    )
