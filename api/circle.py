"""
api.circle
==========

FastAPI router for a customer's recovery circle.

Every route is scoped by ``owner`` (the customer id).  Mutations answer
with the same ``{success, message, member}`` envelope the account page
expects; validation problems come back as 400 with the first message.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, ValidationError
from sqlmodel import Session

from milestones.circle import (
    CircleMemberForm,
    calculate_days_sober,
    first_error_message,
    get_next_milestone,
    get_relationship_label,
)
from milestones.circle_db import DBCircleManager
from milestones.models import RecoveryCircleMember
from .deps import get_now, get_session

router = APIRouter(prefix="/circle", tags=["circle"])

logger = logging.getLogger(__name__)


# ---------- request / response projections ----------
class MemberIn(BaseModel):
    name: str = ""
    clean_date: str = ""
    relationship: str = ""
    recovery_program: Optional[str] = None


class NextCircleMilestoneOut(BaseModel):
    days: int
    label: str
    days_until: int


class MemberOut(BaseModel):
    id: str
    name: str
    clean_date: str
    relationship: str
    relationship_label: str
    recovery_program: Optional[str] = None
    created_at: str
    updated_at: str
    days_sober: int
    next_milestone: NextCircleMilestoneOut


class MutationOut(BaseModel):
    success: bool
    message: str
    member: Optional[MemberOut] = None


def _member_out(member: RecoveryCircleMember, now: datetime) -> MemberOut:
    nxt = get_next_milestone(member.clean_date, now=now)
    return MemberOut(
        id=member.id,
        name=member.name,
        clean_date=member.clean_date,
        relationship=member.relationship,
        relationship_label=get_relationship_label(member.relationship),
        recovery_program=member.recovery_program,
        created_at=member.created_at,
        updated_at=member.updated_at,
        days_sober=calculate_days_sober(member.clean_date, now=now),
        next_milestone=NextCircleMilestoneOut(days=nxt.days, label=nxt.label, days_until=nxt.days_until),
    )


def _validate(payload: MemberIn, now: datetime) -> CircleMemberForm:
    try:
        return CircleMemberForm.model_validate(payload.model_dump(), context={"now": now})
    except ValidationError as e:
        message = first_error_message(e)
        logger.info(f"Rejected circle member form: {message}")
        raise HTTPException(status_code=400, detail=message)


# ---------- GET /circle/{owner} ----------
@router.get("/{owner}", response_model=List[MemberOut])
def list_circle(
    owner: str,
    now: datetime = Depends(get_now),
    session: Session = Depends(get_session),
):
    """Every member of *owner*'s circle with days sober and next milestone."""
    cm = DBCircleManager(owner, session)
    return [_member_out(m, now) for m in cm]


# ---------- POST /circle/{owner} ----------
@router.post("/{owner}", status_code=201, response_model=MutationOut)
def add_member(
    owner: str,
    payload: MemberIn = Body(...),
    now: datetime = Depends(get_now),
    session: Session = Depends(get_session),
):
    form = _validate(payload, now)
    member = DBCircleManager(owner, session).add(form, now)
    return MutationOut(success=True, message="Member added to your circle", member=_member_out(member, now))


# ---------- PUT /circle/{owner}/{member_id} ----------
@router.put("/{owner}/{member_id}", response_model=MutationOut)
def edit_member(
    owner: str,
    member_id: str,
    payload: MemberIn = Body(...),
    now: datetime = Depends(get_now),
    session: Session = Depends(get_session),
):
    form = _validate(payload, now)
    try:
        member = DBCircleManager(owner, session).update(member_id, form, now)
    except KeyError:
        raise HTTPException(status_code=404, detail="Member not found")
    return MutationOut(success=True, message="Member updated successfully", member=_member_out(member, now))


# ---------- DELETE /circle/{owner}/{member_id} ----------
@router.delete("/{owner}/{member_id}", response_model=MutationOut)
def delete_member(
    owner: str,
    member_id: str,
    session: Session = Depends(get_session),
):
    if not DBCircleManager(owner, session).remove(member_id):
        raise HTTPException(status_code=404, detail="Member not found")
    return MutationOut(success=True, message="Member removed from your circle")
