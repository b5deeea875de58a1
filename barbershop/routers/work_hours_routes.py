# barbershop/routers/work_hours_routes.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlmodel import Session

from barbershop import work_hours
from barbershop.db import get_session
from barbershop.deps import require_admin
from barbershop.schemas import Message, WorkHourPublic, WorkHourUpdate

router = APIRouter(
    prefix="/work-hours",
    tags=["work-hours"],
)


@router.get("", response_model=List[WorkHourPublic])
def list_work_hours(session: Session = Depends(get_session)):
    return work_hours.list_work_hours(session)


@router.post("/initialize", response_model=Message)
def initialize_work_hours(
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    work_hours.initialize_default_work_hours(session)
    return {"success": True}


@router.get("/{day_of_week}", response_model=WorkHourPublic)
def get_work_hours(
    day_of_week: int = Path(ge=0, le=6),
    session: Session = Depends(get_session),
):
    row = work_hours.get_work_hours_by_day(session, day_of_week)
    if row is None:
        raise HTTPException(status_code=404, detail="Work hours not set for that day")
    return row


@router.put("/{day_of_week}", response_model=WorkHourPublic)
def upsert_work_hours(
    update: WorkHourUpdate,
    day_of_week: int = Path(ge=0, le=6),
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return work_hours.upsert_work_hours(
        session,
        day_of_week,
        update.start_time,
        update.end_time,
        update.is_working_day,
        update.slot_duration_minutes,
    )
