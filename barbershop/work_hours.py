# barbershop/work_hours.py

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .core import parse_hhmm
from .errors import Conflict, InvalidInput
from .models import WorkHour

logger = logging.getLogger(__name__)

MIN_SLOT_MINUTES = 5

# Sunday-Thursday working, Friday-Saturday off (weekday(): 0 = Monday)
DEFAULT_WORK_HOURS = [
    {"day_of_week": 0, "start_time": "09:00", "end_time": "18:00", "is_working_day": True},
    {"day_of_week": 1, "start_time": "09:00", "end_time": "18:00", "is_working_day": True},
    {"day_of_week": 2, "start_time": "09:00", "end_time": "18:00", "is_working_day": True},
    {"day_of_week": 3, "start_time": "09:00", "end_time": "18:00", "is_working_day": True},
    {"day_of_week": 4, "start_time": "09:00", "end_time": "14:00", "is_working_day": False},
    {"day_of_week": 5, "start_time": "09:00", "end_time": "14:00", "is_working_day": False},
    {"day_of_week": 6, "start_time": "09:00", "end_time": "18:00", "is_working_day": True},
]


def list_work_hours(session: Session) -> List[WorkHour]:
    return session.exec(select(WorkHour).order_by(WorkHour.day_of_week)).all()


def get_work_hours_by_day(session: Session, day_of_week: int) -> Optional[WorkHour]:
    return session.exec(
        select(WorkHour).where(WorkHour.day_of_week == day_of_week)
    ).first()


def validate_work_hours(day_of_week: int, start_time: str, end_time: str, is_working_day: bool,
                        slot_duration_minutes: int) -> None:
    if not (0 <= day_of_week <= 6):
        raise InvalidInput("day_of_week must be an integer between 0 and 6")
    start = parse_hhmm(start_time)
    end = parse_hhmm(end_time)
    if is_working_day and start >= end:
        raise InvalidInput("start_time must be before end_time on a working day")
    if slot_duration_minutes < MIN_SLOT_MINUTES:
        raise InvalidInput(f"slot_duration_minutes must be at least {MIN_SLOT_MINUTES}")


def _apply(row: WorkHour, start_time: str, end_time: str, is_working_day: bool, slot_duration_minutes: int) -> None:
    row.start_time = start_time
    row.end_time = end_time
    row.is_working_day = is_working_day
    row.slot_duration_minutes = slot_duration_minutes
    row.updated_at = datetime.now()


def upsert_work_hours(
    session: Session,
    day_of_week: int,
    start_time: str,
    end_time: str,
    is_working_day: bool,
    slot_duration_minutes: int = 30,
) -> WorkHour:
    """Replace the row for `day_of_week`, inserting it if the day has none."""
    validate_work_hours(day_of_week, start_time, end_time, is_working_day, slot_duration_minutes)

    row = get_work_hours_by_day(session, day_of_week)
    if row is None:
        row = WorkHour(
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            is_working_day=is_working_day,
            slot_duration_minutes=slot_duration_minutes,
        )
    else:
        _apply(row, start_time, end_time, is_working_day, slot_duration_minutes)
    session.add(row)

    try:
        session.commit()
    except IntegrityError:
        # another request inserted this weekday first; overwrite its row instead
        session.rollback()
        row = get_work_hours_by_day(session, day_of_week)
        if row is None:
            raise Conflict(f"Work hours for day {day_of_week} are being changed, try again")
        _apply(row, start_time, end_time, is_working_day, slot_duration_minutes)
        session.add(row)
        session.commit()

    session.refresh(row)
    logger.info(
        "Work hours for day %s set to %s-%s (working=%s, slot=%s min)",
        day_of_week, start_time, end_time, is_working_day, slot_duration_minutes,
    )
    return row


def initialize_default_work_hours(session: Session) -> bool:
    """Insert the default weekly schedule if no work hours exist yet."""
    if session.exec(select(WorkHour)).first() is not None:
        return False

    for day in DEFAULT_WORK_HOURS:
        session.add(WorkHour(slot_duration_minutes=30, **day))
    session.commit()
    logger.info("Initialised default work hours")
    return True
