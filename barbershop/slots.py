# barbershop/slots.py

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from .appointments import get_appointments_by_date_range
from .catalog import get_service_by_id
from .core import at_minutes, day_bounds, format_hhmm, overlaps, parse_hhmm, parse_iso_date
from .errors import NotFound, StorageUnavailable
from .work_hours import get_work_hours_by_day

logger = logging.getLogger(__name__)


def get_available_slots(session: Session, date, service_id: int, now: Optional[datetime] = None) -> dict:
    day = parse_iso_date(date)
    now = now or datetime.now()

    try:
        # 1) Work hours for the weekday
        work_hour = get_work_hours_by_day(session, day.weekday())
        if work_hour is None or not work_hour.is_working_day:
            return {"is_working_day": False, "slots": []}

        # 2) Service duration
        service = get_service_by_id(session, service_id)
        if service is None:
            raise NotFound("Service not found")

        # 3) Bookings that start on this day
        day_start, day_end = day_bounds(day)
        booked = [
            (a.appointment_date, a.end_time)
            for a in get_appointments_by_date_range(session, day_start, day_end)
        ]
    except OperationalError as exc:
        logger.exception("Could not read availability for %s", day)
        raise StorageUnavailable("Storage is unavailable") from exc

    # 4) Walk the grid in minutes since midnight
    open_at = parse_hhmm(work_hour.start_time)
    close_at = parse_hhmm(work_hour.end_time)
    step = work_hour.slot_duration_minutes
    duration = service.duration_minutes

    slots = []
    offset = open_at
    while offset + duration <= close_at:
        slot_start = at_minutes(day, offset)
        slot_end = slot_start + timedelta(minutes=duration)

        taken = any(overlaps(slot_start, slot_end, start, end) for start, end in booked)
        slots.append({"time": format_hhmm(offset), "available": not taken and slot_start >= now})
        offset += step

    return {"is_working_day": True, "slots": slots}
