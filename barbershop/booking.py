# barbershop/booking.py

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional, Union

from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from .appointments import find_overlapping
from .catalog import get_service_by_id
from .core import parse_iso_datetime, to_local_naive
from .db import begin_write_locked
from .errors import BookingError, Conflict, NotFound, StorageUnavailable
from .models import Appointment, User
from .notifications import notify_owner

logger = logging.getLogger(__name__)

SERIALIZATION_FAILURE = "40001"


def _is_serialization_failure(exc: OperationalError) -> bool:
    # psycopg2 sets pgcode, psycopg 3 sets sqlstate
    code = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
    return code == SERIALIZATION_FAILURE


def create_appointment(
    session: Session,
    user_id: int,
    service_id: int,
    appointment_date: Union[str, datetime],
    customer_name: Optional[str] = None,
    customer_phone: Optional[str] = None,
    notes: Optional[str] = None,
    notifier: Callable[[str, str], bool] = notify_owner,
) -> dict:
    """Book a pending appointment, re-checking overlaps under the write lock."""
    if isinstance(appointment_date, datetime):
        appt_start = to_local_naive(appointment_date)
    else:
        appt_start = parse_iso_datetime(appointment_date)

    try:
        begin_write_locked(session)

        # 1) Resolve service (inactive ones can still be booked)
        service = get_service_by_id(session, service_id)
        if service is None:
            raise NotFound("Service not found")

        # 2) Build appointment interval
        appt_end = appt_start + timedelta(minutes=service.duration_minutes)

        # 3) Reject overlaps with any non-cancelled appointment
        clashes = find_overlapping(session, appt_start, appt_end)
        if clashes:
            logger.info(
                "Booking %s-%s rejected, overlaps appointment(s) %s",
                appt_start, appt_end, [a.id for a in clashes],
            )
            raise Conflict("This time slot is no longer available")

        if customer_name is None:
            user = session.get(User, user_id)
            customer_name = user.name if user is not None else None

        # 4) Create and save appointment
        db_appt = Appointment(
            user_id=user_id,
            service_id=service_id,
            appointment_date=appt_start,
            end_time=appt_end,
            status="pending",
            customer_name=customer_name,
            customer_phone=customer_phone,
            notes=notes,
        )
        service_name = service.name
        session.add(db_appt)
        session.commit()
    except BookingError:
        session.rollback()
        raise
    except OperationalError as exc:
        session.rollback()
        if _is_serialization_failure(exc):
            raise Conflict("This time slot is no longer available") from exc
        logger.exception("Booking failed: storage error")
        raise StorageUnavailable("Storage is unavailable") from exc

    session.refresh(db_appt)
    logger.info("Booked appointment %s for user %s at %s", db_appt.id, user_id, appt_start)

    # 5) Tell the owner; a failure here never undoes the booking
    try:
        notifier(
            "📅 New Appointment Booking",
            f"New appointment booked!\n\n"
            f"Customer: {customer_name or 'Unknown'}\n"
            f"Service: {service_name}\n"
            f"Date: {appt_start:%Y-%m-%d}\n"
            f"Time: {appt_start:%H:%M}\n\n"
            f"Please review and confirm the appointment.",
        )
    except Exception as e:
        logger.warning("Could not notify owner about appointment %s: %s", db_appt.id, e)

    return {"id": db_appt.id}
