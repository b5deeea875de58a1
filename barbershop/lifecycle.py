# barbershop/lifecycle.py

import logging
from datetime import datetime
from typing import Optional

from sqlmodel import Session

from . import config
from .errors import Forbidden, InvalidInput, InvalidTransition, NotFound
from .models import Appointment

logger = logging.getLogger(__name__)

STATUSES = ("pending", "confirmed", "cancelled", "completed")

TRANSITIONS = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"completed", "cancelled"},
    "cancelled": set(),
    "completed": set(),
}


def can_transition(current: str, new: str) -> bool:
    return new in TRANSITIONS.get(current, set())


def _get_or_404(session: Session, appointment_id: int) -> Appointment:
    appointment = session.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFound("Appointment not found")
    return appointment


def _write_status(session: Session, appointment: Appointment, status: str) -> Appointment:
    appointment.status = status
    appointment.updated_at = datetime.now()
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    return appointment


def update_appointment_status(session: Session, appointment_id: int, status: str, strict: Optional[bool] = None) -> Appointment:
    """Admin status change. The appointment time is not re-checked."""
    if status not in STATUSES:
        raise InvalidInput(f"status must be one of {', '.join(STATUSES)}")
    strict = config.STRICT_STATUS_TRANSITIONS if strict is None else strict

    appointment = _get_or_404(session, appointment_id)
    if strict and not can_transition(appointment.status, status):
        raise InvalidTransition(f"Cannot change status from {appointment.status} to {status}")

    previous = appointment.status
    _write_status(session, appointment, status)
    logger.info("Appointment %s: %s -> %s", appointment_id, previous, status)
    return appointment


def cancel_appointment(session: Session, actor_user_id: int, actor_is_admin: bool, appointment_id: int) -> Appointment:
    appointment = _get_or_404(session, appointment_id)

    if appointment.user_id != actor_user_id and not actor_is_admin:
        raise Forbidden("Not authorized")

    _write_status(session, appointment, "cancelled")
    logger.info("Appointment %s cancelled by user %s", appointment_id, actor_user_id)
    return appointment
