# barbershop/appointments.py
#
# Appointment store: read projections. Writes live in booking.py and lifecycle.py.

from datetime import datetime
from typing import List, Optional

from sqlmodel import Session, select

from .models import Appointment

CANCELLED = "cancelled"


def get_appointment_by_id(session: Session, appointment_id: int) -> Optional[Appointment]:
    return session.get(Appointment, appointment_id)


def get_appointments_by_user(session: Session, user_id: int) -> List[Appointment]:
    stmt = (
        select(Appointment)
        .where(Appointment.user_id == user_id)
        .order_by(Appointment.appointment_date.desc())
    )
    return session.exec(stmt).all()


def get_upcoming_appointments_by_user(session: Session, user_id: int, now: Optional[datetime] = None) -> List[Appointment]:
    now = now or datetime.now()
    stmt = (
        select(Appointment)
        .where(Appointment.user_id == user_id)
        .where(Appointment.appointment_date >= now)
        .order_by(Appointment.appointment_date)
    )
    return session.exec(stmt).all()


def list_all_appointments(session: Session) -> List[Appointment]:
    return session.exec(select(Appointment).order_by(Appointment.appointment_date.desc())).all()


def get_upcoming_appointments(session: Session, now: Optional[datetime] = None) -> List[Appointment]:
    now = now or datetime.now()
    stmt = (
        select(Appointment)
        .where(Appointment.appointment_date >= now)
        .order_by(Appointment.appointment_date)
    )
    return session.exec(stmt).all()


def get_pending_appointments(session: Session) -> List[Appointment]:
    stmt = (
        select(Appointment)
        .where(Appointment.status == "pending")
        .order_by(Appointment.appointment_date)
    )
    return session.exec(stmt).all()


def get_appointments_by_date_range(
    session: Session,
    start: datetime,
    end: datetime,
    include_cancelled: bool = False,
) -> List[Appointment]:
    """Appointments starting within [start, end], both ends inclusive."""
    stmt = (
        select(Appointment)
        .where(Appointment.appointment_date >= start)
        .where(Appointment.appointment_date <= end)
    )
    if not include_cancelled:
        stmt = stmt.where(Appointment.status != CANCELLED)
    return session.exec(stmt.order_by(Appointment.appointment_date)).all()


def find_overlapping(session: Session, start: datetime, end: datetime) -> List[Appointment]:
    """Non-cancelled appointments whose [appointment_date, end_time) intersects [start, end)."""
    stmt = (
        select(Appointment)
        .where(Appointment.status != CANCELLED)
        .where(Appointment.appointment_date < end)
        .where(Appointment.end_time > start)
    )
    return session.exec(stmt).all()
