# barbershop/routers/appointments_routes.py

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from barbershop import appointments as store
from barbershop.booking import create_appointment as book
from barbershop.db import get_session
from barbershop.models import Service, User
from barbershop.schemas import (
    AppointmentCreate,
    AppointmentCreated,
    AppointmentPublic,
    AvailabilityResponse,
    Message,
    StatusUpdate,
)
from barbershop.auth import get_current_user
from barbershop.deps import is_admin, require_admin
from barbershop.lifecycle import cancel_appointment as cancel, update_appointment_status
from barbershop.slots import get_available_slots


router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
)


def _enrich(session: Session, appts, with_user: bool = False) -> List[dict]:
    # join Service (and User for admin views) onto each row
    services = {}
    users = {}
    result = []
    for a in appts:
        if a.service_id not in services:
            services[a.service_id] = session.get(Service, a.service_id)
        row = a.model_dump()
        row["service"] = services[a.service_id]
        if with_user:
            if a.user_id not in users:
                users[a.user_id] = session.get(User, a.user_id)
            row["user"] = users[a.user_id]
        result.append(row)
    return result


@router.get("/available-slots", response_model=AvailabilityResponse)
def available_slots(
    date: date,
    service_id: int,
    session: Session = Depends(get_session),
):
    return get_available_slots(session, date, service_id)


@router.post("", response_model=AppointmentCreated, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return book(
        session,
        user_id=current_user["id"],
        service_id=appt.service_id,
        appointment_date=appt.appointment_date,
        customer_name=appt.customer_name or current_user["name"],
        customer_phone=appt.customer_phone,
        notes=appt.notes,
    )


@router.get("/me", response_model=List[AppointmentPublic])
def my_appointments(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return _enrich(session, store.get_appointments_by_user(session, current_user["id"]))


@router.get("/me/upcoming", response_model=List[AppointmentPublic])
def my_upcoming_appointments(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return _enrich(session, store.get_upcoming_appointments_by_user(session, current_user["id"]))


@router.get("", response_model=List[AppointmentPublic])
def list_all(
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return _enrich(session, store.list_all_appointments(session), with_user=True)


@router.get("/upcoming", response_model=List[AppointmentPublic])
def upcoming(
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return _enrich(session, store.get_upcoming_appointments(session), with_user=True)


@router.get("/pending", response_model=List[AppointmentPublic])
def pending(
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return _enrich(session, store.get_pending_appointments(session), with_user=True)


@router.get("/{appt_id}", response_model=AppointmentPublic)
def get_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    target = store.get_appointment_by_id(session, appt_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Appointment not found")
    if target.user_id != current_user["id"] and not is_admin(current_user):
        raise HTTPException(status_code=403, detail="Not authorized")
    return _enrich(session, [target])[0]


@router.patch("/{appt_id}/cancel", response_model=Message)
def cancel_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    cancel(session, current_user["id"], is_admin(current_user), appt_id)
    return {"success": True}


@router.patch("/{appt_id}/status", response_model=Message)
def update_status(
    appt_id: int,
    update: StatusUpdate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    update_appointment_status(session, appt_id, update.status.value)
    return {"success": True}
