# barbershop/catalog.py

import logging
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session, select

from .errors import InvalidInput, NotFound
from .models import Service

logger = logging.getLogger(__name__)

MIN_DURATION_MINUTES = 5

DEFAULT_SERVICES = [
    {"name": "Haircut", "name_localized": "قص شعر", "duration_minutes": 30, "price": 50},
    {"name": "Beard Trim", "name_localized": "تهذيب اللحية", "duration_minutes": 15, "price": 30},
    {"name": "Fade", "name_localized": "تدريج", "duration_minutes": 30, "price": 60},
    {"name": "Shape Up", "name_localized": "تحديد", "duration_minutes": 15, "price": 25},
    {"name": "Cut and Beard", "name_localized": "قص شعر ولحية", "duration_minutes": 45, "price": 75},
]

EDITABLE_FIELDS = ("name", "name_localized", "description", "duration_minutes", "price", "is_active")


def _validate(fields: dict) -> None:
    if "name" in fields and not (fields["name"] or "").strip():
        raise InvalidInput("name must not be empty")
    if "duration_minutes" in fields and fields["duration_minutes"] < MIN_DURATION_MINUTES:
        raise InvalidInput(f"duration_minutes must be at least {MIN_DURATION_MINUTES}")
    if "price" in fields and fields["price"] < 0:
        raise InvalidInput("price cannot be negative")


def list_services(session: Session, active_only: bool = True) -> List[Service]:
    stmt = select(Service)
    if active_only:
        stmt = stmt.where(Service.is_active == True)  # noqa: E712
    return session.exec(stmt.order_by(Service.id)).all()


def get_service_by_id(session: Session, service_id: int) -> Optional[Service]:
    return session.get(Service, service_id)


def create_service(
    session: Session,
    name: str,
    duration_minutes: int = 30,
    price: int = 0,
    name_localized: Optional[str] = None,
    description: Optional[str] = None,
) -> Service:
    _validate({"name": name, "duration_minutes": duration_minutes, "price": price})
    service = Service(
        name=name,
        name_localized=name_localized,
        description=description,
        duration_minutes=duration_minutes,
        price=price,
    )
    session.add(service)
    session.commit()
    session.refresh(service)
    logger.info("Created service %s (%s, %s min)", service.id, service.name, service.duration_minutes)
    return service


def update_service(session: Session, service_id: int, **fields) -> Service:
    service = session.get(Service, service_id)
    if service is None:
        raise NotFound("Service not found")

    changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS and v is not None}
    _validate(changes)
    for key, value in changes.items():
        setattr(service, key, value)
    service.updated_at = datetime.now()

    session.add(service)
    session.commit()
    session.refresh(service)
    return service


def delete_service(session: Session, service_id: int) -> None:
    """Soft delete: the service disappears from the public list but existing
    appointments keep referencing it."""
    service = session.get(Service, service_id)
    if service is None:
        raise NotFound("Service not found")

    service.is_active = False
    service.updated_at = datetime.now()
    session.add(service)
    session.commit()
    logger.info("Deactivated service %s", service_id)


def seed_default_services(session: Session) -> int:
    if session.exec(select(Service)).first() is not None:
        return 0

    for entry in DEFAULT_SERVICES:
        session.add(Service(**entry))
    session.commit()
    logger.info("Seeded %d default services", len(DEFAULT_SERVICES))
    return len(DEFAULT_SERVICES)
