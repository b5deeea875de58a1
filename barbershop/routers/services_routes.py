# barbershop/routers/services_routes.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from barbershop import catalog
from barbershop.db import get_session
from barbershop.deps import require_admin
from barbershop.schemas import Message, ServiceCreate, ServicePublic, ServiceUpdate

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


@router.get("", response_model=List[ServicePublic])
def list_services(session: Session = Depends(get_session)):
    return catalog.list_services(session, active_only=True)


@router.get("/all", response_model=List[ServicePublic])
def list_all_services(
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return catalog.list_services(session, active_only=False)


@router.post("/seed", response_model=Message)
def seed_services(
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    catalog.seed_default_services(session)
    return {"success": True}


@router.get("/{service_id}", response_model=ServicePublic)
def get_service(service_id: int, session: Session = Depends(get_session)):
    service = catalog.get_service_by_id(session, service_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.post("", response_model=ServicePublic, status_code=201)
def create_service(
    service: ServiceCreate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return catalog.create_service(session, **service.model_dump())


@router.patch("/{service_id}", response_model=ServicePublic)
def update_service(
    service_id: int,
    update: ServiceUpdate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    return catalog.update_service(session, service_id, **update.model_dump(exclude_unset=True))


@router.delete("/{service_id}", response_model=Message)
def delete_service(
    service_id: int,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    catalog.delete_service(session, service_id)
    return {"success": True}
