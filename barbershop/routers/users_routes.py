# barbershop/routers/users_routes.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from barbershop import config
from barbershop.db import get_session
from barbershop.models import User
from barbershop.schemas import UserCreate, UserPublic, UserUpdate
from barbershop.auth import get_current_user, hash_password

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["users"],
)

@router.get("/me", response_model=UserPublic)
def me(current_user: dict = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=UserPublic)
def update_me(
    update: UserUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    db_user = session.get(User, current_user["id"])
    db_user.name = update.name
    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    return db_user


@router.post("/users", status_code=201, response_model=UserPublic)
def create_user(
    user: UserCreate,
    session: Session = Depends(get_session),
):
    # 1) Check if phone already exists
    existing = session.exec(
        select(User).where(User.phone == user.phone)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="Phone already registered")

    # 2) Create user in DB; configured owner phones become admins
    role = "admin" if user.phone in config.ADMIN_PHONES else "user"
    db_user = User(
        phone=user.phone,
        name=user.name,
        password_hash=hash_password(user.password),
        role=role,
    )

    session.add(db_user)
    session.commit()
    session.refresh(db_user)  # fills db_user.id
    logger.info("Registered user %s (%s)", db_user.id, role)

    return db_user
