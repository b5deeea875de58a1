# barbershop/deps.py

from fastapi import Depends, HTTPException

from .auth import get_current_user


def require_role(user: dict, role: str):
    if user["role"] != role:
        raise HTTPException(status_code=403, detail="Admin access required")


def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    require_role(current_user, "admin")
    return current_user


def is_admin(user: dict) -> bool:
    return user["role"] == "admin"
