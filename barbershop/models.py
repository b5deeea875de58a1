# barbershop/models.py

from typing import Optional
from datetime import datetime

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    phone: str = Field(index=True, unique=True, max_length=20)
    name: Optional[str] = None
    password_hash: str
    role: str = "user"  # user or admin
    created_at: datetime = Field(default_factory=datetime.now)
    last_signed_in: datetime = Field(default_factory=datetime.now)


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    name_localized: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    duration_minutes: int = 30
    price: int = 0
    # soft delete: past appointments keep pointing at it
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class Appointment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)
    service_id: int = Field(foreign_key="service.id")
    appointment_date: datetime = Field(index=True)  # slot start
    end_time: datetime  # fixed at booking time
    status: str = Field(default="pending", index=True)
    customer_name: Optional[str] = Field(default=None, max_length=100)
    customer_phone: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class WorkHour(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    day_of_week: int = Field(unique=True)  # 0 = Monday ... 6 = Sunday
    start_time: str = Field(max_length=5)  # "09:00"
    end_time: str = Field(max_length=5)  # "18:00"
    is_working_day: bool = True
    slot_duration_minutes: int = 30
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
