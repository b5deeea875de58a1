# barbershop/schemas.py

from pydantic import BaseModel, ConfigDict, Field
from enum import Enum
from datetime import datetime
from typing import List, Optional

PHONE_PATTERN = r"^(\+966|0)5\d{8}$"
HHMM_PATTERN = r"^\d{2}:\d{2}$"


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class UserRole(str, Enum):
    user = "user"
    admin = "admin"

class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"

class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    phone: str
    name: Optional[str] = None
    role: UserRole

class UserCreate(BaseModel):
    phone: str = Field(pattern=PHONE_PATTERN)
    password: str = Field(min_length=8, max_length=72)
    name: Optional[str] = Field(default=None, max_length=100)

class UserUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)

class ServicePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    name_localized: Optional[str] = None
    description: Optional[str] = None
    duration_minutes: int
    price: int
    is_active: bool

class ServiceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    name_localized: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    duration_minutes: int = Field(default=30, ge=5)
    price: int = Field(default=0, ge=0)

class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name_localized: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, ge=5)
    price: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None

class WorkHourPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day_of_week: int
    start_time: str
    end_time: str
    is_working_day: bool
    slot_duration_minutes: int

class WorkHourUpdate(BaseModel):
    start_time: str = Field(pattern=HHMM_PATTERN)
    end_time: str = Field(pattern=HHMM_PATTERN)
    is_working_day: bool
    slot_duration_minutes: int = Field(default=30, ge=5)

class Slot(BaseModel):
    time: str
    available: bool

class AvailabilityResponse(BaseModel):
    is_working_day: bool
    slots: List[Slot]

class AppointmentCreate(BaseModel):
    service_id: int
    appointment_date: str  # ISO-8601
    customer_name: Optional[str] = Field(default=None, max_length=100)
    customer_phone: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = None

class AppointmentCreated(BaseModel):
    id: int

class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    service_id: int
    appointment_date: datetime
    end_time: datetime
    status: AppointmentStatus
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None
    service: Optional[ServicePublic] = None
    user: Optional[UserPublic] = None

class StatusUpdate(BaseModel):
    status: AppointmentStatus

class Message(BaseModel):
    success: bool = True
