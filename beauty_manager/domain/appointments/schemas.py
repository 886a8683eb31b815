"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import AppointmentStatus
from ...shared.validators import to_naive_local, validate_time_of_day
from ..clients.schemas import ClientResponse
from ..services.schemas import ServiceResponse


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment"""

    clientId: int
    serviceIds: list[int] = Field(min_length=1)
    date: datetime
    startTime: str
    endTime: str
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_times(cls, v):
        return validate_time_of_day(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_naive_local(v)


class AppointmentUpdate(BaseModel):
    """Schema for updating an appointment, only the sent fields change"""

    clientId: Optional[int] = None
    serviceIds: Optional[list[int]] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None
    cancellationReason: Optional[str] = None

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_times(cls, v):
        return validate_time_of_day(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_naive_local(v)


class AppointmentResponse(BaseModel):
    """Appointment with its client and services expanded"""

    id: int
    clientId: Optional[int] = None
    client: Optional[ClientResponse] = None
    serviceIds: list[int]
    services: list[ServiceResponse]
    date: datetime
    startTime: str
    endTime: str
    status: AppointmentStatus
    totalAmount: float
    notes: Optional[str] = None
    cancellationReason: Optional[str] = None
    created_at: Optional[datetime] = None


class TodayEarningsResponse(BaseModel):
    date: datetime
    total: float
