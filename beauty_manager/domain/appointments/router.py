"""Appointment router - FastAPI endpoints for bookings"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.periods import ViewMode, start_of_day
from ...shared.validators import to_naive_local
from .schemas import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
    TodayEarningsResponse,
)
from .service import AppointmentService, to_appointment_response

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


@router.get("", response_model=list[AppointmentResponse])
async def get_appointments(
    view: Optional[ViewMode] = Query(None, description="day, week or month"),
    date: Optional[datetime] = Query(None, description="Reference date for the view"),
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """List appointments sorted by date and start time"""
    appointments = service.get_appointments(current_user, view, to_naive_local(date))
    return [to_appointment_response(a) for a in appointments]


@router.get("/upcoming", response_model=list[AppointmentResponse])
async def get_upcoming(
    hours: int = Query(3, ge=0, le=24 * 31),
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Scheduled or confirmed appointments in the next few hours"""
    return [to_appointment_response(a) for a in service.get_upcoming(current_user, hours)]


@router.get("/today-earnings", response_model=TodayEarningsResponse)
async def get_today_projected_earnings(
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    now = datetime.now()
    total = service.get_today_projected_earnings(current_user, now)
    return TodayEarningsResponse(date=start_of_day(now), total=total)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    return to_appointment_response(service.get_appointment(appointment_id, current_user))


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment"""
    return to_appointment_response(service.create_appointment(data, current_user))


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    return to_appointment_response(
        service.update_appointment(appointment_id, data, current_user)
    )


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: int,
    reason: Optional[str] = Query(None, description="Cancel instead of deleting"),
    current_user: User = Depends(get_current_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Delete an appointment, or cancel it when a reason is given"""
    return service.delete_appointment(appointment_id, current_user, reason)
