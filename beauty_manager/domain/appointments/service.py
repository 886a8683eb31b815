"""Appointment service - Business logic for bookings"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import ACTIVE_STATUSES, Appointment, AppointmentStatus, Service, User
from ...shared.periods import ViewMode, day_range, start_of_day, view_range
from ..clients.schemas import ClientResponse
from ..clients.service import ClientService, to_client_response
from ..services.schemas import ServiceResponse
from ..services.service import CatalogService
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentUpdate

logger = logging.getLogger(__name__)


def scheduled_at(day: datetime, start_time: str) -> datetime:
    """Calendar day of ``day`` at the HH:MM ``start_time``"""
    hours, minutes = (int(part) for part in start_time.split(":"))
    return start_of_day(day).replace(hour=hours, minute=minutes)


def unique_ids(ids: list[int]) -> list[int]:
    """Drop repeated ids, keeping the first occurrence order"""
    return list(dict.fromkeys(ids))


def total_price(services: list[Service]) -> float:
    return sum(service.price for service in services)


def to_appointment_response(appointment: Appointment) -> AppointmentResponse:
    client: Optional[ClientResponse] = (
        to_client_response(appointment.client) if appointment.client else None
    )
    return AppointmentResponse(
        id=appointment.id,
        clientId=appointment.client_id,
        client=client,
        serviceIds=appointment.service_ids,
        services=[ServiceResponse.model_validate(s) for s in appointment.services],
        date=appointment.date,
        startTime=appointment.start_time,
        endTime=appointment.end_time,
        status=appointment.status,
        totalAmount=appointment.total_amount,
        notes=appointment.notes,
        cancellationReason=appointment.cancellation_reason,
        created_at=appointment.created_at,
    )


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.catalog = CatalogService(db)
        self.clients = ClientService(db)

    def get_appointments(
        self,
        user: User,
        view: Optional[ViewMode] = None,
        reference_date: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> list[Appointment]:
        """
        List appointments, optionally restricted to a calendar view.

        The view window is anchored at ``reference_date`` (default: now) and
        inclusive on both ends.
        """
        if view is None:
            return self.repo.get_appointments(self.db, user.id)

        start, end = view_range(view, reference_date or now or datetime.now())
        return self.repo.get_appointments(self.db, user.id, date_from=start, date_to=end)

    def get_appointment(self, appointment_id: int, user: User) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id, user.id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    def get_upcoming(
        self, user: User, hours: int = 3, now: Optional[datetime] = None
    ) -> list[Appointment]:
        """Scheduled or confirmed appointments starting within the next ``hours``"""
        now = now or datetime.now()
        return self.repo.get_appointments(
            self.db,
            user.id,
            date_from=now,
            date_to=now + timedelta(hours=hours),
            statuses=ACTIVE_STATUSES,
        )

    def get_today_projected_earnings(self, user: User, now: Optional[datetime] = None) -> float:
        """Sum of today's scheduled or confirmed bookings"""
        today, _ = day_range(now or datetime.now())
        appointments = self.repo.get_appointments(
            self.db,
            user.id,
            date_from=today,
            date_before=today + timedelta(days=1),
            statuses=ACTIVE_STATUSES,
        )
        return sum(a.total_amount for a in appointments)

    def create_appointment(self, data: AppointmentCreate, user: User) -> Appointment:
        """Book an appointment, pricing it from the catalog at booking time"""
        self.clients.get_client(data.clientId, user)
        services = self.catalog.get_services_by_ids(unique_ids(data.serviceIds), user)

        appointment = self.repo.create_appointment(
            self.db,
            user.id,
            services,
            client_id=data.clientId,
            date=scheduled_at(data.date, data.startTime),
            start_time=data.startTime,
            end_time=data.endTime,
            status=(data.status or AppointmentStatus.SCHEDULED).value,
            total_amount=total_price(services),
            notes=data.notes,
        )
        logger.info(
            f"Appointment {appointment.id} booked for user_id: {user.id}, total={appointment.total_amount}"
        )
        return appointment

    def update_appointment(
        self, appointment_id: int, data: AppointmentUpdate, user: User
    ) -> Appointment:
        """Merge the sent fields; a new service list reprices the booking"""
        appointment = self.get_appointment(appointment_id, user)

        updates = {}
        services = None
        if data.clientId is not None:
            self.clients.get_client(data.clientId, user)
            updates["client_id"] = data.clientId
        if data.serviceIds is not None:
            services = self.catalog.get_services_by_ids(unique_ids(data.serviceIds), user)
            updates["total_amount"] = total_price(services)
        if data.date is not None or data.startTime is not None:
            updates["date"] = scheduled_at(
                data.date or appointment.date, data.startTime or appointment.start_time
            )
        if data.startTime is not None:
            updates["start_time"] = data.startTime
        if data.endTime is not None:
            updates["end_time"] = data.endTime
        if data.status is not None:
            updates["status"] = data.status.value
        if data.notes is not None:
            updates["notes"] = data.notes
        if data.cancellationReason is not None:
            updates["cancellation_reason"] = data.cancellationReason

        return self.repo.update_appointment(self.db, appointment, services=services, **updates)

    def delete_appointment(
        self, appointment_id: int, user: User, reason: Optional[str] = None
    ) -> dict:
        """Cancel the appointment when a reason is given, delete it otherwise"""
        appointment = self.get_appointment(appointment_id, user)

        if reason:
            self.repo.update_appointment(
                self.db,
                appointment,
                status=AppointmentStatus.CANCELLED.value,
                cancellation_reason=reason,
            )
            logger.info(f"Appointment {appointment_id} cancelled for user_id: {user.id}")
            return {"message": "Appointment cancelled"}

        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"Appointment {appointment_id} deleted for user_id: {user.id}")
        return {"message": "Appointment deleted"}
