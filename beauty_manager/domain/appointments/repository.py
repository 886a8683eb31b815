"""Appointment repository - Database operations for appointments

Reads hydrate the client and the booked services in the same call so the
router never touches lazy relationships.
"""

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Appointment, Service


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def _hydrated(db: Session):
        return db.query(Appointment).options(
            joinedload(Appointment.client),
            selectinload(Appointment.services),
        )

    @staticmethod
    def get_appointments(
        db: Session,
        user_id: int,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        date_before: Optional[datetime] = None,
        statuses: Optional[Iterable[str]] = None,
        client_id: Optional[int] = None,
        newest_first: bool = False,
    ) -> list[Appointment]:
        """
        Get appointments for a user.

        ``date_to`` is an inclusive upper bound, ``date_before`` an exclusive one.
        Default order is (date, start_time) ascending.
        """
        query = AppointmentRepository._hydrated(db).filter(Appointment.user_id == user_id)

        if date_from is not None:
            query = query.filter(Appointment.date >= date_from)
        if date_to is not None:
            query = query.filter(Appointment.date <= date_to)
        if date_before is not None:
            query = query.filter(Appointment.date < date_before)
        if statuses is not None:
            query = query.filter(Appointment.status.in_(list(statuses)))
        if client_id is not None:
            query = query.filter(Appointment.client_id == client_id)

        if newest_first:
            return query.order_by(Appointment.date.desc(), Appointment.start_time.desc()).all()
        return query.order_by(Appointment.date, Appointment.start_time).all()

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: int, user_id: int) -> Optional[Appointment]:
        return (
            AppointmentRepository._hydrated(db)
            .filter(Appointment.id == appointment_id, Appointment.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_appointment(
        db: Session, user_id: int, services: list[Service], **appointment_data
    ) -> Appointment:
        appointment = Appointment(user_id=user_id, **appointment_data)
        appointment.services = services
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_appointment(
        db: Session,
        appointment: Appointment,
        services: Optional[list[Service]] = None,
        **updates,
    ) -> Appointment:
        """Update an appointment with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(appointment, key):
                setattr(appointment, key, value)
        if services is not None:
            appointment.services = services

        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()
