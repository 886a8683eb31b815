"""Appointment domain - bookings, calendar views and projected earnings"""

from .router import router
from .service import AppointmentService

__all__ = ["router", "AppointmentService"]
