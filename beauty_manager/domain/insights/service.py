"""Insight service - Loads completed visits and income for the analytics"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment, AppointmentStatus, FinanceType, User
from ...shared.periods import InsightPeriod, insight_period_start, start_of_month
from ..appointments.repository import AppointmentRepository
from ..clients.service import ClientService, to_client_response
from ..finances.repository import FinanceRepository
from ..services.repository import ServiceRepository
from ..services.schemas import ServiceResponse
from . import analytics
from .schemas import (
    ClientInsightResponse,
    ClientPatternResponse,
    NeighborhoodResponse,
    ServiceUsage,
    TopServiceResponse,
    VipClientResponse,
)

logger = logging.getLogger(__name__)

COMPLETED = (AppointmentStatus.COMPLETED.value,)


def to_visit(appointment: Appointment) -> analytics.Visit:
    return analytics.Visit(
        client_id=appointment.client_id,
        date=appointment.date,
        start_time=appointment.start_time,
        total_amount=appointment.total_amount or 0,
        service_ids=appointment.service_ids,
        neighborhood=appointment.client.neighborhood if appointment.client else None,
    )


class InsightService:
    """Service layer for client and business insights"""

    def __init__(self, db: Session):
        self.db = db
        self.appointments = AppointmentRepository()
        self.finances = FinanceRepository()
        self.services = ServiceRepository()
        self.clients = ClientService(db)

    def _completed(self, user: User, **filters) -> list[Appointment]:
        return self.appointments.get_appointments(
            self.db, user.id, statuses=COMPLETED, newest_first=True, **filters
        )

    def _service_responses(self, service_ids, user: User) -> dict[int, ServiceResponse]:
        responses = {}
        for service_id in service_ids:
            service = self.services.get_service_by_id(self.db, service_id, user.id)
            if service:
                responses[service_id] = ServiceResponse.model_validate(service)
        return responses

    def get_client_insights(self, client_id: int, user: User) -> ClientInsightResponse:
        self.clients.get_client(client_id, user)

        visits = [to_visit(a) for a in self._completed(user, client_id=client_id)]
        insight = analytics.client_insights(visits)
        services = self._service_responses([sid for sid, _ in insight.top_services], user)

        return ClientInsightResponse(
            clientId=client_id,
            topServices=[
                ServiceUsage(service=services[sid], count=count)
                for sid, count in insight.top_services
                if sid in services
            ],
            preferredTimeOfDay=insight.preferred_time_of_day,
            preferredHour=insight.preferred_hour,
            totalAppointments=insight.total_appointments,
        )

    def get_client_patterns(
        self, user: User, now: Optional[datetime] = None
    ) -> list[ClientPatternResponse]:
        """Regular clients who are late for their next visit"""
        clients = {c.id: c for c in self.clients.get_clients(user)}

        visits_by_client: dict[int, list[analytics.Visit]] = {client_id: [] for client_id in clients}
        for appointment in self._completed(user):
            if appointment.client_id in visits_by_client:
                visits_by_client[appointment.client_id].append(to_visit(appointment))

        patterns = analytics.client_patterns(visits_by_client, now or datetime.now())
        return [
            ClientPatternResponse(
                client=to_client_response(clients[p.client_id]),
                pattern=p.pattern,
                avgInterval=p.avg_interval,
                daysSinceLast=p.days_since_last,
                lastAppointment=p.last_appointment,
            )
            for p in patterns
        ]

    def get_top_services(
        self,
        user: User,
        period: InsightPeriod = InsightPeriod.MONTH,
        now: Optional[datetime] = None,
    ) -> list[TopServiceResponse]:
        start = insight_period_start(period, now or datetime.now())

        income = [
            analytics.IncomeEntry(service_id=f.service_id, amount=f.amount)
            for f in self.finances.get_finances(
                self.db,
                user.id,
                start_date=start,
                entry_type=FinanceType.INCOME.value,
                with_service_only=True,
            )
        ]
        visits = [to_visit(a) for a in self._completed(user, date_from=start)]

        rankings = analytics.top_services(income, visits)
        services = self._service_responses([r.service_id for r in rankings], user)
        return [
            TopServiceResponse(
                service=services[r.service_id],
                total=r.total,
                count=r.count,
                uniqueClients=r.unique_clients,
            )
            for r in rankings
            if r.service_id in services
        ]

    def get_top_neighborhoods(
        self,
        user: User,
        period: InsightPeriod = InsightPeriod.MONTH,
        now: Optional[datetime] = None,
    ) -> list[NeighborhoodResponse]:
        start = insight_period_start(period, now or datetime.now())
        visits = [to_visit(a) for a in self._completed(user, date_from=start)]
        return [
            NeighborhoodResponse(neighborhood=r.neighborhood, total=r.total)
            for r in analytics.top_neighborhoods(visits)
        ]

    def get_vip_clients(self, user: User, now: Optional[datetime] = None) -> list[VipClientResponse]:
        """Clients spending well above average in the current month"""
        appointments = self._completed(user, date_from=start_of_month(now or datetime.now()))
        clients = {a.client_id: a.client for a in appointments if a.client}

        vips = analytics.vip_clients(to_visit(a) for a in appointments)
        logger.info(f"Identified {len(vips)} VIP clients for user_id: {user.id}")
        return [
            VipClientResponse(
                clientId=v.client_id,
                client=to_client_response(clients[v.client_id]) if v.client_id in clients else None,
                spending=v.spending,
            )
            for v in vips
        ]
