"""
Insight calculations over plain visit and income records.

Nothing here touches the database: ``InsightService`` loads the rows and
maps them into ``Visit`` / ``IncomeEntry`` before calling these functions.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Mapping, Optional

TOP_SERVICES_PER_CLIENT = 5
TOP_RANKING_SIZE = 3
VIP_THRESHOLD_FACTOR = 1.5
OVERDUE_FACTOR = 1.2


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class VisitPattern(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


# (pattern, lowest average gap, highest average gap) in days
PATTERN_WINDOWS = (
    (VisitPattern.WEEKLY, 6, 8),
    (VisitPattern.BIWEEKLY, 13, 15),
    (VisitPattern.MONTHLY, 28, 32),
)


@dataclass
class Visit:
    """A completed appointment"""

    client_id: Optional[int]
    date: datetime
    start_time: str
    total_amount: float
    service_ids: list[int] = field(default_factory=list)
    neighborhood: Optional[str] = None

    @property
    def hour(self) -> int:
        return int(self.start_time.split(":")[0])


@dataclass
class IncomeEntry:
    service_id: int
    amount: float


@dataclass
class ClientInsight:
    top_services: list[tuple[int, int]]
    preferred_time_of_day: Optional[TimeOfDay]
    preferred_hour: Optional[int]
    total_appointments: int


@dataclass
class ClientPattern:
    client_id: int
    pattern: VisitPattern
    avg_interval: int
    days_since_last: int
    last_appointment: datetime


@dataclass
class ServiceRanking:
    service_id: int
    total: float
    count: int
    unique_clients: int


@dataclass
class NeighborhoodRanking:
    neighborhood: str
    total: float


@dataclass
class VipClient:
    client_id: int
    spending: float


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def time_of_day(hour: int) -> TimeOfDay:
    if 6 <= hour < 12:
        return TimeOfDay.MORNING
    if 12 <= hour < 18:
        return TimeOfDay.AFTERNOON
    return TimeOfDay.EVENING


def _first_max(candidates: Iterable, counts: Mapping):
    """First candidate holding the highest count, None when there are none"""
    best = None
    for candidate in candidates:
        if best is None or counts.get(candidate, 0) > counts.get(best, 0):
            best = candidate
    return best


def client_insights(visits: list[Visit]) -> ClientInsight:
    """
    Preferences of one client over their completed visits.

    Top services keep first-encountered order between equal counts, so the
    caller's ordering of ``visits`` (newest first) decides ties.
    """
    service_counts: Counter = Counter()
    for visit in visits:
        service_counts.update(visit.service_ids)
    # Counter.most_common is stable for equal counts
    top_services = service_counts.most_common(TOP_SERVICES_PER_CLIENT)

    if not visits:
        return ClientInsight(top_services, None, None, 0)

    time_counts = Counter(time_of_day(visit.hour) for visit in visits)
    hour_counts = Counter(visit.hour for visit in visits)

    return ClientInsight(
        top_services=top_services,
        preferred_time_of_day=_first_max(list(TimeOfDay), time_counts),
        preferred_hour=_first_max(sorted(hour_counts), hour_counts),
        total_appointments=len(visits),
    )


def detect_pattern(avg_interval: float) -> Optional[VisitPattern]:
    for pattern, low, high in PATTERN_WINDOWS:
        if low <= avg_interval <= high:
            return pattern
    return None


def client_patterns(
    visits_by_client: Mapping[int, list[Visit]], now: datetime
) -> list[ClientPattern]:
    """
    Clients with a regular visit rhythm who are overdue for their next visit.

    A client needs at least two visits. The average gap between consecutive
    visits must fall in one of the pattern windows and the time since the
    last visit must exceed the average by more than 20%.
    """
    results = []
    for client_id, visits in visits_by_client.items():
        if len(visits) < 2:
            continue

        ordered = sorted(visits, key=lambda v: v.date, reverse=True)
        gaps = [
            abs((newer.date - older.date).total_seconds()) / 86400
            for newer, older in zip(ordered, ordered[1:])
        ]
        avg_interval = sum(gaps) / len(gaps)
        last = ordered[0].date
        days_since_last = (now - last).total_seconds() / 86400

        pattern = detect_pattern(avg_interval)
        if pattern and days_since_last > avg_interval * OVERDUE_FACTOR:
            results.append(
                ClientPattern(
                    client_id=client_id,
                    pattern=pattern,
                    avg_interval=round_half_up(avg_interval),
                    days_since_last=round_half_up(days_since_last),
                    last_appointment=last,
                )
            )
    return results


def _top_by_total(rows: list, limit: int = TOP_RANKING_SIZE) -> list:
    return sorted(rows, key=lambda row: row.total, reverse=True)[:limit]


def top_services(
    income_entries: Iterable[IncomeEntry], visits: Iterable[Visit]
) -> list[ServiceRanking]:
    """Services ranked by income, with how many distinct clients booked them"""
    totals: dict[int, float] = {}
    counts: dict[int, int] = {}
    for entry in income_entries:
        totals[entry.service_id] = totals.get(entry.service_id, 0) + entry.amount
        counts[entry.service_id] = counts.get(entry.service_id, 0) + 1

    clients: dict[int, set] = {}
    for visit in visits:
        if visit.client_id is None:
            continue
        for service_id in visit.service_ids:
            clients.setdefault(service_id, set()).add(visit.client_id)

    rows = [
        ServiceRanking(
            service_id=service_id,
            total=total,
            count=counts[service_id],
            unique_clients=len(clients.get(service_id, ())),
        )
        for service_id, total in totals.items()
    ]
    return _top_by_total(rows)


def top_neighborhoods(visits: Iterable[Visit]) -> list[NeighborhoodRanking]:
    totals: dict[str, float] = {}
    for visit in visits:
        if visit.neighborhood:
            totals[visit.neighborhood] = totals.get(visit.neighborhood, 0) + visit.total_amount

    return _top_by_total([NeighborhoodRanking(name, total) for name, total in totals.items()])


def vip_clients(visits: Iterable[Visit]) -> list[VipClient]:
    """
    Clients spending at least 1.5x the average of everyone who spent.

    Returns an empty list when nobody spent anything in ``visits``.
    """
    spending: dict[int, float] = {}
    for visit in visits:
        if visit.client_id is not None:
            spending[visit.client_id] = spending.get(visit.client_id, 0) + visit.total_amount

    spenders = {client_id: total for client_id, total in spending.items() if total > 0}
    if not spenders:
        return []

    threshold = sum(spenders.values()) / len(spenders) * VIP_THRESHOLD_FACTOR
    return [
        VipClient(client_id=client_id, spending=total)
        for client_id, total in spenders.items()
        if total >= threshold
    ]
