from enum import Enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

DEFAULT_CONFIRM_MESSAGE = "Olá! Confirmo seu agendamento para {date} às {time}."
DEFAULT_RESCHEDULE_MESSAGE = "Olá! Preciso remarcar seu agendamento. Podemos reagendar?"
DEFAULT_CANCEL_MESSAGE = "Olá! Infelizmente preciso cancelar seu agendamento. Podemos reagendar?"


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"


# Statuses that still count as booked time
ACTIVE_STATUSES = (AppointmentStatus.SCHEDULED.value, AppointmentStatus.CONFIRMED.value)


class FinanceType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class ExpenseCategory(str, Enum):
    HEALTH = "Saúde"
    EDUCATION = "Educação"
    FOOD = "Alimentação"
    PERSONAL = "Gastos Pessoais"
    WORK = "Trabalho"
    VEHICLE = "Veículo"
    LEISURE = "Lazer"
    HOUSE = "Casa"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)  # always lower-cased
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    address = Column(JSON, nullable=False)  # cep, state, city, street, number, complement
    whatsapp_confirm = Column(Text, nullable=False, default=DEFAULT_CONFIRM_MESSAGE)
    whatsapp_reschedule = Column(Text, nullable=False, default=DEFAULT_RESCHEDULE_MESSAGE)
    whatsapp_cancel = Column(Text, nullable=False, default=DEFAULT_CANCEL_MESSAGE)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    clients = relationship("Client", back_populates="user", cascade="all, delete-orphan")
    services = relationship("Service", back_populates="user", cascade="all, delete-orphan")


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(255), nullable=True)
    # cep, state, city, street, number, complement, neighborhood
    address = Column(JSON, nullable=True)
    is_vip = Column(Boolean, default=False, nullable=False)
    notes = Column(String(1000), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="clients")
    appointments = relationship("Appointment", back_populates="client")

    @property
    def neighborhood(self):
        return (self.address or {}).get("neighborhood") or None


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    notes = Column(String(1000), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="services")


appointment_services = Table(
    "appointment_services",
    Base.metadata,
    Column(
        "appointment_id",
        Integer,
        ForeignKey("appointments.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "service_id",
        Integer,
        ForeignKey("services.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True)
    date = Column(DateTime, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    status = Column(String(20), default=AppointmentStatus.SCHEDULED.value, nullable=False)
    # Sum of service prices when booked, not recomputed on later price changes
    total_amount = Column(Float, nullable=False, default=0)
    notes = Column(String(1000), nullable=True)
    cancellation_reason = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="appointments")
    services = relationship("Service", secondary=appointment_services, order_by=Service.id)

    @property
    def service_ids(self) -> list[int]:
        return [s.id for s in self.services]


class Finance(Base):
    __tablename__ = "finances"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(10), nullable=False)  # income, expense
    name = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    category = Column(String(50), nullable=True)  # expense only
    service_id = Column(Integer, ForeignKey("services.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    service = relationship("Service")
