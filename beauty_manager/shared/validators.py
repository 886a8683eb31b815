"""Shared validation utilities"""

import re
from datetime import datetime
from typing import Optional

HH_MM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def digits_only(value: Optional[str]) -> str:
    """Strip everything but digits"""
    return re.sub(r"\D", "", value or "")


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a Brazilian phone number.

    Accepts any formatting as long as it carries 10 or 11 digits (DDD + number),
    optionally prefixed by the 55 country code. The value is stored as typed.

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    digits = digits_only(phone)
    if digits.startswith("55") and len(digits) in (12, 13):
        digits = digits[2:]

    if len(digits) not in (10, 11):
        raise ValueError("Phone number must have 10 or 11 digits")

    return phone.strip()


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_cep(cep: Optional[str]) -> Optional[str]:
    """Normalize a CEP (Brazilian postal code) to its 8 digits"""
    if not cep:
        return cep

    digits = digits_only(cep)
    if len(digits) != 8:
        raise ValueError("CEP must have 8 digits")
    return digits


def validate_time_of_day(value: Optional[str]) -> Optional[str]:
    """Validate a 24h HH:MM string"""
    if value is None:
        return value
    value = value.strip()
    if not HH_MM_PATTERN.match(value):
        raise ValueError("Time must use the HH:MM format")
    return value


def to_naive_local(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive server-local time, the storage convention"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)
