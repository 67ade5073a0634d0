"""Shared validation utilities"""

import re
from datetime import date
from typing import Optional


def require_text(value: Optional[str], field_label: str) -> str:
    """
    Strip a required text field.

    Raises:
        ValueError: If the value is missing or whitespace only
    """
    if value is None or not value.strip():
        raise ValueError(f"Please enter {field_label}")
    return value.strip()


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

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


def normalize_postal_code(postal_code: str) -> str:
    """Upper-case and strip a postal code (e.g. "h1a 1a1" -> "H1A 1A1")"""
    return postal_code.strip().upper()


def parse_calendar_date(value: str) -> date:
    """
    Parse the date portion of a path parameter.

    Accepts "YYYY-MM-DD" as well as a full ISO-8601 date-time, whose time of day
    is ignored.

    Raises:
        ValueError: If the value is not an ISO date or date-time
    """
    return date.fromisoformat(value.strip()[:10])
