"""
Declarative JSON body binding.

Each request schema is a dict of field name -> ``Rule``. ``bind`` applies the
rules in declaration order and raises ``ValidationError`` naming the first
field that fails, so every entry point reports problems the same way.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional

from event_api.errors import ValidationError

# One "@", no whitespace, a dot in the domain.
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
# YYYY-MM-DD only; fromisoformat alone also takes "20261120" and week dates.
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)


def parse_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("must be a valid email address")
    return value


def parse_date(value: str) -> date:
    value = value.strip()
    if not DATE_PATTERN.match(value):
        raise ValueError("must be a date in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError("must be a date in YYYY-MM-DD format")


FORMATS: Dict[str, Callable[[str], Any]] = {
    "email": parse_email,
    "date": parse_date,
}


@dataclass(frozen=True)
class Rule:
    required: bool = True
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    format: Optional[str] = None


REGISTER_RULES = {
    "email": Rule(format="email"),
    "password": Rule(min_length=8),
    "name": Rule(min_length=2),
}

LOGIN_RULES = {
    "email": Rule(format="email"),
    "password": Rule(min_length=8),
}

EVENT_RULES = {
    "name": Rule(min_length=3, max_length=100),
    "description": Rule(min_length=10, max_length=150),
    "date": Rule(format="date"),
    "location": Rule(min_length=3),
}


def check_field(field: str, value: Any, rule: Rule) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        if rule.required:
            raise ValidationError(f"{field} is required")
        return None

    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")

    if rule.min_length is not None and len(value) < rule.min_length:
        raise ValidationError(f"{field} must be at least {rule.min_length} characters")
    if rule.max_length is not None and len(value) > rule.max_length:
        raise ValidationError(f"{field} must be at most {rule.max_length} characters")

    if rule.format:
        try:
            return FORMATS[rule.format](value)
        except ValueError as e:
            raise ValidationError(f"{field} {e}")
    return value


def bind(data: Any, rules: Mapping[str, Rule]) -> Dict[str, Any]:
    """
    Validate ``data`` against ``rules`` and return only the declared fields.

    Args:
        data: Decoded JSON body (anything; non-objects are rejected).
        rules: Field rules for the target schema.

    Returns:
        dict: Cleaned values keyed by field name. Unknown keys are dropped,
        which keeps server-owned fields such as ``id`` or ``ownerId`` out.

    Raises:
        ValidationError: On the first field that breaks its rule.
    """
    if not isinstance(data, dict):
        raise ValidationError("Invalid request payload")

    return {field: check_field(field, data.get(field), rule) for field, rule in rules.items()}


def parse_id(value: str, label: str) -> int:
    """
    Convert a path segment to a positive integer id.

    Raises:
        ValidationError: "Invalid <label> ID" for anything else.
    """
    if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
        raise ValidationError(f"Invalid {label} ID")
    parsed = int(value)
    if parsed <= 0:
        raise ValidationError(f"Invalid {label} ID")
    return parsed
