"""
Declarative payload validation for the editable resources.

Each resource declares its field rules once; ``validate_payload`` checks a
payload against them before it is sent, so obvious mistakes are reported
per field without a round trip.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from livestock_core.errors import DataValidationError

from .domain import EventType, Gender, HealthStatus, InventoryCategory, InventoryUnit, Species, to_number

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class FieldRule:
    """Constraints for one payload field"""
    required: bool = False
    kind: str = "string"  # string | number | date | email
    minimum: Optional[float] = None
    positive: bool = False
    choices: Optional[Tuple[str, ...]] = None
    label: Optional[str] = None


def _choices(enum_cls) -> Tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


SCHEMAS: Dict[str, Dict[str, FieldRule]] = {
    "animals": {
        "tag_id": FieldRule(required=True, label="Tag ID"),
        "species": FieldRule(required=True, choices=_choices(Species)),
        "breed": FieldRule(required=True),
        "gender": FieldRule(required=True, choices=_choices(Gender)),
        "date_of_birth": FieldRule(required=True, kind="date", label="Date of birth"),
        "weight": FieldRule(required=True, kind="number", positive=True),
        "owner": FieldRule(required=True, kind="number"),
        "acquisition_date": FieldRule(required=True, kind="date", label="Acquisition date"),
        "acquisition_price": FieldRule(required=True, kind="number", positive=True, label="Price"),
        "status": FieldRule(choices=_choices(HealthStatus)),
        "health_status": FieldRule(choices=_choices(HealthStatus)),
    },
    "owners": {
        "first_name": FieldRule(required=True, label="First name"),
        "last_name": FieldRule(required=True, label="Last name"),
        "email": FieldRule(required=True, kind="email"),
        "phone": FieldRule(required=True),
        "address": FieldRule(required=True),
        "city": FieldRule(required=True),
        "state": FieldRule(required=True),
        "zip_code": FieldRule(required=True, label="Zip code"),
    },
    "events": {
        "event_type": FieldRule(required=True, choices=_choices(EventType), label="Event type"),
        "date": FieldRule(required=True, kind="date"),
        "animal": FieldRule(required=True, kind="number"),
        "title": FieldRule(required=True),
        "description": FieldRule(required=True),
        "cost": FieldRule(kind="number", minimum=0),
    },
    "inventory": {
        "name": FieldRule(required=True),
        "category": FieldRule(required=True, choices=_choices(InventoryCategory)),
        "quantity": FieldRule(required=True, kind="number", minimum=0),
        "unit": FieldRule(required=True, choices=_choices(InventoryUnit)),
        "reorder_level": FieldRule(required=True, kind="number", minimum=0, label="Reorder level"),
        "unit_price": FieldRule(required=True, kind="number", minimum=0, label="Unit price"),
    },
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_date(value: Any) -> bool:
    if isinstance(value, (date, datetime)):
        return True
    try:
        datetime.fromisoformat(str(value))
        return True
    except ValueError:
        return False


def _check_field(name: str, rule: FieldRule, value: Any) -> Optional[str]:
    label = rule.label or name.replace("_", " ").capitalize()

    if _is_blank(value):
        return f"{label} is required" if rule.required else None

    if rule.kind == "number":
        number = to_number(value)
        if number is None:
            return f"{label} must be a number"
        if rule.positive and number <= 0:
            return f"{label} must be a positive number"
        if rule.minimum is not None and number < rule.minimum:
            return f"{label} must be greater than or equal to {rule.minimum:g}"
    elif rule.kind == "date":
        if not _check_date(value):
            return f"{label} must be a valid date"
    elif rule.kind == "email":
        if not EMAIL_PATTERN.match(str(value)):
            return "Invalid email"

    if rule.choices and str(value) not in rule.choices:
        return f"{label} must be one of: {', '.join(rule.choices)}"
    return None


def collect_field_errors(resource: str, payload: Dict[str, Any], partial: bool = False) -> Dict[str, str]:
    """
    Check a payload and return ``{field: message}`` for every problem.

    With ``partial=True`` (PATCH payloads) only the fields present are checked.
    """
    if resource not in SCHEMAS:
        raise ValueError(f"No validation schema for '{resource}'. Available: {list(SCHEMAS)}")

    errors = {}
    for name, rule in SCHEMAS[resource].items():
        if partial and name not in payload:
            continue
        message = _check_field(name, rule, payload.get(name))
        if message:
            errors[name] = message
    return errors


def validate_payload(resource: str, payload: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Validate a payload, returning it unchanged when valid.

    Raises:
        DataValidationError: With ``field_errors`` listing every failing field
    """
    errors = collect_field_errors(resource, payload, partial=partial)
    if errors:
        raise DataValidationError(
            f"Invalid {resource} payload: {len(errors)} field error(s)",
            resource=resource,
            field_errors=errors,
        )
    return payload
