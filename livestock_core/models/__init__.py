"""
Domain vocabulary, record helpers, payload validation and list selectors
"""

from .domain import (
    HealthStatus,
    Species,
    Gender,
    EventType,
    InventoryCategory,
    InventoryUnit,
    UNDER_TREATMENT_STATUSES,
    OTHER_SPECIES_LABEL,
    MOCK_NOTIFICATIONS,
    to_number,
    animal_status,
    inventory_total_value,
    is_low_stock,
    owner_full_name,
)
from .validation import SCHEMAS, FieldRule, collect_field_errors, validate_payload
from .selectors import filter_animals, filter_owners, filter_events

__all__ = [
    "HealthStatus",
    "Species",
    "Gender",
    "EventType",
    "InventoryCategory",
    "InventoryUnit",
    "UNDER_TREATMENT_STATUSES",
    "OTHER_SPECIES_LABEL",
    "MOCK_NOTIFICATIONS",
    "to_number",
    "animal_status",
    "inventory_total_value",
    "is_low_stock",
    "owner_full_name",
    "SCHEMAS",
    "FieldRule",
    "collect_field_errors",
    "validate_payload",
    "filter_animals",
    "filter_owners",
    "filter_events",
]
