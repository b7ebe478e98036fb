# =============================================================================
# livestock_core/models/domain.py
# Domain vocabulary and record helpers
# =============================================================================

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional


class HealthStatus(str, Enum):
    """Animal health status values."""
    HEALTHY = "healthy"
    SICK = "sick"
    PREGNANT = "pregnant"
    SOLD = "sold"
    DECEASED = "deceased"
    UNDER_TREATMENT = "under_treatment"  # legacy value still sent by some backends


class Species(str, Enum):
    CATTLE = "cattle"
    SHEEP = "sheep"
    GOAT = "goat"
    PIG = "pig"
    POULTRY = "poultry"
    OTHER = "other"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class EventType(str, Enum):
    """Herd event types."""
    BIRTH = "birth"
    DEATH = "death"
    SALE = "sale"
    PURCHASE = "purchase"
    VACCINATION = "vaccination"
    TREATMENT = "treatment"
    CHECKUP = "checkup"
    BREEDING = "breeding"
    WEANING = "weaning"
    OTHER = "other"


class InventoryCategory(str, Enum):
    FEED = "feed"
    MEDICINE = "medicine"
    EQUIPMENT = "equipment"
    SUPPLEMENT = "supplement"
    OTHER = "other"


class InventoryUnit(str, Enum):
    KG = "kg"
    LB = "lb"
    LITER = "ltr"
    GALLON = "gal"
    UNIT = "unit"
    BAG = "bag"
    BOTTLE = "bottle"


# Statuses counted as "under treatment" on the dashboard
UNDER_TREATMENT_STATUSES = frozenset({HealthStatus.SICK.value, HealthStatus.UNDER_TREATMENT.value})

# Bucket label for animals without a species
OTHER_SPECIES_LABEL = "Other"


# =============================================================================
# FIELD HELPERS
# =============================================================================

def to_number(value: Any) -> Optional[float]:
    """Parse a numeric field the way the backend serializes decimals (often as strings)."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def animal_status(animal: Dict[str, Any]) -> Optional[str]:
    """Health status of an animal; older payloads use ``status``."""
    return animal.get("health_status") or animal.get("status")


def inventory_total_value(item: Dict[str, Any]) -> float:
    """
    Value of one inventory line.

    The backend's ``total_value`` wins when present and non-zero; otherwise
    ``quantity * unit_price``. Unparseable numbers count as zero.
    """
    total = to_number(item.get("total_value"))
    if total:
        return total
    quantity = to_number(item.get("quantity"))
    unit_price = to_number(item.get("unit_price"))
    if quantity is None or unit_price is None:
        return 0.0
    return quantity * unit_price


def is_low_stock(item: Dict[str, Any]) -> bool:
    """An item is low on stock if flagged by the backend or at/below its reorder level."""
    if item.get("is_low_stock"):
        return True
    quantity = to_number(item.get("quantity"))
    reorder_level = to_number(item.get("reorder_level"))
    if quantity is None or reorder_level is None:
        return False
    return quantity <= reorder_level


def owner_full_name(owner: Dict[str, Any]) -> str:
    if owner.get("full_name"):
        return owner["full_name"]
    parts = [owner.get("first_name") or "", owner.get("last_name") or ""]
    return " ".join(p for p in parts if p).strip()


# =============================================================================
# NOTIFICATION FIXTURES
# =============================================================================

# No delivery protocol exists for notifications; the list starts from these.
MOCK_NOTIFICATIONS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "type": "health",
        "title": "Vaccination due",
        "message": "Three cattle are due for their annual vaccination this week.",
        "timestamp": "2024-01-15T09:30:00",
        "read": False,
    },
    {
        "id": 2,
        "type": "inventory",
        "title": "Low stock",
        "message": "Cattle feed is below its reorder level.",
        "timestamp": "2024-01-14T16:05:00",
        "read": False,
    },
    {
        "id": 3,
        "type": "event",
        "title": "Birth recorded",
        "message": "A new calf was registered in the herd.",
        "timestamp": "2024-01-13T07:45:00",
        "read": True,
    },
    {
        "id": 4,
        "type": "system",
        "title": "Weekly report ready",
        "message": "The weekly herd summary report has been generated.",
        "timestamp": "2024-01-12T18:00:00",
        "read": True,
    },
]
