"""
Dashboard Service - Derive the herd dashboard from the mirrored collections.

Every function is pure: it reads the lists it is given and never touches a
store, so the dashboard can be recomputed from any snapshot.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

from livestock_core.models.domain import (
    HealthStatus,
    OTHER_SPECIES_LABEL,
    UNDER_TREATMENT_STATUSES,
    animal_status,
    inventory_total_value as item_total_value,
    is_low_stock,
)

Record = Dict[str, Any]

RECENT_EVENTS_LIMIT = 5


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class DashboardStats:
    """Container for the dashboard figures."""

    total_animals: int = 0
    total_owners: int = 0
    total_events: int = 0
    healthy_animals: int = 0
    under_treatment: int = 0
    animals_by_species: Dict[str, int] = field(default_factory=dict)
    total_inventory_value: float = 0.0
    low_stock_items: int = 0
    recent_events: List[Record] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_animals": self.total_animals,
            "total_owners": self.total_owners,
            "total_events": self.total_events,
            "healthy_animals": self.healthy_animals,
            "under_treatment": self.under_treatment,
            "animals_by_species": dict(self.animals_by_species),
            "total_inventory_value": self.total_inventory_value,
            "low_stock_items": self.low_stock_items,
            "recent_events": list(self.recent_events),
        }


# =============================================================================
# AGGREGATES
# =============================================================================

def count_healthy(animals: List[Record]) -> int:
    return sum(1 for a in animals if animal_status(a) == HealthStatus.HEALTHY.value)


def count_under_treatment(animals: List[Record]) -> int:
    """Animals whose status is sick or under treatment."""
    return sum(1 for a in animals if animal_status(a) in UNDER_TREATMENT_STATUSES)


def group_by_species(animals: List[Record]) -> Dict[str, int]:
    """Count animals per species; missing or empty species land under "Other"."""
    counts: Dict[str, int] = {}
    for animal in animals:
        species = animal.get("species") or OTHER_SPECIES_LABEL
        counts[species] = counts.get(species, 0) + 1
    return counts


def inventory_total_value(items: List[Record]) -> float:
    return sum((item_total_value(item) for item in items), 0.0)


def count_low_stock(items: List[Record]) -> int:
    return sum(1 for item in items if is_low_stock(item))


def recent_events(events: List[Record], limit: int = RECENT_EVENTS_LIMIT) -> List[Record]:
    """First ``limit`` events in the order the backend returned them."""
    return list(events[:max(limit, 0)])


def compute_dashboard_stats(
    animals: List[Record],
    owners: List[Record],
    events: List[Record],
    inventory: List[Record],
    recent_limit: int = RECENT_EVENTS_LIMIT,
) -> DashboardStats:
    """
    Compute every dashboard figure from the current collections.

    Args:
        animals: Animal records
        owners: Owner records
        events: Event records, newest first as delivered
        inventory: Inventory records
        recent_limit: How many events to keep in ``recent_events``

    Returns:
        DashboardStats
    """
    return DashboardStats(
        total_animals=len(animals),
        total_owners=len(owners),
        total_events=len(events),
        healthy_animals=count_healthy(animals),
        under_treatment=count_under_treatment(animals),
        animals_by_species=group_by_species(animals),
        total_inventory_value=inventory_total_value(inventory),
        low_stock_items=count_low_stock(inventory),
        recent_events=recent_events(events, recent_limit),
    )


# =============================================================================
# CHART DATA
# =============================================================================

def health_status_breakdown(stats: DashboardStats) -> List[Dict[str, Any]]:
    return [
        {"name": "Healthy", "value": stats.healthy_animals},
        {"name": "Under Treatment", "value": stats.under_treatment},
    ]


def species_chart_data(stats: DashboardStats) -> List[Dict[str, Any]]:
    return [{"name": name, "value": count} for name, count in stats.animals_by_species.items()]


def monthly_event_summary(events: List[Record], date_field: str = "date") -> pd.DataFrame:
    """
    Events and their cost per calendar month.

    Events without a parseable date are skipped; missing costs count as 0.

    Returns:
        DataFrame with columns ``month`` (YYYY-MM), ``events`` and ``cost``,
        sorted by month
    """
    columns = ["month", "events", "cost"]
    if not events:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(events)
    if date_field not in df.columns:
        return pd.DataFrame(columns=columns)

    df["_date"] = pd.to_datetime(df[date_field], errors="coerce")
    df = df.dropna(subset=["_date"]).copy()
    if df.empty:
        return pd.DataFrame(columns=columns)

    cost = df["cost"] if "cost" in df.columns else pd.Series(0.0, index=df.index)
    df["_cost"] = pd.to_numeric(cost, errors="coerce").fillna(0.0)
    df["month"] = df["_date"].dt.strftime("%Y-%m")

    summary = (
        df.groupby("month")
        .agg(events=("_date", "size"), cost=("_cost", "sum"))
        .reset_index()
        .sort_values("month")
        .reset_index(drop=True)
    )
    return summary[columns]

