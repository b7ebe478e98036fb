# =============================================================================
# livestock_core/services/__init__.py
# Service Layer for the Livestock Client Core
# =============================================================================
"""
Service layer: the shared result type, the store base class and the pure
dashboard aggregations.

Usage Example:
-------------
    from livestock_core.services import compute_dashboard_stats

    stats = compute_dashboard_stats(animals, owners, events, inventory)
    print(f"Healthy: {stats.healthy_animals} / {stats.total_animals}")
"""

from .base_service import BaseService, ServiceResult
from .dashboard_service import (
    DashboardStats,
    RECENT_EVENTS_LIMIT,
    compute_dashboard_stats,
    count_healthy,
    count_under_treatment,
    count_low_stock,
    group_by_species,
    inventory_total_value,
    recent_events,
    health_status_breakdown,
    species_chart_data,
    monthly_event_summary,
)

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Dashboard
    "DashboardStats",
    "RECENT_EVENTS_LIMIT",
    "compute_dashboard_stats",
    "count_healthy",
    "count_under_treatment",
    "count_low_stock",
    "group_by_species",
    "inventory_total_value",
    "recent_events",
    "health_status_breakdown",
    "species_chart_data",
    "monthly_event_summary",
]
