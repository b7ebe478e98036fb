"""
Dashboard statistics derived from the animals, owners, events and
inventory collections.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Optional

from livestock_core.services.dashboard_service import (
    DashboardStats,
    RECENT_EVENTS_LIMIT,
    compute_dashboard_stats,
)

from .observable import ObservableStore


@dataclass
class ReportsState:
    dashboard_stats: Optional[DashboardStats] = None
    loading: bool = False
    error: Optional[Any] = None


class ReportsStore(ObservableStore[ReportsState]):
    """
    Holds the latest dashboard statistics.

    ``refresh`` recomputes them from the collections it is handed; the
    application container calls it whenever one of those collections changes.
    """

    def __init__(self, recent_events_limit: int = RECENT_EVENTS_LIMIT):
        super().__init__(ReportsState())
        self.recent_events_limit = recent_events_limit

    def _copy_state(self) -> ReportsState:
        s = self._state
        return ReportsState(dashboard_stats=s.dashboard_stats, loading=s.loading, error=s.error)

    @property
    def dashboard_stats(self) -> Optional[DashboardStats]:
        return self._state.dashboard_stats

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[Any]:
        return self._state.error

    def set_dashboard_stats(self, stats: Optional[DashboardStats]) -> None:
        def reducer(state: ReportsState) -> None:
            state.dashboard_stats = stats
        self._apply(reducer)

    def set_loading(self, loading: bool) -> None:
        def reducer(state: ReportsState) -> None:
            state.loading = loading
        self._apply(reducer)

    def set_error(self, error: Optional[Any]) -> None:
        def reducer(state: ReportsState) -> None:
            state.error = error
        self._apply(reducer)

    def refresh(
        self,
        animals: List[dict],
        owners: List[dict],
        events: List[dict],
        inventory: List[dict],
    ) -> DashboardStats:
        """Recompute the statistics from the given collections and store them"""
        stats = compute_dashboard_stats(
            animals,
            owners,
            events,
            inventory,
            recent_limit=self.recent_events_limit,
        )
        self.set_dashboard_stats(stats)
        return stats
