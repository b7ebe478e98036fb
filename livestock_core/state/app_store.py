# =============================================================================
# livestock_core/state/app_store.py
# Process-wide container owning the client, gateways and every store
# =============================================================================

from __future__ import annotations
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

import streamlit as st

from livestock_core.api import APIConfig, ApiClient, AuthGateway, RESOURCES, create_gateways
from livestock_core.config import ClientSettings, load_settings
from livestock_core.logging import get_logger
from livestock_core.storage import LocalStorage

from .notifications_store import NotificationsStore
from .reports_store import ReportsStore
from .resource_store import ResourceStore, create_resource_store
from .session_store import SessionStore

logger = get_logger(__name__)

# Collections the dashboard statistics are derived from
DASHBOARD_SOURCES = ("animals", "owners", "events", "inventory")


class AppStore:
    """
    Singleton container wiring the HTTP client, the session and the stores.

    The client takes its bearer token from the session and asks the session
    to refresh it on a 401. The reports store recomputes the dashboard
    whenever one of its source collections changes. Signing out, or losing
    the session, empties every collection.

    Usage:
        app = AppStore.get_instance()
        app.session.login({"email": "a@b.co", "password": "secret"})
        app.animals.fetch_all()
        st.metric("Animals", app.reports.dashboard_stats.total_animals)
    """

    _instance: Optional[AppStore] = None
    _lock = threading.Lock()

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        client: Optional[ApiClient] = None,
        storage: Optional[LocalStorage] = None,
    ):
        """Build the container (use get_instance() for the shared one)."""
        self.settings = settings or load_settings()
        self.client = client or ApiClient(
            APIConfig(base_url=self.settings.base_url, timeout=self.settings.timeout)
        )
        self.storage = storage or LocalStorage(self.settings.storage_dir)
        self.executor = ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="livestock-store",
        )

        gateways = create_gateways(self.client, RESOURCES)
        self.stores: Dict[str, ResourceStore] = {
            name: create_resource_store(name, gateway, executor=self.executor)
            for name, gateway in gateways.items()
        }
        self.session = SessionStore(AuthGateway(self.client), self.storage)
        self.notifications = NotificationsStore()
        self.reports = ReportsStore(recent_events_limit=self.settings.recent_events_limit)

        self.client.set_token_provider(self.session.access_token)
        self.client.set_refresh_handler(self._refresh_session)

        self._unsubscribers: List[Callable[[], None]] = [
            self.stores[name].subscribe(self._on_collection_change)
            for name in DASHBOARD_SOURCES
        ]
        self._was_authenticated = self.session.is_authenticated
        self._unsubscribers.append(self.session.subscribe(self._on_session_change))
        self.refresh_dashboard()
        logger.info(f"AppStore ready for {self.settings.base_url}")

    @classmethod
    def get_instance(cls, **kwargs: Any) -> AppStore:
        """Get or create the singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = AppStore(**kwargs)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Close and forget the singleton; the next get_instance() builds a new one."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.close()
                cls._instance = None

    # -------------------------------------------------------------------------
    # STORES
    # -------------------------------------------------------------------------

    @property
    def animals(self) -> ResourceStore:
        return self.stores["animals"]

    @property
    def owners(self) -> ResourceStore:
        return self.stores["owners"]

    @property
    def events(self) -> ResourceStore:
        return self.stores["events"]

    @property
    def inventory(self) -> ResourceStore:
        return self.stores["inventory"]

    @property
    def report_records(self) -> ResourceStore:
        """Store mirroring the backend's saved reports collection"""
        return self.stores["reports"]

    # -------------------------------------------------------------------------
    # WIRING
    # -------------------------------------------------------------------------

    def _refresh_session(self) -> bool:
        return bool(self.session.refresh_access_token())

    def _on_collection_change(self, _snapshot: Any) -> None:
        self.refresh_dashboard()

    def _on_session_change(self, snapshot: Any) -> None:
        was_authenticated, self._was_authenticated = self._was_authenticated, snapshot.is_authenticated
        if was_authenticated and not snapshot.is_authenticated:
            self.clear_collections()

    def clear_collections(self) -> None:
        """Forget every mirrored collection, e.g. once the user signed out"""
        for store in self.stores.values():
            store.reset()
        logger.info("Cleared collections after sign-out")

    def refresh_dashboard(self) -> None:
        """Recompute the dashboard statistics from the current collections"""
        self.reports.refresh(
            self.animals.items,
            self.owners.items,
            self.events.items,
            self.inventory.items,
        )

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.executor.shutdown(wait=False)
        self.client.close()
        logger.info("AppStore closed")


# =============================================================================
# STREAMLIT BINDING
# =============================================================================

SESSION_KEY = "_livestock_app_store"


def get_app_store() -> AppStore:
    """Get the AppStore and make it available as ``st.session_state`` entry."""
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = AppStore.get_instance()
        logger.info("Bound AppStore to Streamlit session")
    return st.session_state[SESSION_KEY]
