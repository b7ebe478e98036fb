"""
Client state: resource mirrors, the session, notifications, dashboard
statistics and the container that owns them
"""

from .observable import ObservableStore
from .resource_store import (
    DEFAULT_FILTERS,
    ResourceState,
    ResourceStore,
    create_resource_store,
    get_shared_executor,
    unwrap_collection,
)
from .session_store import SessionState, SessionStore
from .notifications_store import NotificationsState, NotificationsStore
from .reports_store import ReportsState, ReportsStore
from .app_store import AppStore, get_app_store

__all__ = [
    "ObservableStore",
    "DEFAULT_FILTERS",
    "ResourceState",
    "ResourceStore",
    "create_resource_store",
    "get_shared_executor",
    "unwrap_collection",
    "SessionState",
    "SessionStore",
    "NotificationsState",
    "NotificationsStore",
    "ReportsState",
    "ReportsStore",
    "AppStore",
    "get_app_store",
]
