"""
In-app notification list. There is no delivery channel yet, so the list
starts from the bundled fixtures and changes only through local actions.
"""
from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from livestock_core.models import MOCK_NOTIFICATIONS

from .observable import ObservableStore

Notification = Dict[str, Any]


@dataclass
class NotificationsState:
    notifications: List[Notification] = field(default_factory=list)
    unread_count: int = 0


def _count_unread(notifications: Iterable[Notification]) -> int:
    return sum(1 for n in notifications if not n.get("read"))


class NotificationsStore(ObservableStore[NotificationsState]):
    """Newest-first notifications with an unread counter that always matches the list"""

    def __init__(self, seed: Optional[List[Notification]] = None):
        notifications = copy.deepcopy(MOCK_NOTIFICATIONS if seed is None else seed)
        super().__init__(NotificationsState(
            notifications=notifications,
            unread_count=_count_unread(notifications),
        ))

    def _copy_state(self) -> NotificationsState:
        return NotificationsState(
            notifications=[dict(n) for n in self._state.notifications],
            unread_count=self._state.unread_count,
        )

    @property
    def notifications(self) -> List[Notification]:
        return self.snapshot().notifications

    @property
    def unread_count(self) -> int:
        return self._state.unread_count

    def add(self, notification: Notification) -> None:
        """Prepend a notification"""
        entry = dict(notification)
        entry.setdefault("read", False)

        def reducer(state: NotificationsState) -> None:
            state.notifications = [entry] + state.notifications
            if not entry["read"]:
                state.unread_count += 1
        self._apply(reducer)

    def mark_as_read(self, notification_id: Any) -> None:
        def reducer(state: NotificationsState) -> None:
            for n in state.notifications:
                if n.get("id") == notification_id and not n.get("read"):
                    n["read"] = True
                    state.unread_count -= 1
                    break
        self._apply(reducer)

    def mark_all_as_read(self) -> None:
        def reducer(state: NotificationsState) -> None:
            for n in state.notifications:
                n["read"] = True
            state.unread_count = 0
        self._apply(reducer)

    def delete(self, notification_id: Any) -> None:
        def reducer(state: NotificationsState) -> None:
            removed = [n for n in state.notifications if n.get("id") == notification_id]
            state.notifications = [n for n in state.notifications if n.get("id") != notification_id]
            state.unread_count -= _count_unread(removed)
        self._apply(reducer)
