# =============================================================================
# livestock_core/state/observable.py
# Lock-guarded state container with change listeners
# =============================================================================

from __future__ import annotations
import threading
from abc import abstractmethod
from typing import Any, Callable, Generic, List, Optional, TypeVar

from livestock_core.errors import LivestockError, failure_detail
from livestock_core.services.base_service import BaseService, ServiceResult

S = TypeVar("S")


class ObservableStore(BaseService, Generic[S]):
    """
    Base for every store: one state object mutated only inside ``_apply``.

    Reducer steps run under a per-store lock so a snapshot is never torn.
    Listeners are called outside the lock with the snapshot taken right
    after the step.
    """

    def __init__(self, state: S):
        super().__init__()
        self._state = state
        self._lock = threading.RLock()
        self._listeners: List[Callable[[S], None]] = []

    @abstractmethod
    def _copy_state(self) -> S:
        """Copy ``self._state``; called with the lock held"""

    def snapshot(self) -> S:
        """Return a copy of the current state; later changes do not affect it"""
        with self._lock:
            return self._copy_state()

    def subscribe(self, listener: Callable[[S], None]) -> Callable[[], None]:
        """
        Register a listener called with the new snapshot after every change.

        Returns:
            A callable that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, snapshot: S) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception as e:
                self.logger.error(f"Error in store listener {listener!r}: {e}", exc_info=True)

    def _apply(self, reducer: Callable[[S], Any]) -> None:
        """Run one reducer step under the lock, then notify listeners"""
        with self._lock:
            reducer(self._state)
            snapshot = self._copy_state()
        self._notify(snapshot)

    def _track(
        self,
        operation: str,
        call: Callable[[], Any],
        on_success: Callable[[S, Any], None],
        on_failure: Optional[Callable[[S], None]] = None,
        default_error: Any = None,
    ) -> ServiceResult:
        """
        Run one backend operation through its pending/settled lifecycle.

        Pending sets ``loading`` and clears ``error``. On success
        ``on_success(state, data)`` runs; on failure ``error`` receives the
        failure detail (``default_error`` when the backend sent no body) and
        ``on_failure(state)`` runs. ``loading`` drops in the same step.
        The state object must expose ``loading`` and ``error``.
        """
        def pending(state: S) -> None:
            state.loading = True
            state.error = None

        def rejected(detail: Any) -> Callable[[S], None]:
            def reducer(state: S) -> None:
                state.loading = False
                state.error = detail
                if on_failure is not None:
                    on_failure(state)
            return reducer

        def fulfilled(data: Any) -> Callable[[S], None]:
            def reducer(state: S) -> None:
                state.loading = False
                on_success(state, data)
            return reducer

        self._apply(pending)
        try:
            with self.log_operation(operation):
                data = call()
        except LivestockError as e:
            self._apply(rejected(failure_detail(e, default_error)))
            return ServiceResult.from_exception(e, default_error)
        except Exception as e:
            self._apply(rejected(str(e)))
            raise

        self._apply(fulfilled(data))
        return ServiceResult.ok(data)
