# =============================================================================
# livestock_core/state/resource_store.py
# Generic local mirror of one backend collection
# =============================================================================

from __future__ import annotations
import copy
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from livestock_core.api.gateways import ResourceGateway
from livestock_core.errors import ApiError
from livestock_core.services.base_service import ServiceResult

from .observable import ObservableStore

Record = Dict[str, Any]

# Per-resource filter defaults
DEFAULT_FILTERS: Dict[str, Dict[str, Any]] = {
    "animals": {"breed": "", "sex": "", "health_status": "", "owner_id": ""},
    "events": {"type": "", "animal_id": "", "date_range": {"start": None, "end": None}},
}

_shared_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def get_shared_executor(max_workers: int = 4) -> ThreadPoolExecutor:
    """Get the worker pool used by ``submit`` when a store was given none."""
    global _shared_executor
    if _shared_executor is None:
        with _executor_lock:
            if _shared_executor is None:
                _shared_executor = ThreadPoolExecutor(
                    max_workers=max_workers,
                    thread_name_prefix="livestock-store",
                )
    return _shared_executor


@dataclass
class ResourceState:
    """Snapshot of one resource store"""
    items: List[Record] = field(default_factory=list)
    selected: Optional[Record] = None
    loading: bool = False
    error: Optional[Any] = None
    filters: Dict[str, Any] = field(default_factory=dict)


def unwrap_collection(body: Any) -> List[Record]:
    """
    Accept a bare list or a ``{"results": [...]}`` envelope.

    Raises:
        ApiError: The body is neither, or an entry is not an object
    """
    if body is None:
        return []
    if isinstance(body, dict) and "results" in body:
        items = body["results"] or []
    elif isinstance(body, list):
        items = body
    else:
        raise ApiError(
            "Unexpected list response: expected a collection or a 'results' envelope",
            payload=body,
            code="API_FORMAT",
        )
    if not all(isinstance(item, dict) for item in items):
        raise ApiError("Unexpected list response: entries must be objects", payload=body, code="API_FORMAT")
    return list(items)


def expect_entity(body: Any, operation: str) -> Record:
    """
    Check that an entity response is an object.

    Raises:
        ApiError: Empty or non-object body (code ``API_FORMAT``)
    """
    if not isinstance(body, dict):
        raise ApiError(
            f"Unexpected {operation} response: expected an entity, got {type(body).__name__}",
            payload=body,
            code="API_FORMAT",
        )
    return body


def _entity_id(item: Any) -> Any:
    return item.get("id") if isinstance(item, dict) else None


class ResourceStore(ObservableStore[ResourceState]):
    """
    Local mirror of one backend collection.

    Every asynchronous operation moves through three phases: issued
    (``loading=True``, ``error`` cleared), succeeded or failed. The mirror
    only changes after the backend confirmed the operation. Operations
    return a ``ServiceResult``; nothing is retried automatically.

    Usage:
        store = create_resource_store("animals", gateway)
        result = store.fetch_all({"species": "cattle"})
        if not result:
            st.error(store.error)
    """

    OPERATIONS = ("fetch_all", "fetch_by_id", "create", "update", "partial_update", "delete")

    def __init__(
        self,
        name: str,
        gateway: ResourceGateway,
        default_filters: Optional[Dict[str, Any]] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self._default_filters = copy.deepcopy(default_filters or {})
        super().__init__(ResourceState(filters=copy.deepcopy(self._default_filters)))
        self.name = name
        self.gateway = gateway
        self._executor = executor

    def __repr__(self) -> str:
        return f"ResourceStore({self.name!r}, items={len(self._state.items)})"

    # -------------------------------------------------------------------------
    # READ ACCESS
    # -------------------------------------------------------------------------

    def _copy_state(self) -> ResourceState:
        s = self._state
        return ResourceState(
            items=list(s.items),
            selected=s.selected,
            loading=s.loading,
            error=s.error,
            filters=copy.deepcopy(s.filters),
        )

    @property
    def items(self) -> List[Record]:
        return self.snapshot().items

    @property
    def selected(self) -> Optional[Record]:
        return self._state.selected

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[Any]:
        return self._state.error

    @property
    def filters(self) -> Dict[str, Any]:
        return self.snapshot().filters

    # -------------------------------------------------------------------------
    # OPERATION LIFECYCLE
    # -------------------------------------------------------------------------

    def _run(
        self,
        operation: str,
        call: Callable[[], Any],
        on_success: Callable[[ResourceState, Any], None],
    ) -> ServiceResult:
        return self._track(f"{self.name}: {operation}", call, on_success)

    # -------------------------------------------------------------------------
    # ASYNCHRONOUS OPERATIONS
    # -------------------------------------------------------------------------

    def fetch_all(self, params: Optional[Dict[str, Any]] = None) -> ServiceResult:
        """List the collection; ``items`` is replaced wholesale on success"""
        def on_success(state: ResourceState, items: List[Record]) -> None:
            state.items = items

        return self._run(
            "fetch_all",
            lambda: unwrap_collection(self.gateway.list(params)),
            on_success,
        )

    def fetch_by_id(self, entity_id: Any) -> ServiceResult:
        """Fetch one entity into ``selected``"""
        def on_success(state: ResourceState, entity: Record) -> None:
            state.selected = entity

        return self._run(
            "fetch_by_id",
            lambda: expect_entity(self.gateway.get(entity_id), "fetch_by_id"),
            on_success,
        )

    def create(self, payload: Dict[str, Any]) -> ServiceResult:
        """Create an entity; the response (with its server id) is appended"""
        def on_success(state: ResourceState, entity: Record) -> None:
            state.items = state.items + [entity]

        return self._run(
            "create",
            lambda: expect_entity(self.gateway.create(payload), "create"),
            on_success,
        )

    def update(self, entity_id: Any, payload: Dict[str, Any]) -> ServiceResult:
        """Full update (PUT); the matching entry is replaced, absent ids are a no-op"""
        return self._run(
            "update",
            lambda: self._reconcile("update", entity_id, self.gateway.update(entity_id, payload)),
            self._replace_reducer(entity_id),
        )

    def partial_update(self, entity_id: Any, payload: Dict[str, Any]) -> ServiceResult:
        """Partial update (PATCH); reconciled like ``update``"""
        return self._run(
            "partial_update",
            lambda: self._reconcile("partial_update", entity_id, self.gateway.partial_update(entity_id, payload)),
            self._replace_reducer(entity_id),
        )

    def delete(self, entity_id: Any) -> ServiceResult:
        """Delete an entity; survivors keep their order"""
        def on_success(state: ResourceState, _: Any) -> None:
            state.items = [item for item in state.items if _entity_id(item) != entity_id]

        def call() -> Any:
            self.gateway.delete(entity_id)
            return entity_id

        return self._run("delete", call, on_success)

    def _reconcile(self, operation: str, entity_id: Any, body: Any) -> Record:
        # An empty success body (204) means the change was applied; read it back
        if body is None:
            body = self.gateway.get(entity_id)
        return expect_entity(body, operation)

    @staticmethod
    def _replace_reducer(entity_id: Any) -> Callable[[ResourceState, Record], None]:
        def on_success(state: ResourceState, entity: Record) -> None:
            target = entity.get("id", entity_id)
            state.items = [
                entity if _entity_id(item) == target else item
                for item in state.items
            ]
        return on_success

    def submit(self, operation: str, *args: Any, **kwargs: Any) -> Future:
        """
        Schedule an operation on the worker pool.

        Returns:
            Future resolving to the operation's ServiceResult
        """
        if operation not in self.OPERATIONS:
            raise ValueError(f"Unknown operation '{operation}'. Available: {list(self.OPERATIONS)}")
        executor = self._executor or get_shared_executor()
        return executor.submit(getattr(self, operation), *args, **kwargs)

    # -------------------------------------------------------------------------
    # LOCAL ACTIONS
    # -------------------------------------------------------------------------

    def set_selected(self, entity: Optional[Record]) -> None:
        def reducer(state: ResourceState) -> None:
            state.selected = entity
        self._apply(reducer)

    def set_filters(self, **filters: Any) -> None:
        """Merge filter values into the current filters"""
        def reducer(state: ResourceState) -> None:
            state.filters = {**state.filters, **filters}
        self._apply(reducer)

    def clear_filters(self) -> None:
        def reducer(state: ResourceState) -> None:
            state.filters = copy.deepcopy(self._default_filters)
        self._apply(reducer)

    def clear_error(self) -> None:
        def reducer(state: ResourceState) -> None:
            state.error = None
        self._apply(reducer)

    def reset(self) -> None:
        """Drop everything mirrored so far and restore the default filters"""
        def reducer(state: ResourceState) -> None:
            state.items = []
            state.selected = None
            state.loading = False
            state.error = None
            state.filters = copy.deepcopy(self._default_filters)
        self._apply(reducer)


def create_resource_store(
    name: str,
    gateway: ResourceGateway,
    default_filters: Optional[Dict[str, Any]] = None,
    executor: Optional[ThreadPoolExecutor] = None,
) -> ResourceStore:
    """Build the store for one resource; filters default to the resource's entry in DEFAULT_FILTERS"""
    if default_filters is None:
        default_filters = DEFAULT_FILTERS.get(name, {})
    return ResourceStore(
        name,
        gateway,
        default_filters=default_filters,
        executor=executor,
    )
