"""
Query - Async Fetch State

🔄 Reactive Fetch Lifecycle:
A Query adapts the result of an async fetch function into observable state.
It holds a value (the caller's default until a fetch succeeds), tracks
loading and error status, and notifies subscribers whenever any of it
changes so bound UI can re-render.

Lifecycle:
    NOT_FETCHED --(observed)--> LOADING --(success)--> RESOLVED
                                        --(failure)--> ERRORED
    RESOLVED/ERRORED --(refetch())--> NOT_FETCHED

Reading ``query.status`` is what starts a fetch cycle, the same way the
property wrapper's projected value does. ``ensure_loaded()`` is the explicit
alternative for owners that prefer to drive loading themselves.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, TypeVar, Union

from ..config import QueryConfig, get_config
from .binding import ValueBinding
from .errors import InvalidQueryError, QueryDisposedError
from .signals import namespaced_signals, signal_name
from .status import QueryChange, QueryPhase, QueryProjection, QueryStatus

logger = logging.getLogger(__name__)

Value = TypeVar("Value")
Params = TypeVar("Params")

FetchFunction = Callable[[Params], Union[Awaitable[Value], Value]]
QueryCallback = Callable[[QueryChange], Any]


class Query(Generic[Value, Params]):
    """
    Observable state for one async fetch.

    Only one fetch is ever in flight per query. The in-flight task is
    recorded synchronously before the fetch is awaited, so repeated reads
    of ``status`` cannot schedule a second one.
    """

    def __init__(
        self,
        default: Value,
        fetch_fn: FetchFunction,
        params: Params = (),
        *,
        name: Optional[str] = None,
        config: Optional[QueryConfig] = None,
    ):
        if not callable(fetch_fn):
            raise InvalidQueryError(f"Query fetch function must be callable, got {type(fetch_fn).__name__}")

        self.fetch_fn = fetch_fn
        self.params = params
        self.name = name or getattr(fetch_fn, "__name__", None) or "query"
        self.config = config or get_config().query

        self._value: Value = default
        self._is_loading = True
        self._error: Optional[BaseException] = None
        self._is_fetched = False
        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self._disposed = False
        self._subscribers: List[QueryCallback] = []
        self._binding = ValueBinding(self._get_value, self._set_value, name=self.name)

    @classmethod
    def create(cls, default: Value, fetch_fn: FetchFunction, params: Params = (), **kwargs) -> "Query[Value, Params]":
        """Create a query holding ``default`` until its first fetch succeeds"""
        return cls(default, fetch_fn, params, **kwargs)

    # State

    @property
    def value(self) -> Value:
        return self._value

    @value.setter
    def value(self, value: Value) -> None:
        self._set_value(value)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def is_fetched(self) -> bool:
        return self._is_fetched

    @property
    def is_in_flight(self) -> bool:
        return self._task is not None

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def phase(self) -> QueryPhase:
        if self._task is not None:
            return QueryPhase.LOADING
        if not self._is_fetched:
            return QueryPhase.NOT_FETCHED
        if self._error is not None:
            return QueryPhase.ERRORED
        return QueryPhase.RESOLVED

    @property
    def binding(self) -> ValueBinding[Value]:
        return self._binding

    @property
    def status(self) -> QueryProjection:
        """
        Derived status tuple ``(is_loading, error, refetch, binding)``.

        Reading it starts a fetch when the query has not been fetched yet
        and nothing is in flight.
        """
        if self.config.fetch_on_observe:
            self._observe()
        return QueryProjection(self._is_loading, self._error, self.refetch, self._binding)

    def snapshot(self) -> QueryStatus:
        return QueryStatus(
            phase=self.phase,
            is_loading=self._is_loading,
            is_fetched=self._is_fetched,
            error=self._error,
            value=self._value,
        )

    # Operations

    def refetch(self) -> None:
        """Clear the error and re-arm the guard. The next observation fetches again."""
        if self._disposed:
            return
        self._error = None
        self._is_fetched = False
        self._generation += 1
        self._notify(("error", "is_fetched"))

    async def ensure_loaded(self) -> Value:
        """
        Fetch if needed and wait for the in-flight fetch to settle.

        Returns the value. A failed fetch is not raised; check ``error``.
        """
        if self._disposed:
            raise QueryDisposedError(f"Query '{self.name}' has been disposed")

        while True:
            if self._task is None and not self._is_fetched:
                self._start_fetch()
            task = self._task
            if task is None:
                break
            await asyncio.shield(task)
            if self._disposed:
                break
        return self._value

    def subscribe(self, callback: QueryCallback) -> Callable[[], None]:
        """
        Register a change callback and return a function that removes it.

        The first subscription counts as an observation when
        ``fetch_on_subscribe`` is enabled.
        """
        if self._disposed:
            raise QueryDisposedError(f"Cannot subscribe to disposed query '{self.name}'")

        first = not self._subscribers
        self._subscribers.append(callback)
        if first and self.config.fetch_on_subscribe:
            self._observe()

        def unsubscribe() -> None:
            self.unsubscribe(callback)

        return unsubscribe

    def unsubscribe(self, callback: QueryCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def dispose(self) -> None:
        """Detach the query from its owner. An in-flight fetch will settle into nothing."""
        self._disposed = True
        self._subscribers.clear()

    # Signals

    @property
    def namespace(self) -> str:
        return self.config.namespace or self.name

    def signal_name(self, field_name: str) -> str:
        return signal_name(field_name, self.namespace, self.config.use_namespace)

    def signals(self) -> Dict[str, Any]:
        return namespaced_signals(self.snapshot(), self.namespace, self.config.use_namespace)

    # Fetch cycle

    def _observe(self) -> None:
        if self._disposed or self._is_fetched or self._task is not None:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"Query '{self.name}' observed outside an event loop; fetch not scheduled")
            return
        self._start_fetch()

    def _start_fetch(self) -> None:
        generation = self._generation
        self._is_loading = True
        self._task = asyncio.get_running_loop().create_task(self._run_fetch(generation))
        logger.debug(f"Query '{self.name}' fetch started")
        self._notify(("is_loading",), animated=True)

    async def _run_fetch(self, generation: int) -> None:
        task = asyncio.current_task()
        try:
            result = self.fetch_fn(self.params)
            if inspect.isawaitable(result):
                result = await result
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._settle(generation, error=e)
        else:
            self._settle(generation, value=result)
        finally:
            if self._task is task:
                self._task = None

    def _settle(self, generation: int, *, value: Any = None, error: Optional[BaseException] = None) -> None:
        self._task = None

        if self._disposed:
            logger.debug(f"Query '{self.name}' settled after dispose; result dropped")
            return

        if generation != self._generation:
            logger.debug(f"Query '{self.name}' was refetched while loading; result dropped")
            self._notify(("is_fetched",))
            return

        self._is_loading = False
        self._is_fetched = True
        if error is not None:
            if self.config.log_fetch_errors:
                logger.error(f"Error fetching query '{self.name}': {error!r}")
            self._error = error
            self._notify(("error", "is_loading", "is_fetched"))
        else:
            self._value = value
            logger.debug(f"Query '{self.name}' resolved")
            self._notify(("value", "is_loading", "is_fetched"), animated=True)

    # Binding

    def _get_value(self) -> Value:
        return self._value

    def _set_value(self, value: Value) -> None:
        if self._disposed:
            return
        self._value = value
        self._notify(("value",))

    def _notify(self, fields, animated: bool = False) -> None:
        if not self._subscribers:
            return

        change = QueryChange(
            query_name=self.name,
            fields=tuple(fields),
            status=self.snapshot(),
            animated=animated,
        )
        for callback in list(self._subscribers):
            try:
                callback(change)
            except Exception:
                logger.exception(f"Query '{self.name}' subscriber callback failed")

    def __repr__(self):
        return f"Query(name={self.name!r}, phase={self.phase.value}, value={self._value!r})"


__all__ = ["Query", "FetchFunction", "QueryCallback"]
