"""
Query Status - Snapshots and Change Events

Read-only views of a query's fetch lifecycle:

- QueryPhase: which of the four lifecycle states a query is in
- QueryStatus: immutable snapshot handed to subscribers and serializers
- QueryProjection: the status tuple returned by ``Query.status``
- QueryChange: the notification emitted whenever observed state changes
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional, Tuple, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from .binding import ValueBinding


class QueryPhase(str, Enum):
    """Lifecycle phases of a fetch cycle"""
    NOT_FETCHED = "not_fetched"
    LOADING = "loading"
    RESOLVED = "resolved"
    ERRORED = "errored"


class QueryStatus(BaseModel):
    """Immutable snapshot of a query. Taking one never triggers a fetch."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    phase: QueryPhase
    is_loading: bool
    is_fetched: bool
    error: Optional[BaseException] = None
    value: Any = None

    @property
    def has_error(self) -> bool:
        return self.error is not None


class QueryProjection(NamedTuple):
    """
    Derived status tuple of a query.

    Fields are ordered like the property wrapper's projected value:
    ``(is_loading, error, refetch, binding)``.
    """
    is_loading: bool
    error: Optional[BaseException]
    refetch: Callable[[], None]
    binding: "ValueBinding"

    @property
    def value(self) -> Any:
        """Current value through the binding"""
        return self.binding.get()


@dataclass(frozen=True)
class QueryChange:
    """A change notification delivered to query subscribers"""
    query_name: str
    fields: Tuple[str, ...]
    status: QueryStatus
    animated: bool = False


__all__ = ["QueryPhase", "QueryStatus", "QueryProjection", "QueryChange"]
