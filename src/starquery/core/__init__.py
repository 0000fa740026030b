"""
StarQuery Core Module

Fetch-state lifecycle, status snapshots, value binding and signal naming.
No web framework dependencies.
"""

from .query import Query, FetchFunction, QueryCallback
from .field import QueryField
from .binding import ValueBinding
from .status import QueryPhase, QueryStatus, QueryProjection, QueryChange
from .errors import QueryError, InvalidQueryError, QueryDisposedError
from .signals import signal_name, status_to_signals, merge_signals

__all__ = [
    "Query",
    "FetchFunction",
    "QueryCallback",
    "QueryField",
    "ValueBinding",
    "QueryPhase",
    "QueryStatus",
    "QueryProjection",
    "QueryChange",
    "QueryError",
    "InvalidQueryError",
    "QueryDisposedError",
    "signal_name",
    "status_to_signals",
    "merge_signals",
]
