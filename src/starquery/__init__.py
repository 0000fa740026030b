"""
StarQuery - Async Fetch State for Reactive UIs

Binds the result of an async fetch function into observable state with
loading, error and refetch status alongside a two-way value binding.
"""

from .core import (
    Query, QueryField, ValueBinding,
    QueryPhase, QueryStatus, QueryProjection, QueryChange,
    QueryError, InvalidQueryError, QueryDisposedError,
)
from .config import (
    Environment, QueryConfig, LoggingConfig, StarQueryConfig,
    configure_logging, set_config, get_config, configure_from_dict,
)

__all__ = [
    # Core query components
    'Query',
    'QueryField',
    'ValueBinding',
    'QueryPhase',
    'QueryStatus',
    'QueryProjection',
    'QueryChange',

    # Errors
    'QueryError',
    'InvalidQueryError',
    'QueryDisposedError',

    # Configuration
    'Environment',
    'QueryConfig',
    'LoggingConfig',
    'StarQueryConfig',
    'configure_logging',
    'set_config',
    'get_config',
    'configure_from_dict',
]
