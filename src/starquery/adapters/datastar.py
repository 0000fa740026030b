"""
Datastar Adapter - Query Signals over SSE

Streams query state to the browser as ``datastar-merge-signals`` events so
markup can bind to ``$<query>.isLoading``, ``$<query>.error`` and
``$<query>.value``. The generator is framework agnostic: wrap it in any
streaming response together with ``SSE_HEADERS``.
"""

import asyncio
import logging
from typing import AsyncIterator

from datastar_py import SSE_HEADERS
from datastar_py import ServerSentEventGenerator as SSE

from ..core.query import Query
from ..core.signals import merge_signals
from ..core.status import QueryChange

logger = logging.getLogger(__name__)


def merge_query_signals(*queries: Query) -> str:
    """One merge-signals event carrying the current state of every query"""
    return SSE.merge_signals(merge_signals(*(query.signals() for query in queries)))


async def stream_query(query: Query, heartbeat: float = 15) -> AsyncIterator[str]:
    """
    Yield the query's signals now and after every change.

    The initial read observes the query, so a not-yet-fetched query starts
    loading as soon as a client connects. When nothing changes for
    ``heartbeat`` seconds the current signals are sent again.
    """
    changes: "asyncio.Queue[QueryChange]" = asyncio.Queue()
    unsubscribe = query.subscribe(changes.put_nowait)
    try:
        query.status  # observing starts the fetch
        yield merge_query_signals(query)

        while not query.is_disposed:
            try:
                change = await asyncio.wait_for(changes.get(), timeout=heartbeat)
                logger.debug(f"Streaming {change.fields} for query '{change.query_name}'")
            except asyncio.TimeoutError:
                pass
            yield merge_query_signals(query)
    finally:
        unsubscribe()


__all__ = ["SSE_HEADERS", "merge_query_signals", "stream_query"]
