"""
StarQuery Adapters

Rendering integrations for query state.
"""

from .datastar import SSE_HEADERS, merge_query_signals, stream_query

__all__ = ["SSE_HEADERS", "merge_query_signals", "stream_query"]
