"""
StarQuery Core - Exceptions

Fetch failures are not represented here: they are stored on the query as the
exception the fetch function raised and are never re-raised.
"""


class QueryError(Exception):
    """Base exception for query operations"""
    pass


class InvalidQueryError(QueryError):
    """Raised when a query is constructed with an unusable fetch function"""
    pass


class QueryDisposedError(QueryError):
    """Raised when an explicit operation is requested on a disposed query"""
    pass


__all__ = ["QueryError", "InvalidQueryError", "QueryDisposedError"]
