"""
Query Signals - UI Binding Names and Payloads

Translates query snapshots into Datastar-style signals so a page can bind
``data-show="$users.isLoading"`` or ``data-text="$users.error"`` without
knowing anything about the query itself.

- Namespaced signals: {"users": {"isLoading": true, ...}} bound as $users.isLoading
- Flat signals: {"isLoading": true, ...} bound as $isLoading
"""

from typing import Any, Dict, Optional

from pydantic.alias_generators import to_camel
from pydantic_core import to_jsonable_python

from .status import QueryStatus

SIGNAL_FIELDS = ("value", "is_loading", "is_fetched", "error", "phase")


def signal_key(field_name: str) -> str:
    """Client-side key for a status field (``is_loading`` -> ``isLoading``)"""
    return to_camel(field_name)


def signal_name(field_name: str, namespace: Optional[str] = None, use_namespace: bool = True) -> str:
    """Generate the signal name used in UI binding expressions"""
    key = signal_key(field_name)
    if use_namespace and namespace:
        return f"${namespace}.{key}"
    return f"${key}"


def status_to_signals(status: QueryStatus) -> Dict[str, Any]:
    """Serialize a snapshot into JSON-safe signal values"""
    signals = {}
    for field_name in SIGNAL_FIELDS:
        value = getattr(status, field_name)
        if field_name == "error":
            value = str(value) if value is not None else None
        elif field_name == "phase":
            value = value.value
        else:
            value = to_jsonable_python(value, fallback=str)
        signals[signal_key(field_name)] = value
    return signals


def namespaced_signals(status: QueryStatus, namespace: Optional[str] = None, use_namespace: bool = True) -> Dict[str, Any]:
    """Signals for one query, nested under its namespace when enabled"""
    signals = status_to_signals(status)
    if use_namespace and namespace:
        return {namespace: signals}
    return signals


def merge_signals(*signal_dicts: Dict[str, Any]) -> Dict[str, Any]:
    """Merge signal dictionaries, combining namespaces that appear more than once"""
    merged: Dict[str, Any] = {}
    for signal_dict in signal_dicts:
        for key, value in signal_dict.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = value
    return merged


__all__ = [
    "SIGNAL_FIELDS", "signal_key", "signal_name", "status_to_signals",
    "namespaced_signals", "merge_signals",
]
