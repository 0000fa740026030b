from typing import Any, Callable, Generic, TypeVar

Value = TypeVar("Value")


class ValueBinding(Generic[Value]):
    """
    Two-way binding to a query's value.

    Reading returns the current value. Writing overwrites it directly,
    bypassing the fetch pipeline, and notifies the query's subscribers.
    Loading, error and fetched state are left alone.
    """

    def __init__(self, getter: Callable[[], Value], setter: Callable[[Value], None], name: str = "value"):
        self._getter = getter
        self._setter = setter
        self.name = name

    def get(self) -> Value:
        return self._getter()

    def set(self, value: Value) -> None:
        self._setter(value)

    @property
    def value(self) -> Value:
        return self._getter()

    @value.setter
    def value(self, value: Value) -> None:
        self._setter(value)

    def __call__(self) -> Value:
        return self._getter()

    def __repr__(self):
        return f"ValueBinding({self.name}={self._getter()!r})"


__all__ = ["ValueBinding"]
