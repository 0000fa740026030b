import copy
from typing import Any, Callable, Optional

from .errors import InvalidQueryError
from .query import FetchFunction, Query
from ..config import QueryConfig


class QueryField:
    """
    Declares a query as a class attribute.

    Class access returns the field itself. Instance access returns that
    instance's Query, created on first access. Assigning to the attribute
    writes through the query's value binding.

        class UserList:
            users = QueryField(default=[], fetch=load_users, params={"page": 1})

        view = UserList()
        view.users.status      # starts the fetch
        view.users = []        # overrides the value directly
    """

    def __init__(
        self,
        default: Any = None,
        *,
        fetch: FetchFunction,
        params: Any = (),
        default_factory: Optional[Callable[[], Any]] = None,
        name: Optional[str] = None,
        config: Optional[QueryConfig] = None,
    ):
        if not callable(fetch):
            raise InvalidQueryError(f"QueryField fetch function must be callable, got {type(fetch).__name__}")

        self.default = default
        self.default_factory = default_factory
        self.fetch = fetch
        self.params = params
        self.name = name
        self.config = config
        self.attr_name: Optional[str] = None

    def __set_name__(self, owner, name):
        self.attr_name = name
        if self.name is None:
            self.name = name

    def __get__(self, instance, owner):
        if instance is None:
            return self

        storage = self._storage_key
        query = instance.__dict__.get(storage)
        if query is None:
            query = Query(
                self._make_default(),
                self.fetch,
                self.params,
                name=self.name,
                config=self.config,
            )
            instance.__dict__[storage] = query
        return query

    def __set__(self, instance, value):
        self.__get__(instance, type(instance)).value = value

    @property
    def _storage_key(self) -> str:
        return f"_query_{self.attr_name}"

    def _make_default(self):
        if self.default_factory is not None:
            return self.default_factory()
        return copy.deepcopy(self.default)

    def __repr__(self):
        return f"QueryField({self.attr_name})"


__all__ = ["QueryField"]
