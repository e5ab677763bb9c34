from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Protocol, Type, runtime_checkable

from sqlalchemy.orm import Query


@runtime_checkable
class CriteriaInterface(Protocol):
    """
    Criteria contract.

    A criterion is a reusable unit of predicate logic. It receives the
    in-progress query and the mapped model class and returns the query with
    its constraints applied.
    """

    def apply(self, query: Query[Any], model: Type[Any]) -> Query[Any]:
        """
        Apply the criteria to the given query.

        @param query: The query builder instance
        @param model: The mapped model class being queried
        @return: The constrained query builder
        """
        ...


class Criteria(ABC, CriteriaInterface):
    """
    Abstract base class for repository criteria.

    Subclasses may set ``criteria_key`` to give the criterion a stable
    identifier for ``remove_criteria()``; otherwise the dotted class path is
    used.

    Usage:
        class ActiveUsersCriteria(Criteria):
            def apply(self, query: Query[Any], model: Type[Any]) -> Query[Any]:
                return query.filter(model.active.is_(True))

        repository.push_criteria(ActiveUsersCriteria())
    """

    criteria_key: Optional[str] = None

    @abstractmethod
    def apply(self, query: Query[Any], model: Type[Any]) -> Query[Any]:
        """Apply the criteria to the given query."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(key='{criteria_key_for(self)}')>"


class AnonymousCriteria(Criteria):
    """
    Criteria built from a callable.

    Allows creating criteria on-the-fly without defining a full class. Give
    it a key to be able to remove it by name later.

    Usage:
        verified = AnonymousCriteria(
            lambda query, model: query.filter(model.is_verified.is_(True)),
            key='verified'
        )
        repository.push_criteria(verified)
        repository.remove_criteria('verified')
    """

    def __init__(self, callback: Callable[[Query[Any], Type[Any]], Query[Any]], key: Optional[str] = None) -> None:
        self.callback = callback
        self.criteria_key = key

    def apply(self, query: Query[Any], model: Type[Any]) -> Query[Any]:
        return self.callback(query, model)


def is_criteria(value: Any) -> bool:
    """Determine whether the value is a usable criterion instance."""
    if isinstance(value, type) or not isinstance(value, CriteriaInterface):
        return False
    return callable(getattr(value, 'apply', None))


def criteria_key_for(criterion: Any) -> str:
    """Get the stable key used to match a criterion on removal."""
    key = getattr(criterion, 'criteria_key', None)
    if isinstance(key, str) and key:
        return key

    cls = type(criterion)
    return f"{cls.__module__}.{cls.__qualname__}"
