from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Query

T = TypeVar('T')

ScopeCallback = Callable[[Query[Any]], Optional[Query[Any]]]


class RepositoryInterface(ABC, Generic[T]):
    """
    Repository interface.

    Defines how a repository resolves its model and prepares queries for it.
    """

    @abstractmethod
    def model(self) -> Type[T]:
        """Return the model class."""
        pass

    @abstractmethod
    def make_model(self) -> T:
        """Create a new model instance."""
        pass

    @abstractmethod
    def reset_model(self) -> None:
        """Reset the model instance."""
        pass

    @abstractmethod
    def get_model(self) -> T:
        """Get the model instance."""
        pass

    @abstractmethod
    def add_scope(self, scope: ScopeCallback) -> 'RepositoryInterface[T]':
        """Add a scope to be applied to the next query."""
        pass

    @abstractmethod
    def reset_scopes(self) -> 'RepositoryInterface[T]':
        """Reset the scopes."""
        pass

    @abstractmethod
    def query(self) -> Query[T]:
        """Create a new query with active repository criteria and scopes applied."""
        pass

    @abstractmethod
    def new_query(self) -> Query[T]:
        """Alias for query()."""
        pass
