from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Tuple, Union

from .CriteriaInterface import CriteriaInterface

CriteriaInput = Union[CriteriaInterface, Iterable[Any]]
RemovalInput = Union[CriteriaInterface, type, str, Iterable[Any]]


class RepositoryCriteriaInterface(ABC):
    """
    Repository criteria interface.

    Criteria pushed with ``push_criteria()`` persist across queries, criteria
    given to ``with_criteria()`` apply to the next query only.
    """

    @abstractmethod
    def with_criteria(self, criteria: CriteriaInput) -> 'RepositoryCriteriaInterface':
        """
        Temporarily apply the given criteria to the next query only.

        The criteria are applied once to the next operation involving data
        retrieval and then automatically discarded.
        """
        pass

    @abstractmethod
    def push_criteria(self, criteria: CriteriaInput) -> 'RepositoryCriteriaInterface':
        """
        Persistently apply the given criteria to all queries.

        The criteria apply to all future operations until explicitly removed
        or the repository is reset.
        """
        pass

    @abstractmethod
    def remove_criteria(self, criteria: RemovalInput) -> 'RepositoryCriteriaInterface':
        """
        Remove criteria from the repository.

        Affects both persistent and transient criteria. Accepts instances,
        classes or criteria keys.
        """
        pass

    @abstractmethod
    def get_criteria(self) -> Tuple[CriteriaInterface, ...]:
        """Get all criteria that will be applied in the next query."""
        pass

    @abstractmethod
    def enable_criteria(self) -> 'RepositoryCriteriaInterface':
        """
        Permanently enable the application of criteria in queries.

        Note that ``skip_criteria()`` still overrides this on the next query.
        """
        pass

    @abstractmethod
    def disable_criteria(self) -> 'RepositoryCriteriaInterface':
        """
        Permanently disable the application of criteria in queries.

        Note that ``use_criteria()`` still overrides this on the next query.
        """
        pass

    @abstractmethod
    def use_criteria(self) -> 'RepositoryCriteriaInterface':
        """
        Temporarily enable criteria for the next query.

        Overrides a ``disable_criteria()`` setting just for the next query
        without affecting the permanent enabled/disabled state.
        """
        pass

    @abstractmethod
    def skip_criteria(self) -> 'RepositoryCriteriaInterface':
        """
        Temporarily bypass all criteria for the next query.

        Does not affect the permanent enabled/disabled state.
        """
        pass

    @abstractmethod
    def reset_criteria(self) -> 'RepositoryCriteriaInterface':
        """Clear all criteria from the repository."""
        pass
