from __future__ import annotations

from .Contracts import AnonymousCriteria, Criteria, CriteriaInterface, RepositoryCriteriaInterface, RepositoryInterface
from .Criteria import CriteriaStore
from .Exceptions import ModelNotFoundException, RepositoryException
from .Pagination import LengthAwarePaginator
from .Repository import BaseRepository, Bound, Unbound
from .Support import BindingResolutionException, ServiceContainer, ServiceProvider

__all__: list[str] = [
    'AnonymousCriteria',
    'BaseRepository',
    'BindingResolutionException',
    'Bound',
    'Criteria',
    'CriteriaInterface',
    'CriteriaStore',
    'LengthAwarePaginator',
    'ModelNotFoundException',
    'RepositoryCriteriaInterface',
    'RepositoryException',
    'RepositoryInterface',
    'ServiceContainer',
    'ServiceProvider',
    'Unbound',
]
