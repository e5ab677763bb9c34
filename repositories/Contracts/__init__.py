from __future__ import annotations

from .CriteriaInterface import CriteriaInterface, Criteria, AnonymousCriteria, is_criteria, criteria_key_for
from .RepositoryCriteriaInterface import RepositoryCriteriaInterface
from .RepositoryInterface import RepositoryInterface, ScopeCallback

__all__: list[str] = [
    'CriteriaInterface',
    'Criteria',
    'AnonymousCriteria',
    'is_criteria',
    'criteria_key_for',
    'RepositoryCriteriaInterface',
    'RepositoryInterface',
    'ScopeCallback',
]
