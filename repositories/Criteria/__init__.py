from __future__ import annotations

from .CriteriaStore import CriteriaStore

__all__: list[str] = [
    'CriteriaStore',
]
