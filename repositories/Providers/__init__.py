from __future__ import annotations

from .RepositoryServiceProvider import RepositoryServiceProvider

__all__: list[str] = [
    'RepositoryServiceProvider',
]
