from __future__ import annotations

from .Dependencies import repository

__all__: list[str] = [
    'repository',
]
