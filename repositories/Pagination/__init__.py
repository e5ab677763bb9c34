from __future__ import annotations

from .LengthAwarePaginator import LengthAwarePaginator, PaginationMeta

__all__: list[str] = [
    'LengthAwarePaginator',
    'PaginationMeta',
]
