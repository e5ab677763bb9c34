from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Generic, Iterator, List, Optional, TypeVar

T = TypeVar('T')


@dataclass
class PaginationMeta:
    """Pagination metadata for repository results."""

    current_page: int
    last_page: int
    per_page: int
    total: int
    from_item: Optional[int]
    to_item: Optional[int]


class LengthAwarePaginator(Generic[T]):
    """
    Paginator that knows the total number of matching records.

    ``per_page`` is clamped into ``[1, max_per_page]`` and ``current_page``
    to at least 1, so the offset and limit handed to the query are always
    valid.
    """

    def __init__(self, items: List[T], total: int, per_page: int, current_page: int = 1) -> None:
        self.items = items
        self.total = total
        self.per_page = per_page
        self.current_page = current_page

    @staticmethod
    def resolve_per_page(per_page: Optional[int], default: int, maximum: int) -> int:
        """Normalize a requested page size."""
        if per_page is None or per_page == 0:
            per_page = default
        return max(1, min(per_page, maximum))

    @staticmethod
    def resolve_current_page(page: Optional[int]) -> int:
        return max(page or 1, 1)

    @staticmethod
    def offset_for(page: int, per_page: int) -> int:
        return (page - 1) * per_page

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def first_item(self) -> Optional[int]:
        """Get the position of the first item on the current page."""
        if not self.items:
            return None
        return self.offset_for(self.current_page, self.per_page) + 1

    @property
    def last_item(self) -> Optional[int]:
        first = self.first_item
        if first is None:
            return None
        return first + len(self.items) - 1

    def has_pages(self) -> bool:
        return self.per_page < self.total

    def get_meta(self) -> PaginationMeta:
        return PaginationMeta(
            current_page=self.current_page,
            last_page=self.last_page,
            per_page=self.per_page,
            total=self.total,
            from_item=self.first_item,
            to_item=self.last_item
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the paginator to the repository's response structure."""
        meta = asdict(self.get_meta())
        meta['from'] = meta.pop('from_item')
        meta['to'] = meta.pop('to_item')

        return {
            'data': self.items,
            'pagination': meta
        }

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f'<LengthAwarePaginator: {len(self.items)} items, page {self.current_page} of {self.last_page}>'
