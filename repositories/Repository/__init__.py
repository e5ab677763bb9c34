from __future__ import annotations

from .BaseRepository import BaseRepository
from .ModelHandle import Bound, ModelHandle, Unbound, coerce_handle, ensure_bound, is_model

__all__: list[str] = [
    'BaseRepository',
    'Bound',
    'ModelHandle',
    'Unbound',
    'coerce_handle',
    'ensure_bound',
    'is_model',
]
