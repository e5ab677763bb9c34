from __future__ import annotations

from .LogManager import JsonFormatter, LaravelFormatter, configure_logging

__all__ = [
    'JsonFormatter',
    'LaravelFormatter',
    'configure_logging',
]
