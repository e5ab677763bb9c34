from __future__ import annotations

from .ServiceContainer import BindingResolutionException, ServiceContainer, ServiceProvider

__all__: list[str] = [
    'BindingResolutionException',
    'ServiceContainer',
    'ServiceProvider',
]
