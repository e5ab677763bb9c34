from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Union

Abstract = Union[str, type]


class BindingResolutionException(Exception):
    """Raised when the container cannot build the requested abstract."""
    pass


class ServiceContainer:
    """
    Laravel-style service container.

    Resolves bindings registered with ``bind()``, ``singleton()`` or
    ``instance()``. Unbound classes are built by calling them, filling
    constructor parameters from explicit parameters, bindings keyed by
    parameter name, or defaults.

    A process-wide container can be registered with ``set_instance()`` for
    static-style repository calls. Prefer passing a container explicitly.
    """

    _instance: Optional['ServiceContainer'] = None

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self._bindings: Dict[Abstract, Dict[str, Any]] = {}
        self._instances: Dict[Abstract, Any] = {}
        self._build_stack: List[Abstract] = []

    @classmethod
    def get_instance(cls) -> Optional['ServiceContainer']:
        """Get the globally available container, if one was registered."""
        return cls._instance

    @classmethod
    def set_instance(cls, container: Optional['ServiceContainer']) -> Optional['ServiceContainer']:
        """Register (or clear, with None) the globally available container."""
        cls._instance = container
        return container

    def bind(self, abstract: Abstract, concrete: Optional[Callable[..., Any]] = None, shared: bool = False) -> None:
        """Bind a service to the container."""
        self._bindings[abstract] = {
            'concrete': concrete if concrete is not None else abstract,
            'shared': shared
        }
        self._instances.pop(abstract, None)
        self.logger.debug(f"Bound service: {self._name(abstract)} as {'singleton' if shared else 'transient'}")

    def singleton(self, abstract: Abstract, concrete: Optional[Callable[..., Any]] = None) -> None:
        """Bind a singleton service to the container."""
        self.bind(abstract, concrete, shared=True)

    def instance(self, abstract: Abstract, instance: Any) -> Any:
        """Register an existing instance as shared in the container."""
        self._instances[abstract] = instance
        return instance

    def bound(self, abstract: Abstract) -> bool:
        """Determine whether the abstract has been bound."""
        return abstract in self._bindings or abstract in self._instances

    def forget(self, abstract: Abstract) -> None:
        """Remove a binding from the container."""
        self._bindings.pop(abstract, None)
        self._instances.pop(abstract, None)

    def create_scope(self) -> 'ServiceContainer':
        """Create a child container sharing this container's bindings and instances."""
        scope = ServiceContainer()
        scope._bindings = dict(self._bindings)
        scope._instances = dict(self._instances)
        return scope

    def flush(self) -> None:
        """Flush all bindings and instances."""
        self._bindings.clear()
        self._instances.clear()

    def make(self, abstract: Abstract, parameters: Optional[Dict[str, Any]] = None) -> Any:
        """Resolve a service from the container."""
        parameters = parameters or {}

        if abstract in self._instances:
            return self._instances[abstract]

        if abstract in self._build_stack:
            chain = ' -> '.join(self._name(a) for a in self._build_stack + [abstract])
            raise BindingResolutionException(f"Circular dependency detected: {chain}")

        self._build_stack.append(abstract)
        try:
            binding = self._bindings.get(abstract)
            if binding is None:
                instance = self._build(abstract, parameters)
            else:
                instance = self._build_concrete(binding['concrete'], abstract, parameters)
                if binding['shared']:
                    self._instances[abstract] = instance
        finally:
            self._build_stack.pop()

        return instance

    def _build_concrete(self, concrete: Any, abstract: Abstract, parameters: Dict[str, Any]) -> Any:
        if concrete is abstract:
            return self._build(abstract, parameters)
        if isinstance(concrete, type):
            return self._resolve_class(concrete, parameters)
        return concrete(self)

    def _build(self, abstract: Abstract, parameters: Dict[str, Any]) -> Any:
        if isinstance(abstract, type):
            return self._resolve_class(abstract, parameters)
        raise BindingResolutionException(f"Target [{abstract}] is not bound in the container")

    def _resolve_class(self, cls: type, parameters: Dict[str, Any]) -> Any:
        """Build a class, resolving its constructor parameters."""
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError):
            return cls()

        args: Dict[str, Any] = {}
        for name, param in signature.parameters.items():
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            if name in parameters:
                args[name] = parameters[name]
            elif param.annotation is ServiceContainer or param.annotation == 'ServiceContainer':
                args[name] = self
            elif self.bound(name):
                args[name] = self.make(name)
            elif param.default is not inspect.Parameter.empty:
                args[name] = param.default
            else:
                raise BindingResolutionException(
                    f"Cannot resolve parameter '{name}' for {cls.__name__}"
                )

        return cls(**args)

    def _name(self, abstract: Abstract) -> str:
        return abstract.__name__ if isinstance(abstract, type) else str(abstract)


class ServiceProvider(ABC):
    """Base service provider."""

    def __init__(self, container: ServiceContainer) -> None:
        self.container = container

    @abstractmethod
    def register(self) -> None:
        """Register services in the container."""
        pass

    def boot(self) -> None:
        """Boot the service provider."""
        pass
