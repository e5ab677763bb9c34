from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import InstanceState, Query, Session


def is_model(value: Any) -> bool:
    """Determine whether the value is an instance of a mapped SQLAlchemy model."""
    if value is None or isinstance(value, type):
        return False
    return isinstance(sa_inspect(value, raiseerr=False), InstanceState)


@dataclass(frozen=True)
class Unbound:
    """A fresh model instance that has not been turned into a query yet."""

    model: Any


@dataclass(frozen=True)
class Bound:
    """An in-progress query for the model."""

    model: Any
    query: Query[Any]


ModelHandle = Union[Unbound, Bound]


def ensure_bound(handle: ModelHandle, session: Session) -> Bound:
    """Upgrade an unbound handle to a query on the given session."""
    if isinstance(handle, Bound):
        return handle
    return Bound(handle.model, session.query(type(handle.model)))


def coerce_handle(value: Any, current: ModelHandle) -> Optional[ModelHandle]:
    """
    Turn the result of a criterion or scope back into a handle.

    ``None`` keeps the current handle, a query binds it, a model instance
    unbinds it. Anything else is invalid and yields ``None``.
    """
    if value is None:
        return current
    if isinstance(value, Query):
        return Bound(current.model, value)
    if is_model(value):
        return Unbound(value)
    return None
