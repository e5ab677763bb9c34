from __future__ import annotations

from typing import Any, Callable, Generator, Optional, Type, TypeVar

from fastapi import Depends
from sqlalchemy.orm import Session

from repositories.Exceptions import RepositoryException
from repositories.Support.ServiceContainer import ServiceContainer

R = TypeVar('R')


def repository(
    repository_class: Type[R],
    app: Optional[ServiceContainer] = None,
    session_dependency: Optional[Callable[..., Generator[Session, None, None]]] = None
) -> Callable[..., R]:
    """
    Build a FastAPI dependency providing one repository per request.

    The repository is resolved from a scope of ``app`` (or the globally
    registered container) whose ``db`` binding is the request's session, so
    criteria and scopes never leak between requests.

    Usage:
        @router.get('/users')
        def index(users: UserRepository = Depends(repository(UserRepository))):
            return users.all()
    """
    if session_dependency is None:
        from config.database import get_database
        session_dependency = get_database

    def resolve_repository(db: Session = Depends(session_dependency)) -> Any:
        container = app if app is not None else ServiceContainer.get_instance()
        if container is None:
            raise RepositoryException("Repository dependencies require an initialized application container")

        scope = container.create_scope()
        scope.instance('db', db)
        return scope.make(repository_class)

    return resolve_repository
