from __future__ import annotations

from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session

from repositories.Support.ServiceContainer import Abstract, ServiceContainer, ServiceProvider


class RepositoryServiceProvider(ServiceProvider):
    """
    Repository service provider.

    Registers the database session repositories resolve as ``db`` and binds
    repository abstracts to their implementations.
    """

    def __init__(
        self,
        container: ServiceContainer,
        session_factory: Optional[Callable[[], Session]] = None,
        repositories: Optional[Dict[Abstract, type]] = None,
        make_global: bool = False
    ) -> None:
        super().__init__(container)
        self.session_factory = session_factory
        self.repositories = repositories or {}
        self.make_global = make_global

    def register(self) -> None:
        """Register the session and repository bindings."""
        session_factory = self.session_factory
        if session_factory is None:
            from config.database import SessionLocal
            session_factory = SessionLocal

        self.container.singleton('db', lambda container: session_factory())

        for abstract, concrete in self.repositories.items():
            self.container.bind(abstract, concrete)

    def boot(self) -> None:
        """Expose the container for static-style repository calls when requested."""
        if self.make_global:
            ServiceContainer.set_instance(self.container)
