from __future__ import annotations

from typing import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from repositories.Providers.RepositoryServiceProvider import RepositoryServiceProvider
from repositories.Support.ServiceContainer import ServiceContainer
from tests.support.models import Base, User
from tests.support.repositories import UserRepository


@pytest.fixture
def engine() -> Iterator[Engine]:
    """In-memory SQLite engine shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine: Engine) -> Iterator[Session]:
    """Get database session."""
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def app(db: Session) -> ServiceContainer:
    """Container with the test session registered."""
    container = ServiceContainer()
    RepositoryServiceProvider(container, session_factory=lambda: db).register()
    return container


@pytest.fixture
def seeded(db: Session) -> None:
    """Seed baseline users."""
    db.add_all([
        User(id=1, name='Alice', active=True),
        User(id=2, name='Bob', active=False),
        User(id=3, name='Carol', active=True),
    ])
    db.commit()


@pytest.fixture
def repository(app: ServiceContainer) -> UserRepository:
    return app.make(UserRepository)


@pytest.fixture
def global_container() -> Iterator[None]:
    """Restore the globally registered container after the test."""
    original = ServiceContainer.get_instance()
    try:
        yield
    finally:
        ServiceContainer.set_instance(original)
