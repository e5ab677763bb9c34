from __future__ import annotations

import os
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

__all__ = [
    "engine", "SessionLocal", "get_database", "DATABASE_URL", "get_engine_config"
]

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./storage/database.db")


def get_engine_config() -> Dict[str, Any]:
    """Get engine configuration based on database type."""
    config: Dict[str, Any] = {}

    if DATABASE_URL.startswith("sqlite"):
        config["connect_args"] = {"check_same_thread": False}
    else:
        config.update({
            "pool_size": int(os.getenv('DB_POOL_SIZE', '5')),
            "max_overflow": int(os.getenv('DB_MAX_OVERFLOW', '10')),
            "pool_timeout": int(os.getenv('DB_POOL_TIMEOUT', '30')),
            "pool_recycle": int(os.getenv('DB_POOL_RECYCLE', '3600')),
            "pool_pre_ping": True,
        })

    config["echo"] = os.getenv('DB_ECHO', '').lower() == 'true'

    return config


engine: Engine = create_engine(DATABASE_URL, **get_engine_config())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_database() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

