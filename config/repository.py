from __future__ import annotations

import os


class RepositorySettings:
    # Pagination
    DEFAULT_PER_PAGE: int = int(os.getenv("REPOSITORY_PER_PAGE", "15"))
    MAX_PER_PAGE: int = int(os.getenv("REPOSITORY_MAX_PER_PAGE", "100"))

    # Chunking
    CHUNK_SIZE: int = int(os.getenv("REPOSITORY_CHUNK_SIZE", "1000"))

    # Logging
    LOG_LEVEL: str = os.getenv("REPOSITORY_LOG_LEVEL", "WARNING").upper()
    LOG_FORMAT: str = os.getenv("REPOSITORY_LOG_FORMAT", "laravel")


repository_settings = RepositorySettings()
