from __future__ import annotations


class RepositoryException(Exception):
    """Raised when repository configuration or runtime usage is invalid."""
    pass


class ModelNotFoundException(RepositoryException):
    """Exception raised when a model is not found."""
    pass
