from .repository import repository_settings

__all__ = ["repository_settings"]
