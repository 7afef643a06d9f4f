"""Git helpers."""

from .clone import CloneError, Cloner

__all__ = ["CloneError", "Cloner"]
