"""SQLAlchemy models exposed for metadata creation and imports."""
from .note import Note
from .user import User

__all__ = ["User", "Note"]
