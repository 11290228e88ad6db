"""Route modules for the Notekeeper API."""
from . import health, notes, users

__all__ = ["health", "notes", "users"]
