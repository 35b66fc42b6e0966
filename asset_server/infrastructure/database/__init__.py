"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .session import Database, init_db

__all__ = ["Base", "Database", "init_db"]
