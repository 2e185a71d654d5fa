"""
Database session dependency for the API.

Re-exports from core.db. Initialization happens in the application startup
hook (see main.py), never at import time.
"""

from core.db import Base, db, get_db

__all__ = ["Base", "db", "get_db"]
