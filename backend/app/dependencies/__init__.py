"""
FastAPI dependency injection module.

Repositories share the request-scoped session from ``get_db``, so a handler
taking both a repository and ``db`` commits the repository's work.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from core.repositories import ProfileRepository, UserRepository

from ..database import get_db

# =============================================================================
# Repository Dependencies
# =============================================================================


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get UserRepository instance."""
    return UserRepository(db)


def get_profile_repository(db: Session = Depends(get_db)) -> ProfileRepository:
    """Get ProfileRepository instance."""
    return ProfileRepository(db)


__all__ = [
    "get_user_repository",
    "get_profile_repository",
]
