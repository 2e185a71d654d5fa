"""
Repository pattern implementations for data access.

Usage:
    from core.repositories import ProfileRepository
    from core.db import db

    with db.session() as session:
        repo = ProfileRepository(session)
        profile = repo.get_by_user_id(user_id)
"""

from .base import BaseRepository
from .profile_repository import ProfileRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "UserRepository",
]
