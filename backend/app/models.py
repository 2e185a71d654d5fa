"""
SQLAlchemy ORM models used by the API.

Re-exports from core.models:
    from core.models import User, Profile
"""

from core.models import Base, Education, Experience, Profile, User

__all__ = [
    "Base",
    "User",
    "Profile",
    "Experience",
    "Education",
]
