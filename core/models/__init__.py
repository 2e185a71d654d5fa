"""
SQLAlchemy models for the profile store.

Usage:
    from core.models import User, Profile, Experience, Education
"""

from .base import Base
from .profile import SOCIAL_NETWORKS, Education, Experience, Profile
from .user import User

__all__ = [
    # Base
    "Base",
    # User
    "User",
    # Profile
    "Profile",
    "Experience",
    "Education",
    "SOCIAL_NETWORKS",
]
