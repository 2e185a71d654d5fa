"""
Application configuration.

Re-exports the settings from core.config so routers can import them locally:
    from ..config import get_settings
"""

from core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
