"""User repository."""

from core.logging import get_logger
from core.models import User

from .base import BaseRepository

logger = get_logger("repository.user")


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def delete_by_id(self, user_id: int) -> bool:
        """
        Remove a user account.

        Missing users are a no-op so account deletion can be repeated safely.
        """
        deleted = self.delete(user_id)
        if not deleted:
            logger.info("user_delete_noop", user_id=user_id)
        return deleted
