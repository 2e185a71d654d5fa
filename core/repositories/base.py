"""Base repository class shared by the model repositories."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from core.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing lookup, delete and count by model.

    Usage:
        class UserRepository(BaseRepository[User]):
            model = User

        repo = UserRepository(session)
        user = repo.get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: int) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def delete(self, id: int) -> bool:
        """Delete a record by ID. Returns False when nothing matched."""
        instance = self.get_by_id(id)
        if instance:
            self.session.delete(instance)
            self.session.flush()
            return True
        return False

    def count(self, **filters: Any) -> int:
        """Get count of records, optionally filtered."""
        query = self._apply_filters(
            self.session.query(func.count(self.model.id)),  # type: ignore[attr-defined]
            filters,
        )
        return query.scalar() or 0

    def _apply_filters(self, query: Query, filters: dict[str, Any]) -> Query:
        for key, value in filters.items():
            if not hasattr(self.model, key):
                raise ValueError(f"Unknown filter key for {self.model.__name__}: {key}")
            query = query.filter(getattr(self.model, key) == value)
        return query
