"""Developer profile repository."""

from datetime import datetime, timezone
from typing import Any, TypeVar

from sqlalchemy.orm import joinedload, selectinload

from core.models import SOCIAL_NETWORKS, Education, Experience, Profile

from .base import BaseRepository

E = TypeVar("E", Experience, Education)


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile operations and its experience/education entries."""

    model = Profile

    def _query(self):
        return self.session.query(Profile).options(
            joinedload(Profile.user),
            selectinload(Profile.experience),
            selectinload(Profile.education),
        )

    def get_by_user_id(self, user_id: int, for_update: bool = False) -> Profile | None:
        """
        Get profile by owner's user ID, with the owner and entries loaded.

        ``for_update`` locks the profile row until the transaction ends
        (ignored by SQLite) so read-modify-write sequences don't interleave.
        """
        query = self._query().filter(Profile.user_id == user_id)
        if for_update:
            query = query.with_for_update(of=Profile)
        return query.first()

    def list_with_users(self) -> list[Profile]:
        """All profiles joined with their owners, oldest first."""
        return self._query().order_by(Profile.id).all()

    def upsert(
        self,
        user_id: int,
        fields: dict[str, Any],
        social: dict[str, str] | None = None,
    ) -> tuple[Profile, bool]:
        """
        Create or update a user's profile.

        Only the supplied ``fields`` overwrite existing values. ``social`` replaces
        the stored mapping, so a link left out of the request is removed.

        Returns:
            (profile, created)
        """
        for key in fields:
            if key in ("id", "user_id") or key not in Profile.__table__.columns:
                raise ValueError(f"Unknown profile field: {key}")
        unknown = set(social or {}) - set(SOCIAL_NETWORKS)
        if unknown:
            raise ValueError(f"Unknown social networks: {sorted(unknown)}")

        profile = self.get_by_user_id(user_id, for_update=True)
        created = profile is None

        if created:
            profile = Profile(user_id=user_id, skills=[], social={})
            self.session.add(profile)

        for key, value in fields.items():
            setattr(profile, key, value)

        profile.social = dict(social or {})

        if not created:
            profile.updated_at = datetime.now(timezone.utc)

        self.session.flush()
        return profile, created

    def delete_by_user_id(self, user_id: int) -> bool:
        """Delete the profile owned by ``user_id``. Returns False if there was none."""
        profile = self.session.query(Profile).filter(Profile.user_id == user_id).first()
        if profile is None:
            return False
        self.session.delete(profile)
        self.session.flush()
        return True

    # -------------------------------------------------------------------------
    # Experience / education entries
    # -------------------------------------------------------------------------

    def add_experience(self, profile: Profile, **fields: Any) -> Experience:
        """Prepend a new experience entry to the profile."""
        return self._prepend(profile, profile.experience, Experience(**fields))

    def remove_experience(self, profile: Profile, entry_id: int) -> bool:
        """Remove an experience entry by ID. Returns False if the ID isn't on this profile."""
        return self._remove(profile, profile.experience, entry_id)

    def add_education(self, profile: Profile, **fields: Any) -> Education:
        """Prepend a new education entry to the profile."""
        return self._prepend(profile, profile.education, Education(**fields))

    def remove_education(self, profile: Profile, entry_id: int) -> bool:
        """Remove an education entry by ID. Returns False if the ID isn't on this profile."""
        return self._remove(profile, profile.education, entry_id)

    def _prepend(self, profile: Profile, entries: list[E], entry: E) -> E:
        # ordering_list renumbers ``position`` on insert
        entries.insert(0, entry)
        profile.updated_at = datetime.now(timezone.utc)
        self.session.flush()
        return entry

    def _remove(self, profile: Profile, entries: list[E], entry_id: int) -> bool:
        entry = next((item for item in entries if item.id == entry_id), None)
        if entry is None:
            return False
        entries.remove(entry)
        profile.updated_at = datetime.now(timezone.utc)
        self.session.flush()
        return True
