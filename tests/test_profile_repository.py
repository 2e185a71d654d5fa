"""
Tests for ProfileRepository: upsert semantics and entry ordering.
"""

import pytest

from core.models import Education, Experience, Profile
from core.repositories import ProfileRepository
from tests.factories import (
    create_profile,
    create_user,
    education_fields,
    experience_fields,
)


class TestUpsert:
    def test_creates_profile_when_missing(self, test_session):
        user = create_user(test_session)
        repo = ProfileRepository(test_session)

        profile, created = repo.upsert(
            user.id, fields={"status": "Developer", "skills": ["python"]}
        )

        assert created is True
        assert profile.user_id == user.id
        assert profile.social == {}
        assert repo.count(user_id=user.id) == 1

    def test_updates_in_place_without_duplicating(self, test_session):
        user = create_user(test_session)
        repo = ProfileRepository(test_session)
        first, _ = repo.upsert(user.id, fields={"status": "Developer", "skills": ["python"]})

        second, created = repo.upsert(user.id, fields={"status": "Manager", "skills": ["go"]})

        assert created is False
        assert second.id == first.id
        assert second.status == "Manager"
        assert repo.count(user_id=user.id) == 1

    def test_only_supplied_fields_overwrite(self, test_session):
        user = create_user(test_session)
        repo = ProfileRepository(test_session)
        repo.upsert(
            user.id,
            fields={"status": "Developer", "skills": ["python"], "company": "Acme", "bio": "Hi"},
        )

        profile, _ = repo.upsert(user.id, fields={"status": "Lead", "skills": ["python"]})

        assert profile.company == "Acme"
        assert profile.bio == "Hi"
        assert profile.status == "Lead"

    def test_social_links_replace_stored_mapping(self, test_session):
        user = create_user(test_session)
        repo = ProfileRepository(test_session)
        repo.upsert(
            user.id,
            fields={"status": "Developer", "skills": ["python"]},
            social={"twitter": "https://twitter.com/a"},
        )

        profile, _ = repo.upsert(
            user.id,
            fields={"status": "Developer", "skills": ["python"]},
            social={"youtube": "https://youtube.com/a"},
        )
        test_session.commit()
        test_session.expire_all()

        stored = repo.get_by_user_id(user.id)
        assert stored.social == {"youtube": "https://youtube.com/a"}

    def test_omitted_social_clears_links(self, test_session):
        user = create_user(test_session)
        repo = ProfileRepository(test_session)
        repo.upsert(
            user.id,
            fields={"status": "Developer", "skills": ["python"]},
            social={"twitter": "https://twitter.com/a"},
        )

        profile, _ = repo.upsert(user.id, fields={"status": "Developer", "skills": ["python"]})

        assert profile.social == {}

    def test_rejects_unknown_fields(self, test_session):
        user = create_user(test_session)
        repo = ProfileRepository(test_session)

        with pytest.raises(ValueError, match="Unknown profile field"):
            repo.upsert(user.id, fields={"status": "x", "skills": ["a"], "karma": 3})

        with pytest.raises(ValueError, match="Unknown social networks"):
            repo.upsert(user.id, fields={"status": "x", "skills": ["a"]}, social={"myspace": "x"})


class TestLookup:
    def test_get_by_user_id_returns_none_without_profile(self, test_session):
        user = create_user(test_session)

        assert ProfileRepository(test_session).get_by_user_id(user.id) is None

    def test_list_with_users_includes_owner(self, test_session):
        alice = create_user(test_session, name="Alice", email="alice@example.com")
        bob = create_user(test_session, name="Bob", email="bob@example.com")
        create_profile(test_session, alice)
        create_profile(test_session, bob)

        profiles = ProfileRepository(test_session).list_with_users()

        assert [p.user.name for p in profiles] == ["Alice", "Bob"]

    def test_delete_by_user_id(self, test_session):
        user = create_user(test_session)
        create_profile(test_session, user)
        repo = ProfileRepository(test_session)

        assert repo.delete_by_user_id(user.id) is True
        assert repo.delete_by_user_id(user.id) is False
        assert repo.get_by_user_id(user.id) is None


class TestEntries:
    def test_new_experience_goes_first_and_keeps_prior_order(self, test_session):
        user = create_user(test_session)
        profile = create_profile(test_session, user)
        repo = ProfileRepository(test_session)

        for title in ("First", "Second", "Third"):
            repo.add_experience(profile, **experience_fields(title))

        assert [e.title for e in profile.experience] == ["Third", "Second", "First"]
        assert [e.position for e in profile.experience] == [0, 1, 2]

    def test_entry_order_survives_reload(self, test_session):
        user = create_user(test_session)
        profile = create_profile(test_session, user)
        repo = ProfileRepository(test_session)
        repo.add_education(profile, **education_fields("Old School", 2005))
        repo.add_education(profile, **education_fields("New School", 2010))
        test_session.commit()
        test_session.expire_all()

        reloaded = repo.get_by_user_id(user.id)

        assert [e.school for e in reloaded.education] == ["New School", "Old School"]

    def test_remove_experience_by_id(self, test_session):
        user = create_user(test_session)
        profile = create_profile(test_session, user)
        repo = ProfileRepository(test_session)
        keep = repo.add_experience(profile, **experience_fields("Keep"))
        drop = repo.add_experience(profile, **experience_fields("Drop"))

        assert repo.remove_experience(profile, drop.id) is True

        assert [e.id for e in profile.experience] == [keep.id]
        assert test_session.get(Experience, drop.id) is None

    def test_remove_unknown_entry_leaves_list_unchanged(self, test_session):
        user = create_user(test_session)
        profile = create_profile(test_session, user)
        repo = ProfileRepository(test_session)
        entry = repo.add_education(profile, **education_fields("Only"))

        assert repo.remove_education(profile, entry.id + 100) is False
        assert [e.id for e in profile.education] == [entry.id]

    def test_cannot_remove_another_profiles_entry(self, test_session):
        alice = create_user(test_session, email="alice@example.com")
        bob = create_user(test_session, email="bob@example.com")
        alice_profile = create_profile(test_session, alice)
        bob_profile = create_profile(test_session, bob)
        repo = ProfileRepository(test_session)
        bobs_entry = repo.add_experience(bob_profile, **experience_fields("Bob's job"))

        assert repo.remove_experience(alice_profile, bobs_entry.id) is False
        assert len(bob_profile.experience) == 1

    def test_deleting_profile_deletes_entries(self, test_session):
        user = create_user(test_session)
        profile = create_profile(test_session, user)
        repo = ProfileRepository(test_session)
        repo.add_experience(profile, **experience_fields("Job"))
        repo.add_education(profile, **education_fields("School"))

        repo.delete_by_user_id(user.id)

        assert test_session.query(Experience).count() == 0
        assert test_session.query(Education).count() == 0
        assert test_session.query(Profile).count() == 0
