"""
Profile management endpoints.

Public:
- GET /profile                  list every profile
- GET /profile/user/{user_id}   one profile by owner

Authenticated:
- GET /profile/me
- POST /profile                 create or update the caller's profile
- DELETE /profile               delete the caller's profile and account
- PUT /profile/experience, DELETE /profile/experience/{exp_id}
- PUT /profile/education, DELETE /profile/education/{edu_id}

Not-found conditions answer 400, matching what existing clients expect.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.logging import get_logger
from core.repositories import ProfileRepository, UserRepository

from ..auth.dependencies import AuthenticatedUser, get_current_user
from ..database import get_db
from ..dependencies import get_profile_repository, get_user_repository
from ..models import Profile
from ..schemas import (
    EducationCreateRequest,
    ExperienceCreateRequest,
    MessageResponse,
    ProfileResponse,
    ProfileUpsertRequest,
)

logger = get_logger("profile")

router = APIRouter(prefix="/profile", tags=["profile"])

NO_PROFILE = "There is no profile for this user"
PROFILE_NOT_FOUND = "Profile not found"

# Largest value an INTEGER primary key holds on every supported store
MAX_ID = 2**31 - 1


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _profile_to_response(profile: Profile) -> ProfileResponse:
    """Convert Profile (with owner and entries loaded) to response."""
    return ProfileResponse.model_validate(profile)


def _require_own_profile(repo: ProfileRepository, user_id: int) -> Profile:
    """Load and lock the caller's profile for modification, or 400."""
    profile = repo.get_by_user_id(user_id, for_update=True)
    if profile is None:
        raise _bad_request(NO_PROFILE)
    return profile


def _parse_id(raw: str) -> int | None:
    """Path id as an int, or None when it is not a storable key."""
    try:
        value = int(raw)
    except ValueError:
        return None
    if not 1 <= value <= MAX_ID:
        return None
    return value


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    repo: ProfileRepository = Depends(get_profile_repository),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Get current user's profile."""
    profile = repo.get_by_user_id(current_user.id)
    if profile is None:
        raise _bad_request(NO_PROFILE)
    return _profile_to_response(profile)


@router.post("", response_model=ProfileResponse)
def upsert_profile(
    payload: ProfileUpsertRequest,
    db: Session = Depends(get_db),
    repo: ProfileRepository = Depends(get_profile_repository),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """
    Create or update the caller's profile.

    Only supplied fields overwrite stored values. ``skills`` arrives as a
    comma-separated string and is stored as a list; social links are nested
    under ``social``.
    """
    profile, created = repo.upsert(
        current_user.id,
        fields=payload.profile_fields(),
        social=payload.social_links(),
    )
    db.commit()

    logger.info(
        "profile_created" if created else "profile_updated",
        user_id=current_user.id,
        profile_id=profile.id,
    )
    return _profile_to_response(profile)


@router.get("", response_model=list[ProfileResponse])
def list_profiles(repo: ProfileRepository = Depends(get_profile_repository)):
    """Get all profiles with owner name and avatar."""
    return [_profile_to_response(profile) for profile in repo.list_with_users()]


@router.get("/user/{user_id}", response_model=ProfileResponse)
def get_profile_by_user(
    user_id: str,
    repo: ProfileRepository = Depends(get_profile_repository),
):
    """Get profile by owner's user ID. Malformed IDs are reported as not found."""
    parsed_id = _parse_id(user_id)
    if parsed_id is None:
        raise _bad_request(PROFILE_NOT_FOUND)

    profile = repo.get_by_user_id(parsed_id)
    if profile is None:
        raise _bad_request(PROFILE_NOT_FOUND)
    return _profile_to_response(profile)


@router.delete("", response_model=MessageResponse)
def delete_account(
    db: Session = Depends(get_db),
    profile_repo: ProfileRepository = Depends(get_profile_repository),
    user_repo: UserRepository = Depends(get_user_repository),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """
    Delete the caller's profile, then their user account.

    Repeating the call after deletion is a no-op. Other content the user
    owns is left in place.
    """
    profile_deleted = profile_repo.delete_by_user_id(current_user.id)
    user_deleted = user_repo.delete_by_id(current_user.id)
    db.commit()

    logger.info(
        "account_deleted",
        user_id=current_user.id,
        profile_deleted=profile_deleted,
        user_deleted=user_deleted,
    )
    return MessageResponse(msg="User data deleted")


# =============================================================================
# Experience
# =============================================================================


@router.put("/experience", response_model=ProfileResponse)
def add_experience(
    payload: ExperienceCreateRequest,
    db: Session = Depends(get_db),
    repo: ProfileRepository = Depends(get_profile_repository),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Add an experience entry at the head of the caller's experience list."""
    profile = _require_own_profile(repo, current_user.id)
    entry = repo.add_experience(profile, **payload.entry_fields())
    db.commit()

    logger.info("experience_added", user_id=current_user.id, experience_id=entry.id)
    return _profile_to_response(profile)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
def delete_experience(
    exp_id: str,
    db: Session = Depends(get_db),
    repo: ProfileRepository = Depends(get_profile_repository),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Remove an experience entry from the caller's profile by its ID."""
    profile = _require_own_profile(repo, current_user.id)
    entry_id = _parse_id(exp_id)
    if entry_id is None or not repo.remove_experience(profile, entry_id):
        raise _bad_request("Experience does not exist")
    db.commit()

    logger.info("experience_removed", user_id=current_user.id, experience_id=entry_id)
    return _profile_to_response(profile)


# =============================================================================
# Education
# =============================================================================


@router.put("/education", response_model=ProfileResponse)
def add_education(
    payload: EducationCreateRequest,
    db: Session = Depends(get_db),
    repo: ProfileRepository = Depends(get_profile_repository),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Add an education entry at the head of the caller's education list."""
    profile = _require_own_profile(repo, current_user.id)
    entry = repo.add_education(profile, **payload.entry_fields())
    db.commit()

    logger.info("education_added", user_id=current_user.id, education_id=entry.id)
    return _profile_to_response(profile)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
def delete_education(
    edu_id: str,
    db: Session = Depends(get_db),
    repo: ProfileRepository = Depends(get_profile_repository),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Remove an education entry from the caller's profile by its ID."""
    profile = _require_own_profile(repo, current_user.id)
    entry_id = _parse_id(edu_id)
    if entry_id is None or not repo.remove_education(profile, entry_id):
        raise _bad_request("Education does not exist")
    db.commit()

    logger.info("education_removed", user_id=current_user.id, education_id=entry_id)
    return _profile_to_response(profile)
