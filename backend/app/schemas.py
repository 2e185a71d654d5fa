"""
Pydantic schemas for request and response validation.
"""

from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic_core import PydanticCustomError

from core.models import SOCIAL_NETWORKS


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def required(message: str) -> BeforeValidator:
    """
    Reject absent, null or whitespace-only values with ``message``.

    Fields using this need ``validate_default=True`` so that omission is
    reported with the same message rather than pydantic's "Field required".
    """

    def check(value: Any) -> Any:
        if _is_blank(value):
            raise PydanticCustomError("required", message)
        return value

    return BeforeValidator(check)


def split_skills(value: Any) -> list[str]:
    """
    Normalize skills input to a list of trimmed names.

    Accepts the comma-separated form ("python, react ,sql") or a JSON list.
    Empty items are dropped.
    """
    if _is_blank(value):
        raise PydanticCustomError("required", "Skills is required")
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        raise PydanticCustomError("skills_type", "Skills must be a comma separated string")
    skills = [item.strip() for item in items if item.strip()]
    if not skills:
        raise PydanticCustomError("required", "Skills is required")
    return skills


def _blank_to_none(value: Any) -> Any:
    return None if _is_blank(value) else value


OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]
OptionalFlag = Annotated[bool, BeforeValidator(lambda v: False if v is None else v)]


def _required_field(**kwargs: Any) -> Any:
    """Default of None, still run through validators so omission is reported."""
    return Field(default=None, validate_default=True, **kwargs)


# =============================================================================
# Requests
# =============================================================================


class ProfileUpsertRequest(BaseModel):
    """Body of POST /profile. Social links arrive flat and are nested on save."""

    company: OptionalText = None
    website: OptionalText = None
    location: OptionalText = None
    bio: OptionalText = None
    status: Annotated[str, required("Status is required")] = _required_field()
    githubusername: OptionalText = None
    skills: Annotated[list[str], BeforeValidator(split_skills)] = _required_field()
    youtube: OptionalText = None
    twitter: OptionalText = None
    facebook: OptionalText = None
    linkedin: OptionalText = None
    instagram: OptionalText = None

    def profile_fields(self) -> dict[str, Any]:
        """Supplied top-level profile fields, social links excluded."""
        return self.model_dump(exclude_none=True, exclude=set(SOCIAL_NETWORKS))

    def social_links(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True, include=set(SOCIAL_NETWORKS))


class _EntryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_date: Annotated[date, required("From date is required")] = _required_field(alias="from")
    to_date: OptionalDate = Field(default=None, alias="to")
    current: OptionalFlag = False
    description: OptionalText = None

    @model_validator(mode="before")
    @classmethod
    def _report_missing_from(cls, data: Any) -> Any:
        # An omitted "from" would otherwise be reported under "from_date"
        if isinstance(data, dict) and "from" not in data and "from_date" not in data:
            data = {**data, "from": None}
        return data

    def entry_fields(self) -> dict[str, Any]:
        """Column values for the new entry (python field names, not aliases)."""
        return self.model_dump()


class ExperienceCreateRequest(_EntryRequest):
    """Body of PUT /profile/experience."""

    title: Annotated[str, required("Title is required")] = _required_field()
    company: Annotated[str, required("Company is required")] = _required_field()
    location: OptionalText = None


class EducationCreateRequest(_EntryRequest):
    """Body of PUT /profile/education."""

    school: Annotated[str, required("School is required")] = _required_field()
    degree: Annotated[str, required("Degree is required")] = _required_field()
    fieldofstudy: Annotated[str, required("Field of study is required")] = _required_field()


# =============================================================================
# Responses
# =============================================================================


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    avatar: str | None = None


class SocialLinks(BaseModel):
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class _EntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    from_date: date = Field(alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool = False
    description: str | None = None


class ExperienceResponse(_EntryResponse):
    title: str
    company: str
    location: str | None = None


class EducationResponse(_EntryResponse):
    school: str
    degree: str
    fieldofstudy: str


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user: UserSummary
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str
    githubusername: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: SocialLinks = Field(default_factory=SocialLinks)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MessageResponse(BaseModel):
    msg: str

