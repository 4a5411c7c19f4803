"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.domain.models import REQUEST_KEY_ALIASES, RegistrationRequest


def _accepts(name: str) -> AliasChoices:
    return AliasChoices(*REQUEST_KEY_ALIASES[name])


class RegisterRequest(BaseModel):
    """
    Request model for user registration.

    Every field is optional here: presence is judged by the domain so that
    missing fields produce the registration messages rather than a 422.
    Browser clients may send camelCase keys (`displayName`, `confirmPass`, ...);
    the snake_case key wins when both are sent.
    """

    email: str | None = Field(default=None, validation_alias=_accepts("email"))
    display_name: str | None = Field(
        default=None, validation_alias=_accepts("display_name"), description="Public user name"
    )
    password: str | None = Field(default=None, validation_alias=_accepts("password"))
    confirm_password: str | None = Field(
        default=None, validation_alias=_accepts("confirm_password")
    )
    organisation_name: str | None = Field(
        default=None,
        validation_alias=_accepts("organisation_name"),
        description="Name of the new organisation",
    )

    def to_domain(self) -> RegistrationRequest:
        return RegistrationRequest(
            email=self.email,
            display_name=self.display_name,
            password=self.password,
            confirm_password=self.confirm_password,
            organisation_name=self.organisation_name,
        )


class UserView(BaseModel):
    """Public view of a registered user. Never exposes password or salt."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    display_name: str
    sign_in_count: int
    last_login: datetime | None
    organisations: list[UUID]
    teams: list[UUID]


class OrganisationView(BaseModel):
    """Public view of an organisation."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    owners: UUID | None


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    success: bool
    message: str
    user: UserView
    organisation: OrganisationView


class DisplayNameResponse(BaseModel):
    """Response model for display name availability checks."""

    name: str
    exists: bool


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
