"""Pydantic schemas for user and authentication API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    """Schema for user registration."""

    email: EmailStr = Field(description="Valid email address")
    password: str = Field(
        min_length=8,
        max_length=100,
        description="Password (8-100 characters)",
    )
    name: str = Field(
        min_length=1,
        max_length=100,
        description="Display name (1-100 characters)",
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Store emails lowercase so uniqueness is case-insensitive."""
        return v.lower()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank names."""
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v


class UserLogin(BaseModel):
    """Schema for user login request."""

    email: str = Field(min_length=1, description="Email address")
    password: str = Field(min_length=1, description="Password")


class UserUpdate(BaseModel):
    """Schema for updating the current user's profile."""

    name: str = Field(min_length=1, max_length=100, description="New display name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v


class UserPublic(BaseModel):
    """User data safe to hand outside the repository (excludes password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="User ID")
    email: str = Field(description="Email address")
    name: str = Field(description="Display name")
    created_at: datetime = Field(description="When the user was created")
    updated_at: datetime = Field(description="When the user was last modified")


class UserCredentials(UserPublic):
    """User data including the password hash.

    Only returned by ``UserRepository.find_by_email_with_password`` for the
    local credential check. Never serialize this in a response.
    """

    hashed_password: str | None = Field(default=None, exclude=True, repr=False)


class Principal(BaseModel):
    """The authenticated identity attached to a request."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int = Field(description="User ID")
    email: str = Field(description="Email address")
    name: str = Field(description="Display name")


class AuthResponse(BaseModel):
    """Response for a successful registration or login."""

    access_token: str = Field(description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: Principal = Field(description="The authenticated user")


class AuthStatus(BaseModel):
    """Response for the authentication status endpoint."""

    is_authenticated: bool = Field(description="Whether the token is valid")
    user: Principal | None = Field(default=None, description="The authenticated user")


class MessageResponse(BaseModel):
    """Generic acknowledgement response."""

    message: str = Field(description="Human-readable message")


class TokenPayload(BaseModel):
    """Schema for decoded JWT token payload."""

    sub: str = Field(description="Subject (user ID as string)")
    email: str | None = Field(default=None, description="Email at issue time")
    name: str | None = Field(default=None, description="Name at issue time")
    exp: datetime = Field(description="Expiration timestamp")
