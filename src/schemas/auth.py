"""Authentication schemas."""

from pydantic import BaseModel, Field

from src.schemas.user import UserResponse


class UserRegister(BaseModel):
    """User registration request.

    Fields are optional at the schema level so that missing values are
    reported with the handler's own message instead of a framework error.
    """

    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)
    name: str | None = Field(None, max_length=255)


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
