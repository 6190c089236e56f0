"""User schemas."""

import re

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    """Check the simple local@domain.tld shape."""
    return bool(EMAIL_PATTERN.match(email))


class UserUpdate(BaseModel):
    """Partial update of a user.

    Unknown keys are dropped. Empty strings count as absent.
    """

    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    name: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)

    def present_fields(self) -> dict[str, str]:
        """Fields to apply, in merge order."""
        values = {
            "username": self.username,
            "email": self.email,
            "name": self.name,
            "password": self.password,
        }
        return {key: value for key, value in values.items() if value}


class UserResponse(BaseModel):
    """Sanitized user information."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    name: str
