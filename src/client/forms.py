"""Login, registration and profile form models."""

import logging
import re
from dataclasses import dataclass, field
from typing import Any

import httpx

from src.client.api import ApiError
from src.client.routes import DASHBOARD, LOGIN
from src.client.session import SessionStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
MIN_PASSWORD_LENGTH = 6


def _check_email(email: str) -> str | None:
    if not email:
        return "Email is required"
    if not EMAIL_PATTERN.match(email):
        return "Invalid email address"
    return None


def _check_password(password: str) -> str | None:
    if not password:
        return "Password is required"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None


@dataclass
class LoginForm:
    email: str = ""
    password: str = ""
    errors: dict[str, str] = field(default_factory=dict)
    error: str = ""
    submitting: bool = False

    def validate(self) -> bool:
        self.errors = {}
        if message := _check_email(self.email):
            self.errors["email"] = message
        if message := _check_password(self.password):
            self.errors["password"] = message
        return not self.errors

    async def submit(self, store: SessionStore) -> bool:
        """Validate and sign in. Returns True on success."""
        self.error = ""
        if not self.validate():
            return False

        self.submitting = True
        try:
            await store.login(self.email, self.password)
        except ApiError as e:
            self.error = e.message or "Invalid email or password"
            return False
        except httpx.HTTPError:
            self.error = "Invalid email or password"
            return False
        finally:
            self.submitting = False
        return True


@dataclass
class RegisterForm:
    email: str = ""
    password: str = ""
    name: str = ""
    errors: dict[str, str] = field(default_factory=dict)
    error: str = ""
    submitting: bool = False

    def validate(self) -> bool:
        self.errors = {}
        if not self.name:
            self.errors["name"] = "Name is required"
        if message := _check_email(self.email):
            self.errors["email"] = message
        if message := _check_password(self.password):
            self.errors["password"] = message
        return not self.errors

    async def submit(self, store: SessionStore) -> bool:
        """Validate and create the account. Returns True on success."""
        self.error = ""
        if not self.validate():
            return False

        self.submitting = True
        try:
            await store.register(self.email, self.password, self.name)
        except ApiError as e:
            logger.error(f"Registration error: {e}")
            self.error = e.message or "Registration failed. Please try again."
            return False
        except httpx.HTTPError as e:
            logger.error(f"Registration error: {e}")
            self.error = "Registration failed. Please try again."
            return False
        finally:
            self.submitting = False
        return True


@dataclass
class ProfileForm:
    """Edit form for the signed-in user's own account."""

    username: str = ""
    email: str = ""
    name: str = ""
    errors: dict[str, str] = field(default_factory=dict)
    error: str = ""
    submitting: bool = False
    deleting: bool = False

    @classmethod
    def from_user(cls, user: dict[str, Any] | None) -> "ProfileForm":
        user = user or {}
        return cls(
            username=user.get("username") or "",
            email=user.get("email") or "",
            name=user.get("name") or "",
        )

    def validate(self) -> bool:
        self.errors = {}
        if not self.name:
            self.errors["name"] = "Name is required"
        if not self.username:
            self.errors["username"] = "Username is required"
        elif not USERNAME_PATTERN.match(self.username):
            self.errors["username"] = "Username can only contain letters, numbers, underscores, and dashes"
        if message := _check_email(self.email):
            self.errors["email"] = message
        return not self.errors

    async def submit(self, store: SessionStore) -> bool:
        """Save the edits, refresh the session and return to the dashboard."""
        self.error = ""
        if not self.validate():
            return False
        user = store.user
        if not user:
            return False

        self.submitting = True
        try:
            await store.api.update_user(
                user["id"], username=self.username, email=self.email, name=self.name
            )
            await store.check_auth()
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Profile update error: {e}")
            self.error = "Failed to update profile. Please try again."
            return False
        finally:
            self.submitting = False
        store.navigate(DASHBOARD)
        return True

    async def delete_account(self, store: SessionStore) -> bool:
        """Delete the signed-in account and go to the login page.

        Confirmation is the caller's job.
        """
        user = store.user
        if not user:
            return False

        self.error = ""
        self.deleting = True
        try:
            await store.api.delete_user(user["id"])
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Account deletion error: {e}")
            self.error = "Failed to delete account. Please try again."
            self.deleting = False
            return False
        store.api.session.clear()
        await store.check_auth()
        store.navigate(LOGIN)
        return True
