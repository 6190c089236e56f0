"""Tests for client routes, navigation bar and forms."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from src.client.api import ApiError
from src.client.forms import LoginForm, ProfileForm, RegisterForm
from src.client.navigation import NavItem, nav_items
from src.client.routes import AccessClass, Navigator, is_protected, resolve
from src.client.session import SessionState

USER = {"id": 1, "username": "a", "email": "a@b.com", "name": "A"}


class TestRoutes:
    """Tests for route resolution."""

    def test_access_classes(self):
        assert resolve("/").access is AccessClass.PUBLIC
        assert resolve("/login").access is AccessClass.ANONYMOUS
        assert resolve("/register").access is AccessClass.ANONYMOUS
        assert resolve("/dashboard").access is AccessClass.AUTHENTICATED
        assert resolve("/profile").access is AccessClass.AUTHENTICATED

    def test_exact_matching(self):
        """Only the declared paths are protected."""
        assert is_protected("/profile")
        assert is_protected("/profile/")
        assert is_protected("/dashboard?tab=teams")
        assert not is_protected("/profile2")
        assert not is_protected("/profile/settings")
        assert not is_protected("/unknown")

    def test_navigator_push(self):
        navigator = Navigator("/")
        navigator.push("/login")
        navigator.push("/login")
        navigator.push("/dashboard")
        assert navigator.location == "/dashboard"
        assert navigator.history == ["/", "/login"]


class TestNavItems:
    """Tests for the navigation bar."""

    def test_loading_shows_brand_only(self):
        assert nav_items(SessionState()) == [NavItem("Coaching", href="/")]

    def test_signed_in(self):
        items = nav_items(SessionState(user=USER, loading=False))
        assert [item.label for item in items] == ["Coaching", "Teams", "Profile", "Sign Out"]
        assert items[-1].action == "logout"

    def test_signed_out(self):
        items = nav_items(SessionState(user=None, loading=False))
        assert [(item.label, item.href) for item in items] == [
            ("Coaching", "/"),
            ("Sign In", "/login"),
            ("Sign Up", "/register"),
        ]


def make_store(**overrides):
    store = MagicMock()
    store.login = AsyncMock(return_value=None)
    store.register = AsyncMock(return_value=None)
    store.check_auth = AsyncMock(return_value=None)
    store.api.update_user = AsyncMock(return_value=USER)
    store.api.delete_user = AsyncMock(return_value=None)
    store.user = USER
    for name, value in overrides.items():
        setattr(store, name, value)
    return store


class TestLoginForm:
    """Tests for the login form."""

    def test_validation_messages(self):
        form = LoginForm(email="", password="")
        assert not form.validate()
        assert form.errors == {"email": "Email is required", "password": "Password is required"}

        form = LoginForm(email="not-an-email", password="abc")
        assert not form.validate()
        assert form.errors == {
            "email": "Invalid email address",
            "password": "Password must be at least 6 characters",
        }

    @pytest.mark.asyncio
    async def test_invalid_form_is_not_submitted(self):
        store = make_store()
        form = LoginForm(email="bad", password="secret1")
        assert await form.submit(store) is False
        store.login.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_successful_submit(self):
        store = make_store()
        form = LoginForm(email="A@B.com", password="secret1")
        assert await form.submit(store) is True
        store.login.assert_awaited_once_with("A@B.com", "secret1")
        assert form.error == ""
        assert form.submitting is False

    @pytest.mark.asyncio
    async def test_server_error_is_shown(self):
        store = make_store(login=AsyncMock(side_effect=ApiError(401, "Invalid credentials")))
        form = LoginForm(email="a@b.com", password="secret1")
        assert await form.submit(store) is False
        assert form.error == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_network_error_uses_default_message(self):
        store = make_store(login=AsyncMock(side_effect=httpx.ConnectError("down")))
        form = LoginForm(email="a@b.com", password="secret1")
        assert await form.submit(store) is False
        assert form.error == "Invalid email or password"


class TestRegisterForm:
    """Tests for the registration form."""

    def test_name_required(self):
        form = RegisterForm(email="a@b.com", password="secret1", name="")
        assert not form.validate()
        assert form.errors == {"name": "Name is required"}

    @pytest.mark.asyncio
    async def test_successful_submit(self):
        store = make_store()
        form = RegisterForm(email="a@b.com", password="secret1", name="A")
        assert await form.submit(store) is True
        store.register.assert_awaited_once_with("a@b.com", "secret1", "A")

    @pytest.mark.asyncio
    async def test_server_error_is_shown(self):
        store = make_store(register=AsyncMock(side_effect=ApiError(400, "Email already registered")))
        form = RegisterForm(email="a@b.com", password="secret1", name="A")
        assert await form.submit(store) is False
        assert form.error == "Email already registered"

    @pytest.mark.asyncio
    async def test_network_error_uses_default_message(self):
        store = make_store(register=AsyncMock(side_effect=httpx.ReadTimeout("slow")))
        form = RegisterForm(email="a@b.com", password="secret1", name="A")
        assert await form.submit(store) is False
        assert form.error == "Registration failed. Please try again."


class TestProfileForm:
    """Tests for the profile edit form."""

    def test_prefilled_from_user(self):
        form = ProfileForm.from_user(USER)
        assert (form.username, form.email, form.name) == ("a", "a@b.com", "A")
        assert ProfileForm.from_user(None).username == ""

    def test_validation_messages(self):
        form = ProfileForm(username="", email="", name="")
        assert not form.validate()
        assert form.errors == {
            "name": "Name is required",
            "username": "Username is required",
            "email": "Email is required",
        }

        form = ProfileForm(username="coach carter!", email="A@B.COM", name="Coach")
        assert not form.validate()
        assert form.errors == {
            "username": "Username can only contain letters, numbers, underscores, and dashes"
        }

        form = ProfileForm(username="coach_carter-2", email="coach@example.com", name="Coach")
        assert form.validate()

    @pytest.mark.asyncio
    async def test_successful_submit(self):
        store = make_store()
        form = ProfileForm(username="coach", email="coach@example.com", name="Coach")
        assert await form.submit(store) is True
        store.api.update_user.assert_awaited_once_with(
            1, username="coach", email="coach@example.com", name="Coach"
        )
        store.check_auth.assert_awaited_once()
        store.navigate.assert_called_once_with("/dashboard")
        assert form.submitting is False

    @pytest.mark.asyncio
    async def test_invalid_form_is_not_submitted(self):
        store = make_store()
        form = ProfileForm(username="bad name", email="coach@example.com", name="Coach")
        assert await form.submit(store) is False
        store.api.update_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_failure_uses_fixed_message(self):
        store = make_store()
        store.api.update_user = AsyncMock(side_effect=ApiError(400, "Username already taken"))
        form = ProfileForm.from_user(USER)
        assert await form.submit(store) is False
        assert form.error == "Failed to update profile. Please try again."
        store.navigate.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_account(self):
        store = make_store()
        form = ProfileForm.from_user(USER)
        assert await form.delete_account(store) is True
        store.api.delete_user.assert_awaited_once_with(1)
        store.api.session.clear.assert_called_once()
        store.navigate.assert_called_once_with("/login")

    @pytest.mark.asyncio
    async def test_delete_failure_is_shown(self):
        store = make_store()
        store.api.delete_user = AsyncMock(side_effect=httpx.ConnectError("down"))
        form = ProfileForm.from_user(USER)
        assert await form.delete_account(store) is False
        assert form.error == "Failed to delete account. Please try again."
        assert form.deleting is False
        store.navigate.assert_not_called()
