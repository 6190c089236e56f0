"""Client-side session store.

Holds the signed-in user and a loading flag, keeps them in sync with the
API, and redirects away from protected routes when nobody is signed in.

Session-changing calls (login, register, logout) each take a new
generation number. A response that arrives after a newer call has started
is dropped instead of overwriting the newer state.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

import httpx

from src.client.api import ApiError, CoachingApiClient
from src.client.routes import DASHBOARD, LOGIN, Navigator, is_protected

logger = logging.getLogger(__name__)

Listener = Callable[["SessionState"], None]


@dataclass(frozen=True)
class SessionState:
    user: dict[str, Any] | None = None
    loading: bool = True


class SessionStore:
    """Single shared session state for a client."""

    def __init__(self, api: CoachingApiClient, navigator: Navigator | None = None) -> None:
        self.api = api
        self.navigator = navigator or Navigator()
        self.state = SessionState()
        self._listeners: list[Listener] = []
        self._generation = 0

    @property
    def user(self) -> dict[str, Any] | None:
        return self.state.user

    @property
    def loading(self) -> bool:
        return self.state.loading

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state observer; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, **changes: Any) -> None:
        new_state = replace(self.state, **changes)
        if new_state == self.state:
            return
        self.state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        self._enforce_route()

    def _enforce_route(self) -> None:
        if self.state.loading or self.state.user is not None:
            return
        if is_protected(self.navigator.location):
            logger.info(f"No user on protected path {self.navigator.location}, redirecting")
            self.navigator.push(LOGIN)

    def navigate(self, path: str) -> None:
        """Go to a path, checking its access class first.

        Authenticated-only routes send a settled, signed-out session to the
        login page instead. While loading, the redirect rule decides later.
        """
        if is_protected(path) and self.state.user is None and not self.state.loading:
            logger.info(f"No user for protected path {path}, redirecting")
            path = LOGIN
        self.navigator.push(path)

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    async def mount(self) -> None:
        await self.check_auth()

    async def check_auth(self) -> None:
        """Ask the API who is signed in and update the session."""
        generation = self._generation
        try:
            user = await self.api.get_current_user()
        except (ApiError, httpx.HTTPError) as e:
            logger.info(f"Auth check failed: {e}")
            if not self._is_stale(generation):
                self._set_state(user=None)
                if is_protected(self.navigator.location):
                    self.navigate(LOGIN)
        else:
            if self._is_stale(generation):
                logger.debug("Discarding stale auth check result")
            else:
                self._set_state(user=user)
        finally:
            self._set_state(loading=False)

    async def login(self, email: str, password: str) -> None:
        """Sign in, refresh the session and go to the dashboard.

        Failures are logged and re-raised for the form to display.
        """
        generation = self._next_generation()
        try:
            response = await self.api.login(email, password)
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Login error: {e}")
            raise
        if self._is_stale(generation):
            logger.debug("Discarding stale login result")
            return

        self._set_state(user=response.get("user"))
        await self.check_auth()
        if not self._is_stale(generation) and self.user is not None:
            self.navigate(DASHBOARD)

    async def register(self, email: str, password: str, name: str) -> None:
        """Create an account, refresh the session and go to the dashboard."""
        generation = self._next_generation()
        try:
            await self.api.register(email, password, name)
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Registration error: {e}")
            raise
        if self._is_stale(generation):
            logger.debug("Discarding stale registration result")
            return

        await self.check_auth()
        if not self._is_stale(generation) and self.user is not None:
            self.navigate(DASHBOARD)

    async def logout(self) -> None:
        """Sign out. Network failures are logged; the session is cleared anyway."""
        generation = self._next_generation()
        try:
            await self.api.logout()
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Logout error: {e}")
        if self._is_stale(generation):
            return

        self._set_state(user=None, loading=False)
        self.navigate(LOGIN)
