"""HTTP client for the coaching API."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from src.config import get_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass
class AuthSession:
    """Bearer token held by one client.

    Created empty, filled at login/register, cleared at logout or on a 401.
    """

    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def clear(self) -> None:
        self.token = None


class CoachingApiClient:
    """Async wrapper around the auth and user endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        session: AuthSession | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = (base_url or get_settings().api_base_url).rstrip("/")
        self.session = session or AuthSession()
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "CoachingApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        headers = {}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        logger.debug(f"API request {method} {path} (token={self.session.is_authenticated})")
        response = await self._client.request(method, path, json=json, headers=headers)
        logger.debug(f"API response {method} {path}: {response.status_code}")

        if response.status_code == 401:
            logger.debug("Unauthorized response, clearing token")
            self.session.clear()

        if response.is_error:
            raise ApiError(response.status_code, self._error_message(response))
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(response.status_code, "Invalid response from server") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.reason_phrase or f"HTTP {response.status_code}"
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return response.reason_phrase or f"HTTP {response.status_code}"

    async def register(self, email: str, password: str, name: str) -> dict[str, Any]:
        data = await self._request(
            "POST", "/auth/register", json={"email": email, "password": password, "name": name}
        )
        if data.get("token"):
            self.session.token = data["token"]
        return data

    async def login(self, email: str, password: str) -> dict[str, Any]:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        if data.get("token"):
            self.session.token = data["token"]
        return data

    async def logout(self) -> None:
        try:
            await self._request("POST", "/auth/logout")
        finally:
            self.session.clear()

    async def get_current_user(self) -> dict[str, Any]:
        return await self._request("GET", "/users/me")

    async def get_users(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/users")

    async def get_user(self, user_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/users/{user_id}")

    async def update_user(self, user_id: int, **fields: str) -> dict[str, Any]:
        return await self._request("PUT", f"/users/{user_id}", json=fields)

    async def delete_user(self, user_id: int) -> None:
        await self._request("DELETE", f"/users/{user_id}")
