"""Client for the coaching API: session store, routes, navigation and forms."""

from src.client.api import ApiError, AuthSession, CoachingApiClient
from src.client.routes import AccessClass, Navigator, Route
from src.client.session import SessionState, SessionStore

__all__ = [
    "ApiError",
    "AuthSession",
    "CoachingApiClient",
    "AccessClass",
    "Navigator",
    "Route",
    "SessionState",
    "SessionStore",
]
