"""Client route table and navigation state."""

from dataclasses import dataclass, field
from enum import StrEnum


class AccessClass(StrEnum):
    """Who may view a route."""

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class Route:
    path: str
    access: AccessClass


HOME = "/"
LOGIN = "/login"
REGISTER = "/register"
DASHBOARD = "/dashboard"
PROFILE = "/profile"

ROUTES: dict[str, Route] = {
    route.path: route
    for route in (
        Route(HOME, AccessClass.PUBLIC),
        Route(LOGIN, AccessClass.ANONYMOUS),
        Route(REGISTER, AccessClass.ANONYMOUS),
        Route(DASHBOARD, AccessClass.AUTHENTICATED),
        Route(PROFILE, AccessClass.AUTHENTICATED),
    )
}


def resolve(path: str) -> Route:
    """Look up a path by exact match; unknown paths are public."""
    normalized = path.split("?", 1)[0].split("#", 1)[0]
    if len(normalized) > 1:
        normalized = normalized.rstrip("/") or HOME
    return ROUTES.get(normalized, Route(normalized, AccessClass.PUBLIC))


def is_protected(path: str) -> bool:
    return resolve(path).access is AccessClass.AUTHENTICATED


@dataclass
class Navigator:
    """Current location plus the history of visited paths."""

    location: str = HOME
    history: list[str] = field(default_factory=list)

    def push(self, path: str) -> None:
        if path == self.location:
            return
        self.history.append(self.location)
        self.location = path
