"""Session-aware navigation bar."""

from dataclasses import dataclass

from src.client.routes import DASHBOARD, HOME, LOGIN, PROFILE, REGISTER, AccessClass, resolve
from src.client.session import SessionState

BRAND = "Coaching"


@dataclass(frozen=True)
class NavItem:
    label: str
    href: str | None = None
    action: str | None = None


def nav_items(state: SessionState) -> list[NavItem]:
    """Items to render for the current session state.

    While the session is loading only the brand link is shown.
    """
    items = [NavItem(BRAND, href=HOME)]
    if state.loading:
        return items

    if state.user is not None:
        items.extend(
            [
                NavItem("Teams", href=DASHBOARD),
                NavItem("Profile", href=PROFILE),
                NavItem("Sign Out", action="logout"),
            ]
        )
    else:
        items.extend(
            [
                NavItem("Sign In", href=LOGIN),
                NavItem("Sign Up", href=REGISTER),
            ]
        )

    # Links must be reachable in the current state
    visible = AccessClass.AUTHENTICATED if state.user is not None else AccessClass.ANONYMOUS
    return [
        item
        for item in items
        if item.href is None or resolve(item.href).access in (AccessClass.PUBLIC, visible)
    ]
