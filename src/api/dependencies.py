"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.errors import AuthError, ValidationError
from src.services.auth import TokenClaims, TokenService, get_token_service
from src.services.user_store import UserStore

security = HTTPBearer(auto_error=False)


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    """Get user store bound to the request's session."""
    return UserStore(db)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenClaims:
    """Verify the bearer token and return the caller's claims."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Authentication required")
    return tokens.verify(credentials.credentials)


def parse_user_id(user_id: str) -> int:
    """Accept only positive integer strings as user ids."""
    if (
        not user_id.isascii()
        or not user_id.isdigit()
        or user_id != str(int(user_id))
        or int(user_id) <= 0
    ):
        raise ValidationError("Invalid user ID format")
    return int(user_id)
