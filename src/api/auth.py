"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_user_store
from src.errors import AuthError, ConflictError, ValidationError
from src.schemas.auth import AuthResponse, MessageResponse, UserLogin, UserRegister
from src.schemas.user import UserResponse, is_valid_email
from src.services.auth import TokenService, get_token_service, pwd_context, verify_password
from src.services.user_store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid credentials"


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    store: Annotated[UserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Register a new user."""
    if not user_data.email or not user_data.password or not user_data.name:
        raise ValidationError("Email, password, and name are required")

    if not is_valid_email(user_data.email):
        raise ValidationError("Invalid email format")

    # Username is the local part of the email
    username = user_data.email.split("@")[0]

    if store.find_by_email(user_data.email):
        raise ConflictError("Email already registered")
    if store.find_by_username(username):
        raise ConflictError("Username already taken")

    user = store.create(username, user_data.email, user_data.password, user_data.name)
    logger.info(f"Registered user {user.id} ({username})")

    return AuthResponse(token=tokens.issue(user), user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    store: Annotated[UserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with email and password."""
    if not credentials.email or not credentials.password:
        raise ValidationError("Email and password are required")

    # Same error for unknown email and wrong password
    user = store.find_by_email(credentials.email)
    if user is None:
        pwd_context.dummy_verify()
    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.info("Rejected login attempt")
        raise AuthError(INVALID_CREDENTIALS)

    return AuthResponse(token=tokens.issue(user), user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Logout (client should discard token)."""
    response.delete_cookie("token")
    return MessageResponse(message="Successfully logged out")
