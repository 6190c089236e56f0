"""User profile API endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError as SchemaValidationError

from src.api.dependencies import get_current_claims, get_user_store, parse_user_id
from src.errors import ForbiddenError, NotFoundError, ValidationError
from src.schemas.auth import MessageResponse
from src.schemas.user import UserResponse, UserUpdate, is_valid_email
from src.services.auth import TokenClaims
from src.services.user_store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Get current user information."""
    user = store.find_by_id(claims.id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get("", response_model=list[UserResponse])
async def get_users(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Get all users."""
    return store.get_all()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Get a specific user."""
    user = store.find_by_id(parse_user_id(user_id))
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[UserStore, Depends(get_user_store)],
    payload: Annotated[Any, Body()] = None,
):
    """Update the caller's own profile."""
    target_id = parse_user_id(user_id)
    if claims.id != target_id:
        raise ForbiddenError("Not authorized to modify other users")

    # Body is parsed only after ownership is settled
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        fields = UserUpdate.model_validate(payload)
    except SchemaValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(f"{location}: {first.get('msg')}") from e

    if fields.email and not is_valid_email(fields.email):
        raise ValidationError("Invalid email format")
    if not fields.present_fields():
        raise ValidationError("No fields to update")

    user = store.update(target_id, fields)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Delete the caller's own account."""
    target_id = parse_user_id(user_id)
    if claims.id != target_id:
        raise ForbiddenError("Not authorized to delete other users")

    if not store.delete(target_id):
        raise NotFoundError("User not found")
    return MessageResponse(message="User deleted successfully")
