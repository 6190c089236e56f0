"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, MessageResponse, UserLogin, UserRegister
from src.schemas.user import UserResponse, UserUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "MessageResponse",
    "UserResponse",
    "UserUpdate",
]
