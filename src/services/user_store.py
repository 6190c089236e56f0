"""Persistence for user accounts."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.errors import ConflictError
from src.models.user import User
from src.schemas.user import UserUpdate
from src.services.auth import get_password_hash

logger = logging.getLogger(__name__)

# Largest value the Integer id column can hold
MAX_USER_ID = 2**31 - 1


class UserStore:
    """Credential store backed by the users table.

    Records returned here still carry ``password_hash``; serialize them
    through ``UserResponse`` before exposing them.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, username: str, email: str, raw_password: str, name: str) -> User:
        """Hash the password and insert a new user."""
        existing = (
            self.db.query(User)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )
        if existing:
            raise self._conflict(existing, username, email)

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(raw_password),
            name=name,
        )
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        logger.info(f"Created user {user.id} ({username})")
        return user

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: int) -> User | None:
        if user_id > MAX_USER_ID:
            return None
        return self.db.query(User).filter(User.id == user_id).first()

    def update(self, user_id: int, fields: UserUpdate) -> User | None:
        """Apply the present fields of a partial update.

        Returns None when nothing was supplied or the user does not exist.
        """
        changes = fields.present_fields()
        if not changes:
            return None

        user = self.find_by_id(user_id)
        if user is None:
            return None

        if "username" in changes:
            user.username = changes["username"]
        if "email" in changes:
            user.email = changes["email"]
        if "name" in changes:
            user.name = changes["name"]
        if "password" in changes:
            user.password_hash = get_password_hash(changes["password"])

        self._commit()
        self.db.refresh(user)
        logger.info(f"Updated user {user_id}: {sorted(changes)}")
        return user

    def delete(self, user_id: int) -> bool:
        """Delete a user, reporting whether a row was removed."""
        if user_id > MAX_USER_ID:
            return False
        removed = self.db.query(User).filter(User.id == user_id).delete()
        self.db.commit()
        if removed:
            logger.info(f"Deleted user {user_id}")
        return bool(removed)

    def get_all(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Username or email already exists") from e

    @staticmethod
    def _conflict(existing: User, username: str, email: str) -> ConflictError:
        if existing.email == email:
            return ConflictError("Email already registered")
        return ConflictError("Username already taken")
