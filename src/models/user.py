"""User model."""

from sqlalchemy import Column, Integer, String

from src.database import Base


class User(Base):
    """A coach or client account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
