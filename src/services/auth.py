"""Authentication service for JWT and password handling."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from src.config import get_settings
from src.errors import InvalidTokenError
from src.models.user import User

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by a verified access token."""

    id: int
    email: str


class TokenService:
    """Issue and verify signed, time-limited bearer tokens.

    Tokens are stateless: validity depends only on the signature and the
    ``exp`` claim, checked against ``clock`` at verification time.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime
        self.clock = clock

    def issue(self, user: User) -> str:
        """Create a token embedding the user's id and email."""
        now = self.clock()
        to_encode = {
            "id": user.id,
            "email": user.email,
            "iat": int(now.timestamp()),
            "exp": int((now + self.lifetime).timestamp()),
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Check signature and expiry and return the embedded claims."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidTokenError("Invalid token") from e

        exp = payload.get("exp")
        if not isinstance(exp, int | float):
            raise InvalidTokenError("Invalid token")
        if exp <= self.clock().timestamp():
            raise InvalidTokenError("Token expired")

        user_id = payload.get("id")
        email = payload.get("email")
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
            raise InvalidTokenError("Invalid token")
        return TokenClaims(id=user_id, email=email)


def get_token_service() -> TokenService:
    """Token service configured from settings."""
    current = get_settings()
    return TokenService(
        secret=current.jwt_secret,
        algorithm=current.jwt_algorithm,
        lifetime=timedelta(minutes=current.jwt_expiration_minutes),
    )
