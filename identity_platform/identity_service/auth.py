from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from .config import Settings
from .errors import TokenIssuanceError

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class TokenIssuer:
    """Signs session tokens carrying an account id."""

    def __init__(self, secret: Optional[str], algorithm: str = "HS256", expire_minutes: int = 60):
        self._secret = secret
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.TOKEN_EXPIRE_MINUTES,
        )

    def issue(self, account_id: str) -> str:
        if not self._secret:
            raise TokenIssuanceError("JWT_SECRET is not configured")

        expire = datetime.now(timezone.utc) + timedelta(minutes=self._expire_minutes)
        payload = {"id": account_id, "exp": expire}
        try:
            token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError) as e:
            raise TokenIssuanceError(f"Failed to sign token: {e}") from e

        if not token:
            raise TokenIssuanceError("Signer returned an empty token")
        return token

    def decode(self, token: str) -> str:
        """
        Return the account id carried by a token.

        Raises:
            jwt.PyJWTError: If the token is malformed, expired or signed
                with another secret
        """
        data = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        return data["id"]
