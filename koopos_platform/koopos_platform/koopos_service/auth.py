from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Iterable
import jwt

from .config import settings
from .errors import ServiceError, invalid_token


class PasswordHasher:
    """One-way password hashing and verification."""

    def __init__(self, schemes: Iterable[str] = ("pbkdf2_sha256",)):
        self._context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        return self._context.verify(plain_password, hashed_password)


class TokenIssuer:
    """Mints and checks signed, time-bound access tokens for a username."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, username: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {"sub": username, "iat": now, "exp": now + timedelta(minutes=self.expire_minutes)}
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> str:
        """
        Verify a token and return the username it was issued for.

        Raises:
            ServiceError: AUTHENTICATION if the signature, expiry or subject is invalid
        """
        try:
            data = jwt.decode(token, self.secret_key, algorithms=[self.algorithm], options={"require": ["exp", "sub"]})
        except jwt.ExpiredSignatureError as exc:
            raise ServiceError.authentication(invalid_token("Token has expired")) from exc
        except jwt.PyJWTError as exc:
            raise ServiceError.authentication(invalid_token()) from exc

        username = data.get("sub")
        if not isinstance(username, str) or not username:
            raise ServiceError.authentication(invalid_token())
        return username


pwd_hasher = PasswordHasher(settings.PASSWORD_SCHEMES)
token_issuer = TokenIssuer(settings.SECRET_KEY, settings.ALGORITHM, settings.ACCESS_TOKEN_EXPIRE_MINUTES)
