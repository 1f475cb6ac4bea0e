"""
Password hashing and bearer token issuing/verification.

Passwords are hashed with bcrypt through passlib; tokens are HS256 JWTs signed
with a process-wide secret and valid for a fixed period after issuance.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from config import ACCESS_TOKEN_EXPIRE_HOURS, JWT_ALGORITHM
from exceptions import InvalidToken, TokenExpired
from .schema import TokenClaims

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a plaintext password against a stored hash in constant time"""
    if not password_hash:
        pwd_context.dummy_verify()
        return False
    try:
        return pwd_context.verify(password or "", password_hash)
    except ValueError:
        # Stored value is not a recognised hash
        logger.warning("Stored password hash could not be identified")
        pwd_context.dummy_verify()
        return False


def dummy_verify() -> None:
    """Burn the same time as a real verification when the account does not exist"""
    pwd_context.dummy_verify()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens"""

    def __init__(
        self,
        secret: Optional[str],
        algorithm: str = JWT_ALGORITHM,
        expires_delta: timedelta = timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS),
        clock: Callable[[], datetime] = utcnow,
    ):
        if not secret:
            raise RuntimeError("JWT_SECRET is not configured; refusing to issue tokens")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta
        self._clock = clock

    def issue(self, claims: TokenClaims) -> str:
        issued_at = self._clock()
        payload = claims.model_dump()
        payload["iat"] = issued_at
        payload["exp"] = issued_at + self.expires_delta
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired() from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken() from e

        try:
            return TokenClaims(id=payload["id"], username=payload["username"], role=payload["role"])
        except (KeyError, ValidationError) as e:
            raise InvalidToken() from e
