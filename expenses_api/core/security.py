# expenses_api/core/security.py
import enum
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from passlib.context import CryptContext

from .config import Settings
from .exceptions import ConfigurationError, InvalidTokenError
from expenses_api.schemas.account import IdentityClaims

logger = logging.getLogger(__name__)


class PasswordVerification(str, enum.Enum):
    SUCCESS = "success"
    SUCCESS_REHASH_NEEDED = "success_rehash_needed"
    FAILED = "failed"


class PasswordHasher:
    """
    One-way salted password hashing backed by passlib.

    New hashes use bcrypt_sha256, which pre-hashes the password so bytes past
    bcrypt's 72-byte limit still count. Plain bcrypt and sha256_crypt hashes
    are only accepted for verification and are reported as needing a rehash.
    """

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt_sha256", "bcrypt", "sha256_crypt"],
            deprecated="auto",
            bcrypt_sha256__default_rounds=rounds,
            bcrypt_sha256__min_rounds=rounds,
        )

    def hash(self, plain_password: str) -> str:
        return self._context.hash(plain_password)

    def verify(self, hashed_password: str, plain_password: str) -> PasswordVerification:
        try:
            if not self._context.verify(plain_password, hashed_password):
                return PasswordVerification.FAILED
            if self._context.needs_update(hashed_password):
                return PasswordVerification.SUCCESS_REHASH_NEEDED
        except (ValueError, TypeError):
            # Corrupted or unrecognised hash in storage
            logger.warning("Stored password hash could not be parsed; treating as a mismatch")
            return PasswordVerification.FAILED
        return PasswordVerification.SUCCESS

    def dummy_verify(self) -> None:
        """Spend a verification's worth of time when there is no hash to check."""
        self._context.dummy_verify()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        expiration_minutes: int = 60,
        algorithm: str = "HS256",
        now: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ConfigurationError("JWT signing secret is not configured")
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._lifetime = timedelta(minutes=expiration_minutes)
        self._algorithm = algorithm
        self._now = now or _utc_now

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.JWT_SECURITY_KEY,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            expiration_minutes=settings.JWT_EXPIRATION_TIME_IN_MINUTES,
            algorithm=settings.JWT_ALGORITHM,
        )

    def issue(self, claims: IdentityClaims) -> str:
        """Create a signed access token carrying the user's id and email."""
        logger.info(f"Generating JWT token for user with email: {claims.email}")

        issued_at = self._now()
        payload = {
            "sub": str(claims.user_id),
            "email": claims.email,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)


class TokenValidator:
    def __init__(self, secret: str, issuer: str, audience: str, algorithm: str = "HS256"):
        if not secret:
            raise ConfigurationError("JWT signing secret is not configured")
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenValidator":
        return cls(
            secret=settings.JWT_SECURITY_KEY,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            algorithm=settings.JWT_ALGORITHM,
        )

    def validate(self, token: str) -> IdentityClaims:
        """
        Verify signature, issuer, audience and expiry (no clock skew allowed)
        and return the identity embedded in the token.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                leeway=0,
                options={"require": ["exp", "iat", "iss", "aud", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

        try:
            return IdentityClaims(user_id=int(payload["sub"]), email=payload["email"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError("Invalid token claims") from e
