"""
Security utilities for JWT authentication and password hashing.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt
from app.core.config import Settings
from app.core.exceptions import ExpiredCredential, MalformedCredential


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    Returns bytes (32 bytes) which is well under bcrypt's 72-byte limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pre_hashed = _pre_hash_password(plain_password)
    return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """
    Hash a password.
    Pre-hashes with SHA256 first, then bcrypt with a fresh salt.
    """
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pre_hashed, salt)
    return hashed.decode('utf-8')


def normalize_recovery_answer(answer: str) -> str:
    """Recovery answers are matched case-insensitively."""
    return answer.strip().lower()


def get_recovery_answer_hash(answer: str) -> str:
    return get_password_hash(normalize_recovery_answer(answer))


def verify_recovery_answer(answer: str, hashed_answer: str) -> bool:
    return verify_password(normalize_recovery_answer(answer), hashed_answer)


class TokenService:
    """
    Issues and verifies bearer tokens.

    Tokens carry only the user id (``sub``) and an expiry (``exp``); the
    identity store is consulted on every request to resolve the user.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(days=expire_days)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expire_days=settings.ACCESS_TOKEN_EXPIRE_DAYS,
        )

    def create_access_token(self, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token for a user id."""
        expire = datetime.now(timezone.utc) + (expires_delta if expires_delta is not None else self.expires_delta)
        to_encode = {"sub": str(user_id), "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_subject(self, token: str) -> int:
        """
        Decode a token and return its user id.

        Raises ExpiredCredential when the signature is valid but the token
        has expired, MalformedCredential for anything else that fails.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise ExpiredCredential()
        except JWTError:
            raise MalformedCredential()

        subject = payload.get("sub")
        if subject is None or "exp" not in payload:
            raise MalformedCredential()
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise MalformedCredential()
