"""Signed access and refresh tokens (HS256 JWTs).

Access tokens are short-lived and carry ``{id, role, email}``. Refresh tokens
are long-lived, carry only ``{id}`` plus a unique ``jti``, and are only honoured
while a matching, unrevoked RefreshToken record exists.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import JWTError, jwt

from storefront.config import get_settings
from storefront.exceptions import AuthenticationError

ALGORITHM = "HS256"

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class IssuedTokens:
    """What a successful sign-in hands back to the API layer."""

    access_token: str
    refresh_token: str
    user: dict = field(default_factory=dict)


def issue_access_token(user_id: str, role: str, email: str) -> str:
    settings = get_settings()
    now = datetime.now(UTC)
    claims = {
        "id": str(user_id),
        "role": role,
        "email": email,
        "typ": ACCESS,
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_minutes),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=ALGORITHM)


def issue_refresh_token(user_id: str) -> tuple[str, datetime]:
    """Return the encoded refresh token and its expiry."""
    settings = get_settings()
    now = datetime.now(UTC)
    expires_at = now + timedelta(days=settings.refresh_token_days)
    claims = {
        "id": str(user_id),
        "typ": REFRESH,
        "jti": uuid4().hex,
        "iat": now,
        "exp": expires_at,
    }
    return jwt.encode(claims, get_settings().jwt_secret, algorithm=ALGORITHM), expires_at


def decode_token(token: str, expected_type: str) -> dict:
    """Verify signature, expiry and token type; return the claims."""
    try:
        claims = jwt.decode(token, get_settings().jwt_secret, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise AuthenticationError("Invalid or expired token") from exc

    if claims.get("typ") != expected_type or not claims.get("id"):
        raise AuthenticationError("Invalid or expired token")
    return claims
