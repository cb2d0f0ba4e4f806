"""Session token encoding.

Tokens are minted by the surrounding product. The engine only needs the
subject claim, which is the user ID every ledger record is keyed by.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from totem.config import AuthSettings

REQUIRED_CLAIMS = ["sub", "exp"]


class TokenPayload(BaseModel):
    """Verified claims of a session token."""

    sub: str
    exp: datetime
    iat: datetime | None = None


class JWTError(Exception):
    """Token could not be verified."""


def create_token(
    user_id: str, settings: AuthSettings, issued_at: datetime | None = None
) -> str:
    """Mint a session token for a user.

    Used by scripts and tests; production tokens come from the product's
    own sign-in.
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify a session token.

    Args:
        token: Encoded token
        settings: Authentication settings

    Returns:
        Verified claims

    Raises:
        JWTError: If the signature, expiry or claims do not check out
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.MissingRequiredClaimError as e:
        raise JWTError(f"Token is missing the {e.claim!r} claim") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e

    if not claims["sub"]:
        raise JWTError("Token has an empty subject")
    return TokenPayload(**claims)
