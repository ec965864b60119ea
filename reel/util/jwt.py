"""Session token encoding.

Tokens are issued by the account service and carried in the
``auth_token`` cookie. The comment core only needs the user id out of them;
``username`` travels along for log context.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, Field

from reel.config import AuthSettings


class TokenPayload(BaseModel):
    """Decoded session claims."""

    user_id: str = Field(alias="sub")
    username: str
    issued_at: datetime = Field(alias="iat")
    exp: datetime


class JWTError(Exception):
    """Token missing, malformed, badly signed or expired."""

    pass


def create_token(user_id: str, username: str, settings: AuthSettings) -> str:
    """Sign a session token for ``user_id``.

    Returns:
        Encoded JWT, valid for ``settings.jwt_expiry_days``
    """
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "username": username,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check the signature and expiry of ``token`` and return its claims.

    Raises:
        JWTError: If the token cannot be trusted
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e
    return TokenPayload.model_validate(claims)
