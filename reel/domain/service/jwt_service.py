"""Session token service."""

import logfire

from reel.config import AuthSettings
from reel.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and checks the session tokens sent in the ``auth_token`` cookie."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, username: str) -> str:
        """Sign a token for a user. Used by tooling and tests."""
        return create_token(user_id, username, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a token.

        Raises:
            JWTError: If the token is malformed, badly signed or expired
        """
        with logfire.span("jwt_service.verify_token"):
            return verify_token(token, self.auth_settings)

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """User ID carried by ``token``, or None for anonymous callers.

        Missing and invalid tokens both read as anonymous; write routes
        turn that into a 401.
        """
        if not token:
            return None
        try:
            return self.verify_token(token).user_id
        except JWTError as e:
            logfire.debug("Ignoring unusable auth token", error=str(e))
            return None
