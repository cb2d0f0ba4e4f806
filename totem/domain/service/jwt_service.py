"""Identity interface.

Turns the session token issued by the surrounding product into the stable
user ID that endorsement records and refresh counters are keyed by.
"""

import logfire

from totem.config import AuthSettings
from totem.domain.error import UnauthenticatedError
from totem.domain.value import UserId
from totem.util.jwt import JWTError, verify_token

from .base import Service


class JWTService(Service):
    """Resolves session tokens to users."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def identify(self, token: str | None) -> UserId | None:
        """User behind a token, or None when signed out.

        A missing, expired or forged token all count as signed out.
        """
        if not token:
            return None

        try:
            payload = verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.info("Session token rejected", reason=str(e))
            return None
        return UserId(payload.sub)

    def current_user_id(self, token: str | None, action: str | None = None) -> UserId:
        """Resolve the signed-in user or fail.

        Args:
            token: Session token from the request
            action: What the caller was trying to do, for the error message

        Raises:
            UnauthenticatedError: If nobody is signed in
        """
        user_id = self.identify(token)
        if user_id is None:
            if action:
                raise UnauthenticatedError(f"Authentication required to {action}")
            raise UnauthenticatedError()
        return user_id
