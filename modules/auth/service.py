"""
Authentication service implementation.

Verifies Supabase JWT tokens and exposes the verified subject and claims.
Token issuance belongs to Supabase; this service only checks signatures,
expiry and audience.
"""

from typing import Optional
import jwt
from pydantic import ValidationError

from shared.config import Settings, get_settings

from .interfaces import IAuthService
from .models import AuthenticatedIdentity, JWTPayload
from .exceptions import (
    AuthNotConfiguredError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)


class AuthService(IAuthService):
    """
    Implementation of the identity verifier.

    Uses the Supabase JWT secret (HS256) configured in settings.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    async def validate_token(self, token: str) -> AuthenticatedIdentity:
        """
        Validate a JWT token and return the authenticated identity.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise AuthNotConfiguredError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience=self._settings.supabase_jwt_audience,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        try:
            jwt_payload = JWTPayload(**payload)
        except ValidationError:
            raise InvalidTokenError("Invalid token claims")

        return AuthenticatedIdentity(
            subject_id=jwt_payload.sub,
            claims=jwt_payload.to_claims(),
        )
