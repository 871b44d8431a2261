"""
Identity resolution.

Reduces the credential material on a request to exactly one trust tier.
"""

import hmac
import logging
from typing import Optional

from .interfaces import IAuthService, IIdentityResolver
from .models import ANONYMOUS, AdminIdentity, Identity

logger = logging.getLogger(__name__)


class IdentityResolver(IIdentityResolver):
    """
    Resolve Anonymous, AuthenticatedIdentity or AdminIdentity.

    Precedence: a valid admin key wins over a bearer token, so a request
    carrying both is treated as admin. Endpoints that do not support a tier
    simply do not pass its credential in.

    The admin secret is fixed at construction; an empty secret disables the
    admin tier.
    """

    def __init__(self, auth: IAuthService, admin_api_key: str):
        self._auth = auth
        self._admin_api_key = admin_api_key

    async def resolve(
        self,
        bearer_token: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> Identity:
        """
        Resolve the caller's identity.

        Raises:
            AuthenticationError: If a bearer token is present but fails
                verification
        """
        if api_key:
            if self.is_admin_key(api_key):
                return AdminIdentity(key=api_key)
            logger.debug("Ignoring non-matching admin key")

        if bearer_token:
            return await self._auth.validate_token(bearer_token)

        return ANONYMOUS

    def is_admin_key(self, api_key: str) -> bool:
        """Constant-time comparison against the configured admin secret."""
        if not self._admin_api_key:
            return False
        return hmac.compare_digest(api_key.encode(), self._admin_api_key.encode())
