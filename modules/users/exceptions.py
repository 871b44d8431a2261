"""
Users module exceptions.
"""

from typing import Optional

from shared.exceptions import NoteshareError, ExternalServiceError


class IdentityProviderUnavailableError(ExternalServiceError):
    """Raised when profile claims for a new subject cannot be fetched."""

    def __init__(self, subject_id: str, reason: Optional[str] = None):
        super().__init__(
            "Identity provider unavailable",
            service="identity_provider",
            code="IDENTITY_PROVIDER_UNAVAILABLE",
            details={"subject_id": subject_id, "reason": reason},
        )


class UserProvisioningError(NoteshareError):
    """Raised when a provisioning conflict is reported but no row can be read back."""

    def __init__(self, subject_id: str):
        super().__init__(
            "User provisioning failed",
            code="USER_PROVISIONING_FAILED",
            details={"subject_id": subject_id},
        )
