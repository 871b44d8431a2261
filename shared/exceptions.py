"""
Base exception classes for the Noteshare backend.

Every domain error carries the HTTP status it renders as, so the API error
handler needs no lookup table. Module exceptions pick their status by
subclassing one of the bases below. Ordinary access denials are not
exceptions; see modules.auth.models.AccessDecision.
"""

from typing import Any, ClassVar, Optional


class NoteshareError(Exception):
    """
    Base exception for all Noteshare errors.

    Unclassified errors render as 500 and are logged by the API handler.
    `details` is for logs only and never reaches the response body.
    """

    status_code: ClassVar[int] = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500

    def to_dict(self) -> dict[str, Any]:
        """Log-friendly form, including the server-side details."""
        return {
            "error": self.code,
            "status": self.status_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(NoteshareError):
    """The request would put a resource into an invalid state."""

    status_code = 400


class AuthenticationError(NoteshareError):
    """No usable credential: missing, malformed, expired or unverifiable."""

    status_code = 401


class AuthorizationError(NoteshareError):
    """The caller is known but may not perform the operation."""

    status_code = 403


class NotFoundError(NoteshareError):
    status_code = 404


class ExternalServiceError(NoteshareError):
    """A dependency outside this process (identity provider, database) failed."""

    status_code = 503

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
