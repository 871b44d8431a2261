"""
Authentication and access-control data models.

A request resolves to exactly one identity (trust tier). The ownership
guard turns an identity plus a target note into an AccessDecision, which is
produced once per request and never cached.
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from modules.notes.models import Note
from modules.users.models import IdentityClaims, User


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (identity provider user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    aud: Union[str, list[str]] = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: Optional[dict] = None
    user_metadata: Optional[dict] = None

    model_config = {"extra": "ignore"}

    def to_claims(self) -> IdentityClaims:
        """Profile claims carried by the token itself."""
        metadata = self.user_metadata or {}
        return IdentityClaims(
            email=self.email or metadata.get("email"),
            first_name=metadata.get("first_name") or metadata.get("given_name"),
            last_name=metadata.get("last_name") or metadata.get("family_name"),
        )


class TrustTier(str, Enum):
    """Caller trust levels, mutually exclusive per request."""

    ANONYMOUS = "anonymous"
    USER = "user"
    ADMIN = "admin"


class Anonymous(BaseModel):
    """No credential was presented (or accepted) on this request."""

    tier: Literal[TrustTier.ANONYMOUS] = TrustTier.ANONYMOUS

    model_config = {"frozen": True}


class AuthenticatedIdentity(BaseModel):
    """
    A verified external identity.

    Built only from a token the verifier has already validated.
    """

    tier: Literal[TrustTier.USER] = TrustTier.USER
    subject_id: str = Field(..., description="Identity provider subject")
    claims: IdentityClaims = Field(default_factory=IdentityClaims)

    model_config = {"frozen": True}


class AdminIdentity(BaseModel):
    """The request carried the configured administrative secret."""

    tier: Literal[TrustTier.ADMIN] = TrustTier.ADMIN
    key: str = Field(..., repr=False)

    model_config = {"frozen": True}


Identity = Union[Anonymous, AuthenticatedIdentity, AdminIdentity]

ANONYMOUS = Anonymous()


class Operation(str, Enum):
    """Operations subject to access control."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class DenyReason(str, Enum):
    """Why a request was denied. Each reason maps to one HTTP status."""

    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_STATUS_CODES = {
    DenyReason.UNAUTHENTICATED: 401,
    DenyReason.FORBIDDEN: 403,
    DenyReason.NOT_FOUND: 404,
}

_MESSAGES = {
    DenyReason.UNAUTHENTICATED: "Authentication required",
    DenyReason.FORBIDDEN: "You don't have permission to access this note",
    DenyReason.NOT_FOUND: "Note not found",
}


class AccessDecision(BaseModel):
    """
    Outcome of an ownership check.

    On ALLOW, `resource` is the note loaded during the check so the handler
    does not fetch it again.
    """

    allowed: bool
    reason: Optional[DenyReason] = None
    resource: Optional[Note] = None

    model_config = {"frozen": True}

    @classmethod
    def allow(cls, note: Note) -> "AccessDecision":
        return cls(allowed=True, resource=note)

    @classmethod
    def deny(cls, reason: DenyReason) -> "AccessDecision":
        return cls(allowed=False, reason=reason)

    @property
    def status_code(self) -> int:
        return 200 if self.allowed else self.reason.status_code


class CreateDecision(BaseModel):
    """
    Outcome of a create authorization.

    `owner` is the provisioned local user for authenticated callers and None
    for ownerless (anonymous or admin-created) notes.
    """

    allowed: bool
    reason: Optional[DenyReason] = None
    owner: Optional[User] = None

    model_config = {"frozen": True}

    @classmethod
    def allow(cls, owner: Optional[User] = None) -> "CreateDecision":
        return cls(allowed=True, owner=owner)

    @classmethod
    def deny(cls, reason: DenyReason) -> "CreateDecision":
        return cls(allowed=False, reason=reason)

    @property
    def owner_id(self) -> Optional[int]:
        return self.owner.id if self.owner else None
