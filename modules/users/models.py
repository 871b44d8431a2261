"""
Users module data models.

A User is the local projection of an external identity subject. The
insert outcome types model the provisioning race explicitly instead of
relying on exception handling around the insert.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

# Used when neither the token nor the identity provider supplies an email
UNKNOWN_EMAIL = "unknown@example.com"


class IdentityClaims(BaseModel):
    """Profile claims about a subject, supplied by the identity provider."""

    email: Optional[str] = Field(None, description="Primary email address")
    first_name: Optional[str] = Field(None, description="Given name")
    last_name: Optional[str] = Field(None, description="Family name")

    model_config = {"frozen": True}


class User(BaseModel):
    """
    Local user record.

    `id` is the primary identity inside this system; `subject_id` is the
    identity provider's stable identifier and never changes once stored.
    """

    id: int = Field(..., description="Local user ID")
    subject_id: str = Field(..., description="External identity subject")
    email: str = Field(..., description="Email address")
    first_name: Optional[str] = Field(None, description="Given name")
    last_name: Optional[str] = Field(None, description="Family name")
    created_at: datetime = Field(..., description="Record creation time")
    updated_at: datetime = Field(..., description="Last update time")

    model_config = {"frozen": True}


class NewUser(BaseModel):
    """Fields written when a subject is provisioned for the first time."""

    subject_id: str
    email: str = UNKNOWN_EMAIL
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @classmethod
    def from_claims(cls, subject_id: str, claims: IdentityClaims) -> "NewUser":
        return cls(
            subject_id=subject_id,
            email=claims.email or UNKNOWN_EMAIL,
            first_name=claims.first_name or None,
            last_name=claims.last_name or None,
        )


@dataclass(frozen=True)
class UserInserted:
    """The insert committed and created this row."""

    user: User


@dataclass(frozen=True)
class ProvisioningConflict:
    """Another request committed a row for the same subject first."""

    subject_id: str


InsertOutcome = Union[UserInserted, ProvisioningConflict]
