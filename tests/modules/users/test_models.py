"""Tests for users module models."""

import pytest
from pydantic import ValidationError

from modules.users.models import IdentityClaims, NewUser, UNKNOWN_EMAIL


class TestNewUser:
    def test_from_claims(self):
        new_user = NewUser.from_claims(
            "sub-1", IdentityClaims(email="a@example.com", first_name="A", last_name="")
        )
        assert new_user.subject_id == "sub-1"
        assert new_user.email == "a@example.com"
        assert new_user.first_name == "A"
        assert new_user.last_name is None

    def test_from_empty_claims_uses_placeholder_email(self):
        assert NewUser.from_claims("sub-1", IdentityClaims()).email == UNKNOWN_EMAIL


class TestIdentityClaims:
    def test_frozen(self):
        claims = IdentityClaims(email="a@example.com")
        with pytest.raises(ValidationError):
            claims.email = "b@example.com"
