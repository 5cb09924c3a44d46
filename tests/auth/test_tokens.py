"""
Unit tests for bearer token issuance and verification.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from moviereviews.auth.tokens import Identity, TokenService, extract_bearer

SECRET = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture
def tokens():
    return TokenService(SECRET)


class TestTokenService:
    """Tests for TokenService.issue and TokenService.verify."""

    def test_issue_and_verify(self, tokens):
        """A freshly issued token verifies to the same user."""
        token = tokens.issue(7)
        assert tokens.verify(token) == Identity(user_id=7)

    def test_token_carries_user_id_and_one_day_expiry(self, tokens):
        """The payload holds userId and expires one day after issue."""
        issued = datetime(2030, 1, 1, tzinfo=timezone.utc)
        token = tokens.issue(3, now=issued)

        payload = jwt.decode(token, options={"verify_signature": False})
        assert payload["userId"] == 3
        assert payload["exp"] - payload["iat"] == int(timedelta(days=1).total_seconds())

    def test_expired_token_rejected(self, tokens):
        """A token past its expiry yields no identity."""
        token = tokens.issue(7, now=datetime.now(timezone.utc) - timedelta(days=2))
        assert tokens.verify(token) is None

    def test_wrong_key_rejected(self, tokens):
        """A token signed with another key yields no identity."""
        other = TokenService("another-secret-key-with-enough-length-too")
        assert tokens.verify(other.issue(7)) is None

    def test_tampered_token_rejected(self, tokens):
        """Changing the signature invalidates the token."""
        token = tokens.issue(7)
        head, payload, signature = token.split(".")
        forged = ".".join([head, payload, signature[::-1]])
        assert tokens.verify(forged) is None

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt", "a.b.c"])
    def test_missing_or_malformed_token_rejected(self, tokens, token):
        """Garbage and absent tokens yield no identity."""
        assert tokens.verify(token) is None

    def test_token_without_user_id_rejected(self, tokens):
        """A validly signed token without a userId claim yields no identity."""
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"sub": "7", "exp": exp}, SECRET, algorithm="HS256")
        assert tokens.verify(token) is None

    def test_token_without_expiry_rejected(self, tokens):
        """Tokens must expire."""
        token = jwt.encode({"userId": 7}, SECRET, algorithm="HS256")
        assert tokens.verify(token) is None

    def test_empty_secret_not_allowed(self):
        with pytest.raises(ValueError):
            TokenService("")


class TestExtractBearer:
    """Tests for Authorization header parsing."""

    @pytest.mark.parametrize("header, expected", [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc.def.ghi", "abc.def.ghi"),
        ("  Bearer   abc.def.ghi  ", "abc.def.ghi"),
        ("abc.def.ghi", "abc.def.ghi"),
        ("Bearer", None),
        ("", None),
        (None, None),
    ])
    def test_extract_bearer(self, header, expected):
        assert extract_bearer(header) == expected
