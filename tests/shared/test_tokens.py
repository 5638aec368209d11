"""Tests for bearer token issuance and verification."""

from datetime import timedelta

import pytest
from shared.errors import AuthenticationError, AuthorizationError
from shared.tokens import bearer_token, decode_token, issue_token


class TestTokens:
    def test_round_trip_claims(self):
        claims = decode_token(issue_token("user-001", "0901234567", "admin"))
        assert claims["id"] == "user-001"
        assert claims["phone"] == "0901234567"
        assert claims["userType"] == "admin"
        assert claims["exp"] > claims["iat"]

    def test_expired_token(self):
        token = issue_token("user-001", "0901234567", "customer", ttl=timedelta(seconds=-1))
        with pytest.raises(AuthorizationError):
            decode_token(token)

    def test_wrong_secret(self):
        token = issue_token("user-001", "0901234567", "customer", secret="another-secret")
        with pytest.raises(AuthorizationError):
            decode_token(token)


class TestBearerHeader:
    def test_extracts_token(self):
        assert bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Basic abc", "Bearer a b"])
    def test_malformed_header(self, header):
        with pytest.raises(AuthenticationError):
            bearer_token(header)
