"""Tests for access/refresh token issuing and verification."""

import pytest
from jose import jwt

from storefront.config import get_settings
from storefront.exceptions import AuthenticationError
from storefront.identity.principal import Principal
from storefront.identity.tokens import ACCESS, ALGORITHM, REFRESH, decode_token, issue_access_token, issue_refresh_token
from storefront.identity.user import Role


class TestAccessToken:
    def test_carries_identity_claims(self):
        token = issue_access_token("user-1", "customer", "ada@example.com")
        claims = decode_token(token, ACCESS)
        assert claims["id"] == "user-1"
        assert claims["role"] == "customer"
        assert claims["email"] == "ada@example.com"

    def test_signed_with_hs256(self):
        token = issue_access_token("user-1", "customer", "ada@example.com")
        assert jwt.get_unverified_header(token)["alg"] == ALGORITHM

    def test_rejected_as_refresh_token(self):
        token = issue_access_token("user-1", "customer", "ada@example.com")
        with pytest.raises(AuthenticationError):
            decode_token(token, REFRESH)

    def test_tampered_token_is_rejected(self):
        token = issue_access_token("user-1", "customer", "ada@example.com")
        with pytest.raises(AuthenticationError):
            decode_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"), ACCESS)

    def test_foreign_secret_is_rejected(self):
        token = jwt.encode({"id": "user-1", "typ": ACCESS}, "some-other-secret", algorithm=ALGORITHM)
        with pytest.raises(AuthenticationError):
            decode_token(token, ACCESS)


class TestRefreshToken:
    def test_tokens_issued_together_never_collide(self):
        first, _ = issue_refresh_token("user-1")
        second, _ = issue_refresh_token("user-1")
        assert first != second

    def test_carries_only_user_id_and_token_id(self):
        token, _ = issue_refresh_token("user-1")
        claims = decode_token(token, REFRESH)
        assert claims["id"] == "user-1"
        assert claims["jti"]
        assert "role" not in claims

    def test_expiry_follows_settings(self):
        token, expires_at = issue_refresh_token("user-1")
        claims = jwt.get_unverified_claims(token)
        assert claims["exp"] - claims["iat"] == get_settings().refresh_token_days * 24 * 60 * 60
        assert int(expires_at.timestamp()) == claims["exp"]


class TestPrincipal:
    def test_from_access_token(self):
        principal = Principal.from_access_token(issue_access_token("user-1", "admin", "root@example.com"))
        assert principal.user_id == "user-1"
        assert principal.role is Role.ADMIN
        assert principal.is_admin

    def test_unknown_role_is_rejected(self):
        with pytest.raises(AuthenticationError):
            Principal.from_access_token(issue_access_token("user-1", "superuser", "x@example.com"))
