"""Unit tests for bearer token handling."""

import jwt as pyjwt
import pytest

from registry_api.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_token,
    principal_id_from_token,
)

SECRET = "test-secret-key-for-testing-32chars"


class TestCreateAccessToken:
    """Tests for create_access_token."""

    def test_payload(self) -> None:
        token = create_access_token("b6a1c7e2-principal", SECRET)
        payload = decode_token(token, SECRET)
        assert payload["sub"] == "b6a1c7e2-principal"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_expired_token_rejected(self) -> None:
        token = create_access_token("user", SECRET, expires_minutes=-1)
        with pytest.raises(pyjwt.ExpiredSignatureError):
            decode_token(token, SECRET)

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token("user", SECRET)
        with pytest.raises(pyjwt.InvalidSignatureError):
            decode_token(token, "another-secret-key-for-testing-32chars")


class TestPrincipalIdFromToken:
    """Tests for principal_id_from_token."""

    def test_returns_subject(self) -> None:
        token = create_access_token("principal-42", SECRET)
        assert principal_id_from_token(token, SECRET) == "principal-42"

    def test_tokens_without_type_are_accepted(self) -> None:
        token = pyjwt.encode({"sub": "principal-42"}, SECRET, algorithm="HS256")
        assert principal_id_from_token(token, SECRET) == "principal-42"

    def test_malformed_token(self) -> None:
        with pytest.raises(InvalidTokenError, match="Invalid or expired"):
            principal_id_from_token("not.a.token", SECRET)

    def test_expired_token(self) -> None:
        token = create_access_token("principal-42", SECRET, expires_minutes=-1)
        with pytest.raises(InvalidTokenError):
            principal_id_from_token(token, SECRET)

    def test_refresh_token_rejected(self) -> None:
        token = pyjwt.encode({"sub": "principal-42", "type": "refresh"}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError, match="not an access token"):
            principal_id_from_token(token, SECRET)

    def test_missing_subject(self) -> None:
        token = pyjwt.encode({"type": "access"}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError, match="no subject"):
            principal_id_from_token(token, SECRET)

    def test_algorithm_none_rejected(self) -> None:
        token = pyjwt.encode({"sub": "principal-42"}, key=None, algorithm="none")
        with pytest.raises(InvalidTokenError):
            principal_id_from_token(token, SECRET)


class TestAudienceAndIssuer:
    """Tests for optional ``aud`` / ``iss`` enforcement."""

    def test_matching_claims_accepted(self) -> None:
        token = create_access_token("principal-42", SECRET, audience="registry-api", issuer="https://idp.example.ph")
        subject = principal_id_from_token(token, SECRET, audience="registry-api", issuer="https://idp.example.ph")
        assert subject == "principal-42"

    def test_wrong_audience_rejected(self) -> None:
        token = create_access_token("principal-42", SECRET, audience="another-api")
        with pytest.raises(InvalidTokenError):
            principal_id_from_token(token, SECRET, audience="registry-api")

    def test_missing_audience_rejected_when_required(self) -> None:
        token = create_access_token("principal-42", SECRET)
        with pytest.raises(InvalidTokenError):
            principal_id_from_token(token, SECRET, audience="registry-api")

    def test_audience_ignored_when_not_configured(self) -> None:
        token = create_access_token("principal-42", SECRET, audience="registry-api")
        assert principal_id_from_token(token, SECRET) == "principal-42"

    def test_wrong_issuer_rejected(self) -> None:
        token = create_access_token("principal-42", SECRET, issuer="https://elsewhere.example")
        with pytest.raises(InvalidTokenError):
            principal_id_from_token(token, SECRET, issuer="https://idp.example.ph")

    def test_leeway_tolerates_recent_expiry(self) -> None:
        token = create_access_token("principal-42", SECRET, expires_minutes=-1)
        assert principal_id_from_token(token, SECRET, leeway=300) == "principal-42"
