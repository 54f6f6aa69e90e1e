"""JWT verification for identity-provider tokens.

Uses PyJWT. The identity provider signs access tokens whose ``sub`` claim is
the principal id; this module decodes and checks them, plus a helper that
mints equivalent tokens for local development and tests.
"""

from datetime import UTC, datetime, timedelta

import jwt


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be decoded or lacks a principal id."""


def create_access_token(
    subject: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 30,
    *,
    audience: str | None = None,
    issuer: str | None = None,
) -> str:
    """Create a JWT access token for a principal.

    Args:
        subject: The principal id placed in the ``sub`` claim.
        secret_key: Secret key for signing.
        algorithm: JWT signing algorithm.
        expires_minutes: Token expiration in minutes.
        audience: Optional ``aud`` claim.
        issuer: Optional ``iss`` claim.

    Returns:
        The encoded JWT string.
    """
    now = datetime.now(UTC)
    payload: dict[str, object] = {
        "sub": subject,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
        "type": "access",
    }
    if audience is not None:
        payload["aud"] = audience
    if issuer is not None:
        payload["iss"] = issuer
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
    *,
    audience: str | None = None,
    issuer: str | None = None,
    leeway: int = 0,
) -> dict:
    """Decode and validate a JWT token.

    ``aud`` and ``iss`` are only enforced when the matching argument is set.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired.
        jwt.InvalidTokenError: If the token is invalid.
    """
    return jwt.decode(
        token,
        secret_key,
        algorithms=[algorithm],
        audience=audience,
        issuer=issuer,
        leeway=leeway,
        options={"verify_aud": audience is not None},
    )


def principal_id_from_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
    *,
    audience: str | None = None,
    issuer: str | None = None,
    leeway: int = 0,
) -> str:
    """Return the principal id carried by an access token.

    Raises:
        InvalidTokenError: If the token is invalid, expired, not an access
            token, or has no subject.
    """
    try:
        payload = decode_token(token, secret_key, algorithm, audience=audience, issuer=issuer, leeway=leeway)
    except jwt.PyJWTError as e:
        msg = "Invalid or expired token"
        raise InvalidTokenError(msg) from e

    if payload.get("type", "access") != "access":
        msg = "Token is not an access token"
        raise InvalidTokenError(msg)

    subject = payload.get("sub")
    if not subject:
        msg = "Token has no subject"
        raise InvalidTokenError(msg)
    return str(subject)
