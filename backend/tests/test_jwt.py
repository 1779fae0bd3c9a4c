"""Unit tests for JWT encode/decode (HS256 and RS256), invalid signature, expiration."""

from datetime import datetime, timezone, timedelta
from unittest.mock import patch

import pytest
from jose import JWTError, jwt

from hydration_tracker.core.auth import create_access_token, decode_token
from hydration_tracker.config import settings


def test_create_and_decode_token_roundtrip_hs256():
    """Default config uses HS256; the subject comes back unchanged."""
    token = create_access_token("user-42")
    assert isinstance(token, str)
    payload = decode_token(token)
    assert payload["sub"] == "user-42"
    assert "exp" in payload


def test_decode_invalid_signature_raises():
    token = create_access_token("user-1")
    # Tamper: replace one character so signature is invalid
    bad_token = token[:-1] + ("x" if token[-1] != "x" else "y")
    with pytest.raises(JWTError):
        decode_token(bad_token)


def test_decode_expired_token_raises():
    """Decoding an expired token raises JWTError."""
    payload = {"sub": "user-1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)}
    token = jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)
    token_str = token if isinstance(token, str) else token.decode("utf-8")
    with pytest.raises(JWTError):
        decode_token(token_str)


def test_negative_lifetime_yields_expired_token():
    token = create_access_token("user-1", expires_minutes=-5)
    with pytest.raises(JWTError):
        decode_token(token)


def test_decode_wrong_key_raises():
    token = create_access_token("user-1")
    with patch.object(settings, "secret_key", "other-secret"):
        with pytest.raises(JWTError):
            decode_token(token)


def test_create_and_decode_token_roundtrip_rs256():
    """When RSA keys are set, encode with private key and decode with public key."""
    from cryptography.hazmat.primitives.asymmetric import rsa
    from cryptography.hazmat.primitives import serialization

    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    public_pem = (
        key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode("utf-8")
    )
    with patch.object(settings, "jwt_private_key", private_pem):
        with patch.object(settings, "jwt_public_key", public_pem):
            token = create_access_token("rs-user")
            assert decode_token(token)["sub"] == "rs-user"
            # an HS256 token no longer verifies once RS256 is on
            hs_token = jwt.encode({"sub": "rs-user"}, settings.secret_key, algorithm="HS256")
            with pytest.raises(JWTError):
                decode_token(hs_token)
