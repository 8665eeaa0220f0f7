"""Token and password handling tests."""
from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import settings
from app.core.enums import PrincipalType
from app.core.exceptions import (
    TokenExpiredError,
    TokenIssuerMismatchError,
    TokenMalformedError,
    ValidationError,
)
from app.core.security import (
    Principal,
    check_password_length,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


def make_principal(**overrides) -> Principal:
    values = {
        "id": "a1",
        "email": "boss@acme.example.com",
        "type": PrincipalType.SUPER_ADMIN,
        "tenant_id": "t1",
    }
    values.update(overrides)
    return Principal(**values)


def test_token_round_trip_keeps_principal():
    principal = make_principal()
    decoded = decode_token(create_access_token(principal))

    assert decoded == principal


def test_platform_admin_token_has_no_tenant():
    principal = make_principal(type=PrincipalType.PLATFORM_ADMIN, tenant_id=None)
    token = create_access_token(principal)

    claims = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    assert claims["type"] == "platform_admin"
    assert claims["tenant_id"] is None
    assert claims["iss"] == settings.JWT_ISSUER
    assert decode_token(token).tenant_id is None


def test_expired_token_rejected():
    token = create_access_token(make_principal(), expires_delta=timedelta(seconds=-5))

    with pytest.raises(TokenExpiredError):
        decode_token(token)


def test_foreign_issuer_rejected():
    token = create_access_token(make_principal(), issuer="someone-else")

    with pytest.raises(TokenIssuerMismatchError):
        decode_token(token)


def test_bad_signature_rejected():
    token = jwt.encode(
        {"id": "a1", "email": "x@y.example.com", "type": "admin", "iss": settings.JWT_ISSUER},
        "not-the-secret",
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(TokenMalformedError):
        decode_token(token)


def test_garbage_token_rejected():
    with pytest.raises(TokenMalformedError):
        decode_token("not.a.jwt")


def test_unknown_principal_type_rejected():
    token = jwt.encode(
        {"id": "a1", "email": "x@y.example.com", "type": "root", "iss": settings.JWT_ISSUER},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(TokenMalformedError):
        decode_token(token)


def test_missing_claims_rejected():
    token = jwt.encode(
        {"email": "x@y.example.com", "iss": settings.JWT_ISSUER},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(TokenMalformedError):
        decode_token(token)


def test_password_hash_verifies():
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_verify_against_empty_or_unknown_hash():
    assert not verify_password("anything", "")
    assert not verify_password("anything", "plaintext-not-a-hash")


def test_short_password_rejected():
    with pytest.raises(ValidationError, match="at least 8 characters"):
        check_password_length("short")
    check_password_length("long-enough")
