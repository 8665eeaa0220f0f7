"""Security utilities for JWT and password handling."""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.enums import PrincipalType
from app.core.exceptions import (
    ValidationError,
    TokenExpiredError,
    TokenIssuerMismatchError,
    TokenMalformedError,
)


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class Principal(BaseModel):
    """Authenticated identity carried by an access token."""
    id: str
    email: str
    type: PrincipalType
    tenant_id: Optional[str] = None


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognized hash format: the account cannot log in with a password.
        return False


def hash_password(password: str) -> str:
    """Hash a plain password."""
    return pwd_context.hash(password)


def check_password_length(password: str) -> None:
    if len(password or "") < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
        )


def dummy_verify() -> None:
    """Spend the same time as a real verify when there is no account to check."""
    pwd_context.dummy_verify()


def create_access_token(
    principal: Principal,
    issuer: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign an access token for ``principal``."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    payload = principal.model_dump(mode="json")
    payload.update({
        "iss": issuer or settings.JWT_ISSUER,
        "exp": expire,
    })

    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Principal:
    """Verify signature, expiry and issuer, and return the token's principal."""
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise TokenMalformedError()

    if claims.get("iss") != settings.JWT_ISSUER:
        raise TokenIssuerMismatchError()

    try:
        return Principal(
            id=claims["id"],
            email=claims["email"],
            type=claims["type"],
            tenant_id=claims.get("tenant_id"),
        )
    except (KeyError, PydanticValidationError):
        raise TokenMalformedError()
