from dataclasses import dataclass
from uuid import uuid4

from jose import JWTError, jwt

from app.config import settings


@dataclass(frozen=True)
class Identity:
    """Principal resolved from an identity-provider bearer token."""

    subject: str
    email: str | None = None


def decode_identity_token(token: str) -> Identity | None:
    """Verify the provider's JWT and return its subject/email, or None if invalid."""
    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience,
            options={"verify_aud": settings.auth_jwt_audience is not None},
        )
    except JWTError:
        return None
    subject = payload.get("sub")
    if not subject:
        return None
    email = payload.get(settings.auth_email_claim)
    email = str(email).strip() if email else None
    return Identity(subject=str(subject), email=email or None)


def generate_id() -> str:
    return str(uuid4())
