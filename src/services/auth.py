"""Authentication service: login upserts and JWT issue/verify.

Tokens are stateless. Logging out only discards the token on the client, so a
token stays valid until it expires.
"""

import logging
import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.errors import ConflictError, InvalidCredentialError
from src.models.enums import AuthProvider
from src.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

ANONYMOUS_DISPLAY_NAME = "Guest"
ANONYMOUS_EMAIL_DOMAIN = "anonymous.local"


def token_lifetime(provider: str) -> timedelta:
    """Anonymous sessions are short-lived; provider-backed ones last longer."""
    if provider == AuthProvider.ANONYMOUS.value:
        return timedelta(days=settings.anonymous_token_days)
    return timedelta(days=settings.provider_token_days)


def create_access_token(user: User, now: datetime | None = None) -> str:
    """Create a JWT access token for the user."""
    issued_at = now or datetime.now(UTC)
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "iat": issued_at,
        "exp": issued_at + token_lifetime(user.provider),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> int:
    """Return the user id embedded in a valid token.

    Raises InvalidCredentialError for every kind of failure.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise InvalidCredentialError() from None

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise InvalidCredentialError() from None


def authenticate_token(db: Session, token: str) -> User:
    """Resolve a bearer token to an existing user."""
    user_id = verify_access_token(token)
    user = db.get(User, user_id)
    if user is None:
        raise InvalidCredentialError()
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def login_with_provider(
    db: Session,
    provider: AuthProvider,
    provider_id: str,
    email: str,
    name: str,
    avatar: str | None = None,
) -> User:
    """Create or refresh the user identified by an external provider id.

    The identity claim is trusted as given.
    """
    user = db.query(User).filter(User.provider_id == provider_id).first()
    if user is None:
        user = User(
            email=email,
            name=name,
            avatar=avatar,
            provider=provider.value,
            provider_id=provider_id,
            is_premium=False,
        )
        db.add(user)
        logger.info(f"Created {provider.value} user for provider id {provider_id}")
    else:
        user.email = email
        user.name = name
        user.avatar = avatar
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(
            "Email is already used by another account", reason="email-in-use"
        ) from None
    db.refresh(user)
    return user


def login_anonymous(db: Session) -> User:
    """Create a fresh guest user; anonymous identities are never reused."""
    anonymous_id = f"anonymous_{uuid.uuid4().hex}"
    user = User(
        email=f"{anonymous_id}@{ANONYMOUS_EMAIL_DOMAIN}",
        name=ANONYMOUS_DISPLAY_NAME,
        provider=AuthProvider.ANONYMOUS.value,
        provider_id=anonymous_id,
        is_premium=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created anonymous user {user.id}")
    return user
