"""Authentication service for JWT, password handling and user profiles."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from src.config import get_settings
from src.errors import NotFound, ValidationError
from src.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PROFILE_FIELDS = ("name", "image")


@dataclass(frozen=True)
class Identity:
    """Session identity of the caller."""

    id: int
    email: str
    name: str | None = None

    @property
    def owner_id(self) -> str:
        # Review documents store the owner id as text.
        return str(self.id)

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, email=user.email, name=user.name)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, email: str, name: str | None = None) -> str:
    """Create a JWT access token carrying the session identity."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "name": name,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password.

    Accounts created through an OAuth provider have no password and can never
    authenticate this way.
    """
    user = db.query(User).filter(User.email == email).first()
    if not user or not user.password_hash:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, email: str, password: str, name: str | None = None) -> User:
    """Create a new credentials user."""
    hashed_password = get_password_hash(password)
    user = User(email=email, password_hash=hashed_password, name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.id}")
    return user


def link_oauth_account(
    db: Session,
    email: str,
    provider_account_id: str,
    name: str | None = None,
    image: str | None = None,
) -> User:
    """Record a successful OAuth sign-in.

    Not exposed as a route: the identity layer that completes the provider
    handshake calls this with the verified email and provider account id, then
    issues a token with ``create_access_token``.

    Creates the user on first sign-in. An existing user (for example one who
    signed up with a password) gets the provider id attached if it has none yet.
    """
    user = get_user_by_email(db, email)
    if user is None:
        user = User(email=email, name=name, image=image, provider_account_id=provider_account_id)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Created OAuth user {user.id}")
    elif not user.provider_account_id:
        user.provider_account_id = provider_account_id
        db.commit()
        db.refresh(user)
        logger.info(f"Linked OAuth account to user {user.id}")
    return user


def update_profile(db: Session, email: str, updates: dict) -> bool:
    """Apply name/image changes to a profile.

    Returns False when the values were already current.
    """
    changes = {key: value for key, value in updates.items() if key in PROFILE_FIELDS}
    if not changes:
        raise ValidationError("No update data provided")

    user = get_user_by_email(db, email)
    if user is None:
        raise NotFound("User profile not found")

    if all(getattr(user, key) == value for key, value in changes.items()):
        return False

    for key, value in changes.items():
        setattr(user, key, value)
    user.updated_at = datetime.now(UTC)
    db.commit()
    return True
