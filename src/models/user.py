"""User model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # NULL for accounts that only ever signed in through an OAuth provider
    password_hash = Column(String(255), nullable=True)
    name = Column(String(255), nullable=True)
    image = Column(String(1024), nullable=True)
    provider_account_id = Column(String(255), nullable=True, index=True)
