"""Mixins and shared column types for SQLAlchemy models."""

from sqlalchemy import JSON, Column, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB

# Embedded documents (reviews, shopping list items) are stored as jsonb on
# PostgreSQL and plain JSON elsewhere.
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
