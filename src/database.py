"""Database configuration and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.config import get_settings

settings = get_settings()

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()

COMMON_ALLERGENS = [
    "milk",
    "eggs",
    "fish",
    "shellfish",
    "tree nuts",
    "peanuts",
    "wheat",
    "soy",
]


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def seed_allergens(db: Session) -> None:
    """Insert the common allergen names that are not stored yet."""
    from src.models.catalog import Allergen

    existing = {name for (name,) in db.query(Allergen.name).all()}
    for name in COMMON_ALLERGENS:
        if name not in existing:
            db.add(Allergen(name=name))
    db.commit()


def init_db(bind=None) -> None:
    """Create all tables and seed reference data.

    Production deployments run the Alembic migrations instead; this is used by
    scripts and the test suite.
    """
    # Import all models here so they are registered with Base.metadata
    from src import models  # noqa: F401

    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    session = Session(bind=bind)
    try:
        seed_allergens(session)
    finally:
        session.close()
