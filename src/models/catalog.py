"""Category and Allergen reference models."""

from sqlalchemy import Column, Integer, String

from src.database import Base


class Category(Base):
    """Recipe category offered as a browse filter."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)


class Allergen(Base):
    """Allergen name matched against recipe ingredient names."""

    __tablename__ = "allergens"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
