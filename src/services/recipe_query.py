"""Recipe search: turns browse parameters into a filtered, sorted, paginated query."""

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Integer, cast, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from src.config import get_settings
from src.errors import StoreError
from src.models.recipe import Recipe, RecipeIngredient, RecipeTag

logger = logging.getLogger(__name__)

settings = get_settings()

MATCH_ALL = "all"
MATCH_ANY = "any"
NATURAL_SORT = "$natural"
SORT_ORDERS = ("asc", "desc")

# Public sort keys -> column expressions. Anything else sorts in insertion order.
SORT_COLUMNS: dict[str, Any] = {
    "prep": cast(Recipe.prep_time, Integer),
    "cook": cast(Recipe.cook_time, Integer),
    "published": Recipe.created_at,
    "createdAt": Recipe.created_at,
    "instructionCount": Recipe.step_count,
    "title": Recipe.title,
    "averageRating": Recipe.average_rating,
    "reviewCount": Recipe.review_count,
}


def _positive_int(value: Any, default: int) -> int:
    """Parse a positive integer, falling back to ``default`` for anything else."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _clean_terms(values: list[str] | None) -> list[str]:
    terms: list[str] = []
    for value in values or []:
        value = value.strip()
        if value and value not in terms:
            terms.append(value)
    return terms


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input only ever matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class RecipeSearchParams:
    """Normalised recipe browse parameters."""

    page: int = 1
    limit: int = 20
    search: str | None = None
    tags: list[str] = field(default_factory=list)
    ingredients: list[str] = field(default_factory=list)
    # Shared by the tag and the ingredient filter.
    match_type: str = MATCH_ALL
    category: str | None = None
    number_of_steps: int | None = None
    sort_by: str = NATURAL_SORT
    order: str = "asc"

    @classmethod
    def from_raw(
        cls,
        page: Any = None,
        limit: Any = None,
        search: str | None = None,
        tags: list[str] | None = None,
        ingredients: list[str] | None = None,
        match_type: str | None = None,
        category: str | None = None,
        number_of_steps: Any = None,
        sort_by: str | None = None,
        order: str | None = None,
    ) -> "RecipeSearchParams":
        """Build parameters from untrusted query-string values.

        Invalid numbers fall back to their defaults instead of failing.
        """
        steps = None
        if number_of_steps not in (None, ""):
            try:
                steps = max(0, int(number_of_steps))
            except (TypeError, ValueError):
                steps = None

        normalized_order = (order or "").lower()

        return cls(
            page=_positive_int(page, 1),
            limit=min(_positive_int(limit, settings.default_page_size), settings.max_page_size),
            search=(search or "").strip() or None,
            tags=_clean_terms(tags),
            ingredients=_clean_terms(ingredients),
            match_type=MATCH_ANY if (match_type or "").lower() == MATCH_ANY else MATCH_ALL,
            category=(category or "").strip() or None,
            number_of_steps=steps,
            sort_by=(sort_by or "").strip() or NATURAL_SORT,
            order=normalized_order if normalized_order in SORT_ORDERS else "asc",
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "search": self.search,
            "tags": self.tags,
            "ingredients": self.ingredients,
            "match_type": self.match_type,
            "category": self.category,
            "number_of_steps": self.number_of_steps,
            "sort_by": self.sort_by,
            "order": self.order,
        }


@dataclass
class RecipeQuery:
    """Store-level query: filter clauses plus sort and pagination directives."""

    filters: list[Any]
    order_by: list[Any]
    skip: int
    limit: int


@dataclass
class RecipePage:
    """One page of search results."""

    recipes: list[Recipe]
    total: int
    params: RecipeSearchParams

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.params.limit)

    @property
    def has_next_page(self) -> bool:
        return self.params.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.params.page > 1


def _membership_filters(relationship, column, values: list[str], match_type: str) -> list[Any]:
    """Filters requiring all (or any) of ``values`` among a recipe's child rows."""
    if not values:
        return []
    if match_type == MATCH_ANY:
        return [relationship.any(column.in_(values))]
    return [relationship.any(column == value) for value in values]


def build_recipe_query(params: RecipeSearchParams) -> RecipeQuery:
    """Translate search parameters into filter clauses, ordering and paging."""
    filters: list[Any] = []

    if params.search:
        filters.append(Recipe.title.ilike(f"%{escape_like(params.search)}%", escape="\\"))

    filters.extend(_membership_filters(Recipe.tags, RecipeTag.name, params.tags, params.match_type))

    # Ingredient names compare case-insensitively.
    filters.extend(
        _membership_filters(
            Recipe.ingredients,
            func.lower(RecipeIngredient.name),
            [name.lower() for name in params.ingredients],
            params.match_type,
        )
    )

    if params.category:
        filters.append(Recipe.category == params.category)

    if params.number_of_steps is not None:
        filters.append(Recipe.step_count == params.number_of_steps)

    descending = params.order == "desc"
    order_by: list[Any] = []
    sort_column = SORT_COLUMNS.get(params.sort_by)
    if sort_column is not None:
        order_by.append(sort_column.desc() if descending else sort_column.asc())
    # Insertion order doubles as the tie-breaker so pages never overlap.
    order_by.append(Recipe.id.desc() if descending else Recipe.id.asc())

    return RecipeQuery(
        filters=filters,
        order_by=order_by,
        skip=(params.page - 1) * params.limit,
        limit=params.limit,
    )


def search_recipes(db: Session, params: RecipeSearchParams) -> RecipePage:
    """Run a recipe search and return the requested page with the total match count."""
    query = build_recipe_query(params)

    try:
        total = db.query(func.count(Recipe.id)).filter(*query.filters).scalar() or 0
        recipes = (
            db.query(Recipe)
            .options(selectinload(Recipe.tags), selectinload(Recipe.ingredients))
            .filter(*query.filters)
            .order_by(*query.order_by)
            .offset(query.skip)
            .limit(query.limit)
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception(f"Recipe search failed for {params.as_dict()}")
        raise StoreError("Error fetching recipes") from e

    return RecipePage(recipes=recipes, total=total, params=params)
