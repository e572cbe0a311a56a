"""initial recipe schema

Revision ID: 4f2a9c1d7e30
Revises:
Create Date: 2026-10-19 09:30:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1d7e30"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

COMMON_ALLERGENS = ["milk", "eggs", "fish", "shellfish", "tree nuts", "peanuts", "wheat", "soy"]


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("image", sa.String(length=1024), nullable=True),
        sa.Column("provider_account_id", sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"])
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_provider_account_id"), "users", ["provider_account_id"])

    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=255), nullable=True),
        sa.Column("prep_time", sa.String(length=20), nullable=True),
        sa.Column("cook_time", sa.String(length=20), nullable=True),
        sa.Column("servings", sa.Integer(), nullable=True),
        sa.Column("instructions", postgresql.JSONB(), nullable=False),
        sa.Column("step_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("images", postgresql.JSONB(), nullable=False),
        sa.Column("nutrition", postgresql.JSONB(), nullable=True),
        sa.Column("reviews", postgresql.JSONB(), nullable=False),
        sa.Column("average_rating", sa.Float(), nullable=False, server_default="0"),
        sa.Column("review_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_edited_by", sa.String(length=255), nullable=True),
        sa.Column("last_edited_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_recipes_id"), "recipes", ["id"])
    op.create_index(op.f("ix_recipes_title"), "recipes", ["title"])
    op.create_index(op.f("ix_recipes_category"), "recipes", ["category"])
    op.create_index(op.f("ix_recipes_step_count"), "recipes", ["step_count"])

    op.create_table(
        "recipe_tags",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("recipe_id", sa.Integer(), sa.ForeignKey("recipes.id"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.UniqueConstraint("recipe_id", "name", name="uq_recipe_tags_recipe_name"),
    )
    op.create_index(op.f("ix_recipe_tags_id"), "recipe_tags", ["id"])
    op.create_index(op.f("ix_recipe_tags_recipe_id"), "recipe_tags", ["recipe_id"])
    op.create_index(op.f("ix_recipe_tags_name"), "recipe_tags", ["name"])

    op.create_table(
        "recipe_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("recipe_id", sa.Integer(), sa.ForeignKey("recipes.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.String(length=100), nullable=True),
        sa.UniqueConstraint("recipe_id", "name", name="uq_recipe_ingredients_recipe_name"),
    )
    op.create_index(op.f("ix_recipe_ingredients_id"), "recipe_ingredients", ["id"])
    op.create_index(op.f("ix_recipe_ingredients_recipe_id"), "recipe_ingredients", ["recipe_id"])
    op.create_index(op.f("ix_recipe_ingredients_name"), "recipe_ingredients", ["name"])

    op.create_table(
        "favorites",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_email", sa.String(length=255), nullable=False),
        sa.Column("recipe_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_email", "recipe_id", name="uq_favorites_user_recipe"),
    )
    op.create_index(op.f("ix_favorites_id"), "favorites", ["id"])
    op.create_index(op.f("ix_favorites_user_email"), "favorites", ["user_email"])

    op.create_table(
        "shopping_lists",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("items", postgresql.JSONB(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        *_timestamps(),
    )
    op.create_index(op.f("ix_shopping_lists_id"), "shopping_lists", ["id"])
    op.create_index(op.f("ix_shopping_lists_owner_id"), "shopping_lists", ["owner_id"])

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
    )
    op.create_index(op.f("ix_categories_id"), "categories", ["id"])

    allergens = op.create_table(
        "allergens",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
    )
    op.create_index(op.f("ix_allergens_id"), "allergens", ["id"])
    op.bulk_insert(allergens, [{"name": name} for name in COMMON_ALLERGENS])


def downgrade() -> None:
    op.drop_index(op.f("ix_allergens_id"), table_name="allergens")
    op.drop_table("allergens")
    op.drop_index(op.f("ix_categories_id"), table_name="categories")
    op.drop_table("categories")
    op.drop_index(op.f("ix_shopping_lists_owner_id"), table_name="shopping_lists")
    op.drop_index(op.f("ix_shopping_lists_id"), table_name="shopping_lists")
    op.drop_table("shopping_lists")
    op.drop_index(op.f("ix_favorites_user_email"), table_name="favorites")
    op.drop_index(op.f("ix_favorites_id"), table_name="favorites")
    op.drop_table("favorites")
    op.drop_index(op.f("ix_recipe_ingredients_name"), table_name="recipe_ingredients")
    op.drop_index(op.f("ix_recipe_ingredients_recipe_id"), table_name="recipe_ingredients")
    op.drop_index(op.f("ix_recipe_ingredients_id"), table_name="recipe_ingredients")
    op.drop_table("recipe_ingredients")
    op.drop_index(op.f("ix_recipe_tags_name"), table_name="recipe_tags")
    op.drop_index(op.f("ix_recipe_tags_recipe_id"), table_name="recipe_tags")
    op.drop_index(op.f("ix_recipe_tags_id"), table_name="recipe_tags")
    op.drop_table("recipe_tags")
    op.drop_index(op.f("ix_recipes_step_count"), table_name="recipes")
    op.drop_index(op.f("ix_recipes_category"), table_name="recipes")
    op.drop_index(op.f("ix_recipes_title"), table_name="recipes")
    op.drop_index(op.f("ix_recipes_id"), table_name="recipes")
    op.drop_table("recipes")
    op.drop_index(op.f("ix_users_provider_account_id"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_id"), table_name="users")
    op.drop_table("users")
