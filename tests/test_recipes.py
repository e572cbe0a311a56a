"""Recipe browse, search and filter tests."""

import math

import pytest

from src.models.recipe import Recipe
from src.services.recipe_query import (
    MATCH_ANY,
    NATURAL_SORT,
    RecipePage,
    RecipeSearchParams,
    build_recipe_query,
    escape_like,
    search_recipes,
)


@pytest.fixture
def tagged_recipes(make_recipe):
    """Four recipes with overlapping tags and ingredients."""
    return {
        "pancakes": make_recipe(
            "Classic Pancakes",
            category="Breakfast",
            prep_time="10",
            cook_time="15",
            tags=["breakfast", "vegetarian", "quick"],
            ingredients={"Flour": "1 cup", "Milk": "1 cup", "Eggs": "2"},
            instructions=["Mix", "Cook"],
        ),
        "omelette": make_recipe(
            "Cheese Omelette",
            category="Breakfast",
            prep_time="5",
            cook_time="5",
            tags=["breakfast", "quick"],
            ingredients={"Eggs": "3", "Cheese": "50 g"},
            instructions=["Whisk", "Cook", "Fold"],
        ),
        "curry": make_recipe(
            "Vegetable Curry",
            category="Main Course",
            prep_time="20",
            cook_time="40",
            tags=["vegetarian", "dinner"],
            ingredients={"Potato": "2", "Coconut milk": "1 can"},
            instructions=["Chop", "Simmer", "Season", "Serve"],
        ),
        "steak": make_recipe(
            "Pan Steak",
            category="Main Course",
            prep_time="2",
            cook_time="10",
            tags=["dinner"],
            ingredients={"Steak": "1", "Butter": "1 tbsp"},
            instructions=["Sear", "Rest"],
        ),
    }


def _titles(response) -> list[str]:
    return [recipe["title"] for recipe in response.json()["recipes"]]


class TestSearchParams:
    """Tests for parameter normalisation."""

    def test_defaults(self):
        params = RecipeSearchParams.from_raw()
        assert params.page == 1
        assert params.limit == 20
        assert params.match_type == "all"
        assert params.sort_by == NATURAL_SORT
        assert params.order == "asc"

    @pytest.mark.parametrize("raw", ["abc", "0", "-3", "", None])
    def test_invalid_numbers_fall_back(self, raw):
        params = RecipeSearchParams.from_raw(page=raw, limit=raw)
        assert params.page == 1
        assert params.limit == 20

    def test_limit_is_capped(self):
        assert RecipeSearchParams.from_raw(limit="500").limit == 100

    def test_unknown_match_type_and_order(self):
        params = RecipeSearchParams.from_raw(match_type="some", order="sideways")
        assert params.match_type == "all"
        assert params.order == "asc"

    def test_blank_terms_dropped(self):
        params = RecipeSearchParams.from_raw(tags=["  ", "quick", "quick ", ""])
        assert params.tags == ["quick"]

    def test_number_of_steps(self):
        assert RecipeSearchParams.from_raw(number_of_steps="3").number_of_steps == 3
        assert RecipeSearchParams.from_raw(number_of_steps="-2").number_of_steps == 0
        assert RecipeSearchParams.from_raw(number_of_steps="x").number_of_steps is None


class TestBuildQuery:
    """Tests for the store query produced from parameters."""

    @pytest.mark.parametrize("page,limit", [(1, 20), (2, 20), (3, 7), (10, 1)])
    def test_skip(self, page, limit):
        query = build_recipe_query(RecipeSearchParams(page=page, limit=limit))
        assert query.skip == (page - 1) * limit
        assert query.limit == limit

    def test_no_filters_by_default(self):
        assert build_recipe_query(RecipeSearchParams()).filters == []

    def test_all_match_adds_one_clause_per_tag(self):
        query = build_recipe_query(RecipeSearchParams(tags=["a", "b", "c"]))
        assert len(query.filters) == 3

    def test_any_match_adds_single_clause(self):
        query = build_recipe_query(RecipeSearchParams(tags=["a", "b", "c"], match_type=MATCH_ANY))
        assert len(query.filters) == 1

    def test_unknown_sort_orders_by_insertion_only(self):
        query = build_recipe_query(RecipeSearchParams(sort_by="bogus"))
        assert len(query.order_by) == 1

    def test_escape_like(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


@pytest.mark.parametrize("total,limit", [(0, 20), (1, 20), (20, 20), (21, 20), (99, 10), (5, 1)])
def test_total_pages(total, limit):
    page = RecipePage(recipes=[], total=total, params=RecipeSearchParams(limit=limit))
    assert page.total_pages == math.ceil(total / limit)


def test_total_pages_zero_when_empty():
    page = RecipePage(recipes=[], total=0, params=RecipeSearchParams())
    assert page.total_pages == 0
    assert page.has_next_page is False


def test_list_recipes_empty(client):
    """Empty catalog yields zero pages."""
    response = client.get("/api/v1/recipes")
    assert response.status_code == 200
    data = response.json()
    assert data["recipes"] == []
    assert data["total"] == 0
    assert data["totalPages"] == 0


def test_list_recipes_natural_order(client, tagged_recipes):
    response = client.get("/api/v1/recipes")
    assert response.status_code == 200
    data = response.json()
    assert _titles(response) == [
        "Classic Pancakes",
        "Cheese Omelette",
        "Vegetable Curry",
        "Pan Steak",
    ]
    assert data["total"] == 4
    assert data["totalPages"] == 1
    assert data["appliedFilters"]["sortBy"] == "$natural"


def test_list_recipes_natural_order_desc(client, tagged_recipes):
    response = client.get("/api/v1/recipes", params={"order": "desc"})
    assert _titles(response)[0] == "Pan Steak"


def test_recipe_document_shape(client, tagged_recipes):
    recipe = client.get(f"/api/v1/recipes/{tagged_recipes['pancakes']}").json()
    assert recipe["ingredients"] == {"Flour": "1 cup", "Milk": "1 cup", "Eggs": "2"}
    assert recipe["tags"] == ["breakfast", "quick", "vegetarian"]
    assert recipe["instructions"] == ["Mix", "Cook"]
    assert recipe["stepCount"] == 2
    assert recipe["averageRating"] == 0
    assert recipe["reviewCount"] == 0
    assert recipe["reviews"] == []


def test_get_recipe_not_found(client):
    response = client.get("/api/v1/recipes/9999")
    assert response.status_code == 404
    assert response.json() == {"error": "Recipe not found"}


def test_pagination(client, make_recipe):
    for i in range(7):
        make_recipe(f"Recipe {i}")

    first = client.get("/api/v1/recipes", params={"page": 1, "limit": 3}).json()
    third = client.get("/api/v1/recipes", params={"page": 3, "limit": 3}).json()

    assert [r["title"] for r in first["recipes"]] == ["Recipe 0", "Recipe 1", "Recipe 2"]
    assert [r["title"] for r in third["recipes"]] == ["Recipe 6"]
    assert first["total"] == third["total"] == 7
    assert first["totalPages"] == 3
    assert first["hasNextPage"] is True
    assert third["hasNextPage"] is False
    assert third["hasPreviousPage"] is True


def test_invalid_pagination_falls_back(client, make_recipe):
    make_recipe("Only")
    response = client.get("/api/v1/recipes", params={"page": "zero", "limit": "-5"})
    assert response.status_code == 200
    data = response.json()
    assert data["currentPage"] == 1
    assert data["limit"] == 20
    assert len(data["recipes"]) == 1


def test_search_is_case_insensitive_substring(client, tagged_recipes):
    response = client.get("/api/v1/recipes", params={"search": "OMEL"})
    assert _titles(response) == ["Cheese Omelette"]


def test_search_treats_wildcards_literally(client, make_recipe):
    make_recipe("100% Rye Bread")
    make_recipe("Rye Crackers")
    response = client.get("/api/v1/recipes", params={"search": "%"})
    assert _titles(response) == ["100% Rye Bread"]


def test_tags_match_all(client, tagged_recipes):
    response = client.get(
        "/api/v1/recipes", params={"tags[]": ["breakfast", "vegetarian"], "matchType": "all"}
    )
    assert _titles(response) == ["Classic Pancakes"]


def test_tags_match_any(client, tagged_recipes):
    response = client.get(
        "/api/v1/recipes", params={"tags[]": ["quick", "vegetarian"], "matchType": "any"}
    )
    assert sorted(_titles(response)) == ["Cheese Omelette", "Classic Pancakes", "Vegetable Curry"]


def test_tags_match_all_is_subset_relation(client, tagged_recipes, db):
    """Every result's tag set is a superset of the query tags, and nothing is missed."""
    query_tags = {"dinner"}
    response = client.get("/api/v1/recipes", params={"tags[]": list(query_tags)})
    returned = {r["id"] for r in response.json()["recipes"]}
    expected = {
        recipe.id for recipe in db.query(Recipe).all() if query_tags <= set(recipe.tag_names)
    }
    assert returned == expected


def test_ingredients_match_all_case_insensitive(client, tagged_recipes):
    response = client.get("/api/v1/recipes", params={"ingredients[]": ["eggs", "MILK"]})
    assert _titles(response) == ["Classic Pancakes"]


def test_match_type_applies_to_ingredients_too(client, tagged_recipes):
    """The single matchType parameter governs both tags and ingredients."""
    response = client.get(
        "/api/v1/recipes",
        params={"ingredients[]": ["Cheese", "Steak"], "matchType": "any"},
    )
    assert sorted(_titles(response)) == ["Cheese Omelette", "Pan Steak"]


def test_filters_combine_with_and(client, tagged_recipes):
    response = client.get(
        "/api/v1/recipes",
        params={"tags[]": ["breakfast"], "ingredients[]": ["Cheese"], "search": "cheese"},
    )
    assert _titles(response) == ["Cheese Omelette"]

    response = client.get(
        "/api/v1/recipes", params={"tags[]": ["dinner"], "search": "pancake"}
    )
    assert _titles(response) == []


def test_category_filter(client, tagged_recipes):
    response = client.get("/api/v1/recipes", params={"category": "Main Course"})
    assert sorted(_titles(response)) == ["Pan Steak", "Vegetable Curry"]


def test_number_of_steps_filter(client, tagged_recipes):
    response = client.get("/api/v1/recipes", params={"numberOfSteps": "2"})
    assert sorted(_titles(response)) == ["Classic Pancakes", "Pan Steak"]


def test_sort_by_prep_time_numeric(client, tagged_recipes):
    response = client.get("/api/v1/recipes", params={"sortBy": "prep", "order": "asc"})
    assert _titles(response) == [
        "Pan Steak",
        "Cheese Omelette",
        "Classic Pancakes",
        "Vegetable Curry",
    ]


def test_sort_by_cook_time_desc(client, tagged_recipes):
    response = client.get("/api/v1/recipes", params={"sortBy": "cook", "order": "desc"})
    assert _titles(response) == [
        "Vegetable Curry",
        "Classic Pancakes",
        "Pan Steak",
        "Cheese Omelette",
    ]


def test_sort_by_instruction_count(client, tagged_recipes):
    response = client.get(
        "/api/v1/recipes", params={"sortBy": "instructionCount", "order": "desc"}
    )
    assert _titles(response)[0] == "Vegetable Curry"


def test_unknown_sort_falls_back_to_natural(client, tagged_recipes):
    response = client.get("/api/v1/recipes", params={"sortBy": "nonsense"})
    assert _titles(response) == [
        "Classic Pancakes",
        "Cheese Omelette",
        "Vegetable Curry",
        "Pan Steak",
    ]


def test_page_never_exceeds_limit(client, make_recipe):
    for i in range(5):
        make_recipe(f"R{i}")
    for limit in (1, 2, 3, 5, 10):
        data = client.get("/api/v1/recipes", params={"limit": limit}).json()
        assert len(data["recipes"]) <= limit


def test_search_recipes_service(db, tagged_recipes):
    page = search_recipes(db, RecipeSearchParams(tags=["quick"], limit=1))
    assert page.total == 2
    assert len(page.recipes) == 1
    assert page.total_pages == 2


def test_create_recipe(client, auth_headers):
    response = client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json={
            "title": "Tomato Soup",
            "category": "Soup",
            "prepTime": "10",
            "cookTime": "30",
            "ingredients": {"Tomatoes": "6", "Onion": "1"},
            "instructions": ["Chop", "Simmer", "Blend"],
            "tags": ["soup", " vegan "],
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["stepCount"] == 3
    assert data["tags"] == ["soup", "vegan"]


def test_create_recipe_requires_auth(client):
    response = client.post("/api/v1/recipes", json={"title": "Nope"})
    assert response.status_code == 401


def test_create_recipe_rejects_non_numeric_time(client, auth_headers):
    response = client.post(
        "/api/v1/recipes", headers=auth_headers, json={"title": "Soup", "prepTime": "ten"}
    )
    assert response.status_code == 400


def test_create_recipe_rejects_colliding_ingredient_names(client, auth_headers, db):
    response = client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json={"title": "Bread", "ingredients": {"Flour": "1 cup", "Flour ": "2 cups"}},
    )
    assert response.status_code == 400
    assert "ingredients" in response.json()["error"]
    assert db.query(Recipe).count() == 0


def test_create_recipe_strips_ingredient_names(client, auth_headers):
    response = client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json={"title": "Bread", "ingredients": {" Flour ": "1 cup", "  ": "ignored"}},
    )
    assert response.status_code == 201
    assert response.json()["ingredients"] == {"Flour": "1 cup"}


def test_create_recipe_rejects_overlong_tag(client, auth_headers, db):
    response = client.post(
        "/api/v1/recipes",
        headers=auth_headers,
        json={"title": "Bread", "tags": ["x" * 101]},
    )
    assert response.status_code == 400
    assert "tags" in response.json()["error"]
    assert db.query(Recipe).count() == 0


def test_edit_description(client, auth_headers, make_recipe):
    recipe_id = make_recipe("Soup", description="Old")
    response = client.put(
        f"/api/v1/recipes/{recipe_id}",
        headers=auth_headers,
        json={"description": "New and improved"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["description"] == "New and improved"
    assert data["lastEditedBy"] == "Test User"
    assert data["lastEditedAt"] is not None


def test_edit_description_missing_recipe(client, auth_headers):
    response = client.put(
        "/api/v1/recipes/9999", headers=auth_headers, json={"description": "x"}
    )
    assert response.status_code == 404
