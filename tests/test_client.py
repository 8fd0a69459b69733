import httpx
import pytest

from services.client.main import run
from services.client.recipe_client import RecipeClient
from services.framework.tracing import TRACE_ID_HEADER
from services.shared.schemas.ingredient import UpdateIngredientCommand
from services.shared.schemas.recipe import UpdateRecipeCommand


@pytest.fixture
def recipes(client):
    return RecipeClient(client=client)


def test_client_crud_flow(recipes, soup_command):
    recipe_id = recipes.create_recipe(soup_command)

    detail = recipes.get_recipe(recipe_id)
    assert detail.name == "Soup"
    assert detail.ingredients[0].quantity == "1 L"

    updated = recipes.update_recipe(
        UpdateRecipeCommand(
            id=recipe_id,
            name="Tomato Soup",
            ingredients=[UpdateIngredientCommand(quantity="0.5")],
        )
    )
    assert updated.name == "Tomato Soup"
    assert updated.method == "Boil"
    assert updated.ingredients[0].quantity == "0.5 L"

    summaries = recipes.list_recipes()
    assert [(s.id, s.time_to_cook) for s in summaries] == [(recipe_id, "30 minutes")]

    assert recipes.delete_recipe(recipe_id) is True
    assert recipes.delete_recipe(recipe_id) is False
    assert recipes.list_recipes() == []


def test_client_raises_on_missing_recipe(recipes):
    with pytest.raises(httpx.HTTPStatusError) as exc:
        recipes.get_recipe(321)

    assert exc.value.response.status_code == 404


def test_client_sends_trace_id():
    seen = {}

    def handler(request):
        seen["trace"] = request.headers.get(TRACE_ID_HEADER)
        return httpx.Response(200, json=[])

    transport = httpx.MockTransport(handler)
    with RecipeClient(client=httpx.Client(base_url="http://recipes", transport=transport)) as recipes:
        assert recipes.list_recipes() == []

    assert seen["trace"]


def test_demo_run_prints_each_step(recipes, capsys):
    run(recipes)

    out = capsys.readouterr().out
    assert "Created recipe 1" in out
    assert "Retrieved recipe Soup: Water (1 L)" in out
    assert "Updated recipe 1: Hearty Soup - Water (2 L)" in out
    assert "- 1: Hearty Soup (30 minutes)" in out
