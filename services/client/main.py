import argparse

from services.client.recipe_client import RecipeClient
from services.shared.schemas.ingredient import (
    CreateIngredientCommand,
    UpdateIngredientCommand,
)
from services.shared.schemas.recipe import CreateRecipeCommand, UpdateRecipeCommand


def run(client: RecipeClient) -> None:
    recipe_id = client.create_recipe(
        CreateRecipeCommand(
            name="Soup",
            time_to_cook_hours=0,
            time_to_cook_minutes=30,
            method="Boil",
            is_vegetarian=True,
            is_vegan=True,
            ingredients=[CreateIngredientCommand(name="Water", quantity=1, unit="L")],
        )
    )
    print(f"Created recipe {recipe_id}")

    recipe = client.get_recipe(recipe_id)
    ingredients = ", ".join(f"{i.name} ({i.quantity})" for i in recipe.ingredients)
    print(f"Retrieved recipe {recipe.name}: {ingredients}")

    updated = client.update_recipe(
        UpdateRecipeCommand(
            id=recipe_id,
            name="Hearty Soup",
            ingredients=[UpdateIngredientCommand(quantity=2)],
        )
    )
    ingredients = ", ".join(f"{i.name} ({i.quantity})" for i in updated.ingredients)
    print(f"Updated recipe {recipe_id}: {updated.name} - {ingredients}")

    for summary in client.list_recipes():
        print(f"- {summary.id}: {summary.name} ({summary.time_to_cook})")


def main() -> None:
    parser = argparse.ArgumentParser(description="Exercise the recipes API.")
    parser.add_argument(
        "--base-url",
        default=None,
        help="Recipes service URL (defaults to the url in config.yaml)",
    )
    args = parser.parse_args()

    with RecipeClient(base_url=args.base_url) as client:
        run(client)


if __name__ == "__main__":
    main()
