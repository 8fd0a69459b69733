from decimal import Decimal
from typing import List

from services.framework.logging import log_event
from services.shared.schemas import ingredient as ins
from services.shared.schemas import recipe as rs

from .models import Ingredient, Recipe
from .store import RecipeStore


def to_minutes(hours: int, minutes: int) -> int:
    return hours * 60 + minutes


def format_time_to_cook(total_minutes: int) -> str:
    return f"{total_minutes} minutes"


def format_quantity(quantity: Decimal, unit: str) -> str:
    """
    "<quantity> <unit>" with trailing zeros dropped: Decimal("1.500"), "kg" -> "1.5 kg".
    """
    amount = format(Decimal(quantity).normalize(), "f")
    return f"{amount} {unit}"


def to_summary(recipe: Recipe) -> rs.RecipeSummaryViewModel:
    return rs.RecipeSummaryViewModel(
        id=recipe.id,
        name=recipe.name,
        time_to_cook=format_time_to_cook(recipe.time_to_cook),
    )


def to_detail(recipe: Recipe) -> rs.RecipeDetailViewModel:
    return rs.RecipeDetailViewModel(
        id=recipe.id,
        name=recipe.name,
        method=recipe.method,
        ingredients=[
            ins.IngredientDetailViewModel(
                name=ingredient.name,
                quantity=format_quantity(ingredient.quantity, ingredient.unit),
            )
            for ingredient in recipe.ingredients
        ],
    )


def patch_ingredient(
    original: Ingredient, updated: ins.UpdateIngredientCommand
) -> Ingredient:
    if updated.name is not None:
        original.name = updated.name
    if updated.quantity is not None:
        original.quantity = updated.quantity
    if updated.unit is not None:
        original.unit = updated.unit
    return original


def apply_update(recipe: Recipe, command: rs.UpdateRecipeCommand) -> Recipe:
    """
    Apply the fields present on `command` to `recipe` in place.

    Cook time changes only when both hours and minutes are present. When
    ingredients are given, the nth update patches the nth existing
    ingredient and the result is truncated to the shorter of the two lists.
    """
    if command.name is not None:
        recipe.name = command.name
    if command.time_to_cook_hours is not None and command.time_to_cook_minutes is not None:
        recipe.time_to_cook = to_minutes(
            command.time_to_cook_hours, command.time_to_cook_minutes
        )
    if command.method is not None:
        recipe.method = command.method
    if command.is_vegetarian is not None:
        recipe.is_vegetarian = command.is_vegetarian
    if command.is_vegan is not None:
        recipe.is_vegan = command.is_vegan

    if command.ingredients is not None:
        recipe.ingredients = [
            patch_ingredient(original, updated)
            for original, updated in zip(recipe.ingredients, command.ingredients)
        ]

    return recipe


class RecipeService:
    """
    Create, read, update and soft-delete recipes through a RecipeStore.
    """

    def __init__(self, store: RecipeStore):
        self.store = store

    def create_recipe(self, command: rs.CreateRecipeCommand) -> int:
        recipe = Recipe(
            name=command.name,
            time_to_cook=to_minutes(
                command.time_to_cook_hours, command.time_to_cook_minutes
            ),
            method=command.method,
            is_vegetarian=command.is_vegetarian,
            is_vegan=command.is_vegan,
            is_deleted=False,
            ingredients=[
                Ingredient(name=i.name, quantity=i.quantity, unit=i.unit)
                for i in command.ingredients
            ],
        )

        recipe_id = self.store.insert(recipe)
        log_event(
            "recipe_created",
            recipe_id=recipe_id,
            ingredients=len(command.ingredients),
        )
        return recipe_id

    def get_recipes(self) -> List[rs.RecipeSummaryViewModel]:
        return [to_summary(recipe) for recipe in self.store.query_all()]

    def get_recipe(self, recipe_id: int) -> rs.RecipeDetailViewModel:
        recipe = self.store.query_single(recipe_id, include_ingredients=True)
        return to_detail(recipe)

    def update_recipe(self, command: rs.UpdateRecipeCommand) -> rs.RecipeDetailViewModel:
        recipe = self.store.query_single(command.id, include_ingredients=True)

        apply_update(recipe, command)
        recipe = self.store.update(recipe)

        log_event(
            "recipe_updated",
            recipe_id=recipe.id,
            fields=sorted(command.model_dump(exclude_none=True, exclude={"id"})),
        )
        return to_detail(recipe)

    def delete_recipe(self, recipe_id: int) -> bool:
        """
        Soft-delete the recipe. Returns False when there is no live recipe
        with this id, including one that was already deleted.
        """
        recipe = self.store.point_lookup(recipe_id)
        if recipe is None:
            return False

        recipe.is_deleted = True
        self.store.update(recipe)

        log_event("recipe_deleted", recipe_id=recipe_id)
        return True

