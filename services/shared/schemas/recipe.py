from typing import List, Optional

from pydantic import BaseModel, Field

from .ingredient import (
    CreateIngredientCommand,
    IngredientDetailViewModel,
    UpdateIngredientCommand,
)

# keeps hours * 60 + minutes well inside a 32-bit INTEGER column
MAX_COOK_HOURS = 10_000
MAX_COOK_MINUTES = 100_000


class CreateRecipeCommand(BaseModel):
    """
    Model for creating a new recipe.
    """

    name: str = Field(..., min_length=1, max_length=200, examples=["Soup"])
    time_to_cook_hours: int = Field(0, ge=0, le=MAX_COOK_HOURS)
    time_to_cook_minutes: int = Field(
        0, ge=0, le=MAX_COOK_MINUTES, examples=[30]
    )
    method: str = Field(..., examples=["Boil"])
    is_vegetarian: bool = False
    is_vegan: bool = False
    ingredients: List[CreateIngredientCommand]


class UpdateRecipeCommand(BaseModel):
    """
    Model for updating an existing recipe.
    Only `id` is required; every other field left out keeps its stored value.
    Cook time changes only when both hours and minutes are given.
    """

    id: int
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    time_to_cook_hours: Optional[int] = Field(None, ge=0, le=MAX_COOK_HOURS)
    time_to_cook_minutes: Optional[int] = Field(
        None, ge=0, le=MAX_COOK_MINUTES
    )
    method: Optional[str] = None
    is_vegetarian: Optional[bool] = None
    is_vegan: Optional[bool] = None
    ingredients: Optional[List[UpdateIngredientCommand]] = None


class RecipeSummaryViewModel(BaseModel):
    """
    Model for a recipe in the recipe list.
    """

    id: int
    name: str
    time_to_cook: str = Field(..., examples=["30 minutes"])


class RecipeDetailViewModel(BaseModel):
    """
    Model for outputting a single recipe.
    """

    id: int
    name: str
    method: str
    ingredients: List[IngredientDetailViewModel]
