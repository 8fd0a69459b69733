from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

# matches Ingredient.quantity, Numeric(12, 3)
QUANTITY_MAX_DIGITS = 12
QUANTITY_DECIMAL_PLACES = 3


class CreateIngredientCommand(BaseModel):
    """
    Ingredient as supplied when creating a recipe
    """

    name: str = Field(
        ...,
        description="Name of the ingredient",
        examples=["Water"],
        min_length=1,
        max_length=200,
    )
    quantity: Decimal = Field(
        ...,
        max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES,
        description="Quantity of the ingredient",
        examples=[1],
    )
    unit: str = Field(
        ...,
        description="Unit of measurement, e.g. g, cups, L",
        examples=["L"],
        max_length=50,
    )


class UpdateIngredientCommand(BaseModel):
    """
    Positional patch for an existing ingredient. Absent fields are kept.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    quantity: Optional[Decimal] = Field(
        None,
        max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    unit: Optional[str] = Field(None, max_length=50)


class IngredientDetailViewModel(BaseModel):
    """
    Ingredient as shown in a recipe detail: quantity and unit in one string.
    """

    name: str
    quantity: str = Field(..., examples=["1 L"])
