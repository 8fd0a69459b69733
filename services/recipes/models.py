from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship

from services.recipes.db import Base
from services.shared.schemas.ingredient import (
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
)


class Recipe(Base):
    """
    A recipe for a dish. Rows are never removed; deleting sets is_deleted.
    """

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)

    # total minutes, built from hours + minutes on input
    time_to_cook = Column(Integer, nullable=False, default=0)

    method = Column(Text, nullable=False)
    is_vegetarian = Column(Boolean, nullable=False, default=False)
    is_vegan = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)

    ingredients = relationship(
        "Ingredient",
        back_populates="recipe",
        order_by="Ingredient.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class Ingredient(Base):
    """
    An ingredient owned by exactly one recipe.
    """

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False, default=0)

    name = Column(String(200), nullable=False)
    quantity = Column(
        Numeric(QUANTITY_MAX_DIGITS, QUANTITY_DECIMAL_PLACES), nullable=False
    )
    unit = Column(String(50), nullable=False)

    recipe = relationship("Recipe", back_populates="ingredients")
