from fastapi import HTTPException
from sqlalchemy.orm import Session

from services.framework.logging import log_event
from services.framework.tracing import traced
from services.shared.schemas import generic as gs
from services.shared.schemas import recipe as rs

from .errors import RecipeNotFoundError
from .service import RecipeService
from .store import RecipeStore


def recipe_service(db: Session) -> RecipeService:
    return RecipeService(RecipeStore(db))


def not_found(recipe_id: int) -> HTTPException:
    log_event("recipe_not_found", recipe_id=recipe_id)
    return HTTPException(404, "Recipe not found")


@traced
async def create_recipe(data: rs.CreateRecipeCommand, db: Session) -> int:
    """
    Creates a new recipe and returns its id.
    """
    return recipe_service(db).create_recipe(data)


@traced
async def list_recipes(db: Session):
    """
    Lists every recipe that has not been deleted.
    """
    return recipe_service(db).get_recipes()


@traced
async def get_recipe(recipe_id: int, db: Session) -> rs.RecipeDetailViewModel:
    """
    Retrieves a single recipe by its ID.
    """
    try:
        return recipe_service(db).get_recipe(recipe_id)
    except RecipeNotFoundError as exc:
        raise not_found(exc.recipe_id)


@traced
async def update_recipe(data: rs.UpdateRecipeCommand, db: Session):
    """
    Updates an existing recipe; the id comes from the body.
    """
    try:
        return recipe_service(db).update_recipe(data)
    except RecipeNotFoundError as exc:
        raise not_found(exc.recipe_id)


@traced
async def delete_recipe(recipe_id: int, db: Session):
    """
    Soft-deletes a recipe by its ID.
    """
    if not recipe_service(db).delete_recipe(recipe_id):
        raise not_found(recipe_id)

    return gs.DeleteResponse(success=True)
