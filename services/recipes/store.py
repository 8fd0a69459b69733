from typing import List, Optional

from sqlalchemy.exc import MultipleResultsFound, NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from services.framework.logging import Span

from .errors import RecipeNotFoundError
from .models import Recipe


class RecipeStore:
    """
    Data access for the Recipe aggregate over a single request-scoped session.

    Every read excludes soft-deleted rows.
    """

    def __init__(self, db: Session):
        self.db = db

    def _live(self):
        return self.db.query(Recipe).filter(Recipe.is_deleted.is_(False))

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def insert(self, recipe: Recipe) -> int:
        with Span("db_insert_recipe"):
            self.db.add(recipe)
            self._commit()
            self.db.refresh(recipe)
            return recipe.id

    def query_all(self) -> List[Recipe]:
        with Span("db_list_recipes"):
            return self._live().order_by(Recipe.id).all()

    def query_single(self, recipe_id: int, include_ingredients: bool = False) -> Recipe:
        """
        Return the one live recipe with this id, or raise RecipeNotFoundError
        when there is none (or, in principle, more than one).
        """
        with Span("db_query_recipe"):
            query = self._live().filter(Recipe.id == recipe_id)
            if include_ingredients:
                query = query.options(selectinload(Recipe.ingredients))
            try:
                return query.one()
            except (NoResultFound, MultipleResultsFound):
                raise RecipeNotFoundError(recipe_id)

    def point_lookup(self, recipe_id: int) -> Optional[Recipe]:
        with Span("db_lookup_recipe"):
            recipe = self.db.get(Recipe, recipe_id)
            if recipe is None or recipe.is_deleted:
                return None
            return recipe

    def update(self, recipe: Recipe) -> Recipe:
        with Span("db_update_recipe"):
            self._commit()
            self.db.refresh(recipe)
            return recipe
