class RecipeNotFoundError(LookupError):
    """
    Raised when a recipe id does not resolve to exactly one live recipe.
    """

    def __init__(self, recipe_id: int):
        self.recipe_id = recipe_id
        super().__init__(f"Recipe {recipe_id} not found")
