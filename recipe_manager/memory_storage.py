from __future__ import annotations

import logging
import os
import uuid
from typing import Iterable, List, Optional, Set

from .models import ALL_CATEGORIES, OTHER_CATEGORY, Recipe, RecipeInput, default_recipes
from .storage import RecipeRepository

logger = logging.getLogger(__name__)

_FALSE_VALUES = {"0", "false", "no", "off"}


def _matches_search(recipe: Recipe, search_text: str) -> bool:
    needle = search_text.casefold()
    if needle in recipe.name.casefold():
        return True
    return needle in " ".join(recipe.ingredients).casefold()


class InMemoryRecipeStore(RecipeRepository):
    """Recipe catalog held in process memory for the lifetime of a session.

    Recipes keep their insertion order. Mutations never touch the identity or
    position of other recipes, and references to recipes that no longer exist
    are silently ignored.
    """

    def __init__(self, recipes: Iterable[RecipeInput] = ()) -> None:
        self._recipes: List[Recipe] = []
        self._issued_ids: Set[str] = set()
        self.search_text = ""
        self.selected_category = ALL_CATEGORIES

        for candidate in recipes:
            self.add_recipe(candidate)

    @classmethod
    def from_env(cls) -> "InMemoryRecipeStore":
        """Build a store, seeded with the example recipes unless disabled."""

        seed = os.environ.get("RECIPES_SEED", "1").strip().lower() not in _FALSE_VALUES
        return cls(default_recipes() if seed else ())

    def list_recipes(self) -> List[Recipe]:
        return list(self._recipes)

    def get_recipe(self, recipe_id: str) -> Recipe:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        raise KeyError(f"Recipe '{recipe_id}' does not exist.")

    def filter_recipes(
        self,
        search_text: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Recipe]:
        if search_text is None:
            search_text = self.search_text
        if category is None:
            category = self.selected_category

        filtered = self._recipes
        if category != ALL_CATEGORIES:
            filtered = [recipe for recipe in filtered if recipe.category == category]
        if search_text:
            filtered = [recipe for recipe in filtered if _matches_search(recipe, search_text)]
        return list(filtered)

    def list_categories(self) -> List[str]:
        categories = {ALL_CATEGORIES}
        categories.update(recipe.category for recipe in self._recipes)

        ordered = sorted(categories)
        if OTHER_CATEGORY in ordered:
            ordered.remove(OTHER_CATEGORY)
            ordered.append(OTHER_CATEGORY)
        return ordered

    def list_favorites(self) -> List[Recipe]:
        return [recipe for recipe in self._recipes if recipe.is_favorite]

    def select(
        self,
        search_text: Optional[str] = None,
        category: Optional[str] = None,
    ) -> None:
        if search_text is not None:
            self.search_text = search_text
        if category is not None:
            self.selected_category = category

    def add_recipe(self, candidate: RecipeInput) -> Recipe:
        recipe = Recipe(
            id=self._new_id(),
            name=candidate.name,
            ingredients=list(candidate.ingredients),
            instructions=candidate.instructions,
            category=candidate.category,
            image=candidate.image,
        )
        self._recipes.append(recipe)
        logger.debug("Added recipe %s (%r)", recipe.id, recipe.name)
        return recipe

    def remove_recipe(self, recipe_id: str) -> None:
        self.remove_recipes([recipe_id])

    def remove_recipes(self, recipe_ids: Iterable[str]) -> None:
        doomed = set(recipe_ids)
        if not doomed:
            return

        kept = [recipe for recipe in self._recipes if recipe.id not in doomed]
        removed = len(self._recipes) - len(kept)
        self._recipes = kept

        if removed < len(doomed):
            logger.debug("Ignored %d unknown recipe id(s) on removal", len(doomed) - removed)
        logger.debug("Removed %d recipe(s)", removed)

    def remove_at(
        self,
        offsets: Iterable[int],
        *,
        search_text: Optional[str] = None,
        category: Optional[str] = None,
    ) -> None:
        view = self.filter_recipes(search_text, category)
        recipe_ids = []
        for offset in offsets:
            if 0 <= offset < len(view):
                recipe_ids.append(view[offset].id)
            else:
                logger.debug("Ignored out of range position %d", offset)
        self.remove_recipes(recipe_ids)

    def toggle_favorite(self, recipe_id: str) -> None:
        try:
            recipe = self.get_recipe(recipe_id)
        except KeyError:
            logger.debug("Ignored favorite toggle for unknown recipe %s", recipe_id)
            return
        recipe.is_favorite = not recipe.is_favorite

    def _new_id(self) -> str:
        # Issued ids are kept after deletion so none is ever handed out twice.
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate


__all__ = ["InMemoryRecipeStore"]
