from __future__ import annotations

from typing import Iterable, List, Optional, Protocol

from .models import Recipe, RecipeInput


class RecipeRepository(Protocol):
    """Protocol describing the behaviour required by the web layer."""

    search_text: str
    selected_category: str

    def list_recipes(self) -> List[Recipe]:
        """Return every stored recipe in insertion order."""

    def get_recipe(self, recipe_id: str) -> Recipe:
        """Return a single recipe or raise :class:`KeyError` if missing."""

    def filter_recipes(
        self,
        search_text: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Recipe]:
        """Return the recipes matching a category and a free-text search."""

    def list_categories(self) -> List[str]:
        """Return the distinct categories in picker order."""

    def list_favorites(self) -> List[Recipe]:
        """Return the recipes marked as favorite."""

    def select(
        self,
        search_text: Optional[str] = None,
        category: Optional[str] = None,
    ) -> None:
        """Update the current search text and category selection."""

    def add_recipe(self, candidate: RecipeInput) -> Recipe:
        """Store a new recipe and return the stored instance."""

    def remove_recipe(self, recipe_id: str) -> None:
        """Remove a recipe. Unknown ids are ignored."""

    def remove_recipes(self, recipe_ids: Iterable[str]) -> None:
        """Remove several recipes at once. Unknown ids are ignored."""

    def remove_at(
        self,
        offsets: Iterable[int],
        *,
        search_text: Optional[str] = None,
        category: Optional[str] = None,
    ) -> None:
        """Remove recipes by their position in a filtered view."""

    def toggle_favorite(self, recipe_id: str) -> None:
        """Flip the favorite flag of a recipe. Unknown ids are ignored."""


__all__ = ["RecipeRepository"]
