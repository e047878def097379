from dataclasses import dataclass, field
from typing import List, Optional

ALL_CATEGORIES = "All"
OTHER_CATEGORY = "Other"

# Categories offered by the add form. Stored recipes may carry any string.
RECIPE_CATEGORIES = ("Chinese", "Mexican", "Italian", "Indian", "French", OTHER_CATEGORY)


@dataclass(frozen=True)
class RecipeImage:
    """Raw image payload attached to a recipe."""

    data: bytes
    mimetype: str = "application/octet-stream"
    filename: str = ""


@dataclass
class RecipeInput:
    """Candidate recipe handed to the store before it has an identity."""

    name: str
    ingredients: List[str]
    instructions: str
    category: str
    image: Optional[RecipeImage] = None


@dataclass
class Recipe:
    """Domain object representing a stored recipe."""

    id: str
    name: str
    ingredients: List[str]
    instructions: str
    category: str
    image: Optional[RecipeImage] = None
    is_favorite: bool = field(default=False)


def default_recipes() -> List[RecipeInput]:
    """Return the example recipes a fresh catalog starts with."""

    return [
        RecipeInput(
            name="Pasta",
            ingredients=["Pasta", "Tomato sauce", "Cheese"],
            instructions="Cook pasta, add sauce, sprinkle cheese",
            category="Italian",
        ),
        RecipeInput(
            name="Salad",
            ingredients=["Lettuce", "Tomato", "Cucumber", "Dressing"],
            instructions="Chop veggies, mix with dressing",
            category=OTHER_CATEGORY,
        ),
        RecipeInput(
            name="Mac & Cheese",
            ingredients=["Macaroni", "Cheese"],
            instructions="Cook macaroni and put the cheese in",
            category=OTHER_CATEGORY,
        ),
    ]


__all__ = [
    "ALL_CATEGORIES",
    "OTHER_CATEGORY",
    "RECIPE_CATEGORIES",
    "Recipe",
    "RecipeImage",
    "RecipeInput",
    "default_recipes",
]
