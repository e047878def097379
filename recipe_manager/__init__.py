import io
import logging
import os
from typing import List, Optional

from flask import Flask, abort, flash, redirect, render_template, request, send_file, url_for
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from .memory_storage import InMemoryRecipeStore
from .models import ALL_CATEGORIES, RECIPE_CATEGORIES, RecipeImage, RecipeInput
from .storage import RecipeRepository

ALLOWED_IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}
DEFAULT_FORM_CATEGORY = "Italian"

logger = logging.getLogger(__name__)


def create_app(storage: Optional[RecipeRepository] = None) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    storage:
        Optional recipe repository. When ``None`` the application will use an
        :class:`InMemoryRecipeStore` configured through environment variables.
    """

    app = Flask(__name__)
    app.config.setdefault("MAX_CONTENT_LENGTH", 16 * 1024 * 1024)
    app.secret_key = os.environ.get("FLASK_SECRET_KEY", "development-secret-change-me")

    if storage is None:
        storage = InMemoryRecipeStore.from_env()
    app.config["RECIPE_STORAGE"] = storage

    @app.get("/")
    def index() -> str:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]
        category = request.args.get("category")
        if category is not None and category not in storage_backend.list_categories():
            logger.info("Ignored unknown category selection %r", category)
            category = None
        storage_backend.select(search_text=request.args.get("q"), category=category)

        return render_template(
            "index.html",
            recipes=storage_backend.filter_recipes(),
            categories=storage_backend.list_categories(),
            search_text=storage_backend.search_text,
            selected_category=storage_backend.selected_category,
            title="Recipes",
        )

    @app.get("/favorites")
    def favorites() -> str:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]
        return render_template(
            "favorites.html",
            recipes=storage_backend.list_favorites(),
            title="Favorite Recipes",
        )

    @app.get("/recipes/new")
    def new_recipe() -> str:
        return render_template(
            "add_recipe.html",
            categories=RECIPE_CATEGORIES,
            selected_category=DEFAULT_FORM_CATEGORY,
            title="Add Recipe",
        )

    @app.post("/recipes")
    def create_recipe() -> str:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        name = request.form.get("name", "").strip()
        ingredients_text = request.form.get("ingredients", "").strip()
        instructions = request.form.get("instructions", "").strip()
        category = request.form.get("category", DEFAULT_FORM_CATEGORY)
        image = request.files.get("image")

        if not (name and ingredients_text and instructions):
            logger.info("Rejected recipe submission with missing fields")
            flash("Please provide a name, ingredients and instructions.", "error")
            return redirect(url_for("new_recipe"))

        if category not in RECIPE_CATEGORIES:
            logger.info("Rejected recipe submission with category %r", category)
            flash(f"Unknown category '{category}'.", "error")
            return redirect(url_for("new_recipe"))

        if image and image.filename and not _allowed_image(image.filename):
            flash("Unsupported image format. Allowed formats: PNG, JPG, JPEG, GIF, WEBP.", "error")
            return redirect(url_for("new_recipe"))

        recipe = storage_backend.add_recipe(
            RecipeInput(
                name=name,
                ingredients=_parse_ingredients(ingredients_text),
                instructions=instructions,
                category=category,
                image=_read_image(image),
            )
        )

        flash(f"Recipe '{recipe.name}' saved.", "success")
        return redirect(url_for("recipe_detail", recipe_id=recipe.id))

    @app.get("/recipes/<recipe_id>")
    def recipe_detail(recipe_id: str) -> str:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        try:
            recipe = storage_backend.get_recipe(recipe_id)
        except KeyError:
            flash("Recipe not found.", "error")
            return redirect(url_for("index"))

        return render_template("recipe_detail.html", recipe=recipe, title=recipe.name)

    @app.get("/recipes/<recipe_id>/image")
    def recipe_image(recipe_id: str):
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        try:
            recipe = storage_backend.get_recipe(recipe_id)
        except KeyError:
            abort(404)

        if recipe.image is None:
            abort(404)

        return send_file(
            io.BytesIO(recipe.image.data),
            mimetype=recipe.image.mimetype,
            download_name=recipe.image.filename or None,
        )

    @app.post("/recipes/<recipe_id>/favorite")
    def toggle_favorite(recipe_id: str) -> str:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]
        storage_backend.toggle_favorite(recipe_id)
        return redirect(_next_url())

    @app.post("/recipes/<recipe_id>/delete")
    def delete_recipe(recipe_id: str) -> str:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]
        storage_backend.remove_recipe(recipe_id)
        flash("Recipe deleted.", "success")
        return redirect(url_for("index"))

    @app.post("/recipes/delete")
    def delete_recipes() -> str:
        storage_backend: RecipeRepository = app.config["RECIPE_STORAGE"]

        offsets = request.form.getlist("offset", type=int)
        if not offsets:
            flash("Select at least one recipe to delete.", "error")
            return redirect(url_for("index"))

        # Positions refer to the view the form was rendered from.
        storage_backend.remove_at(
            offsets,
            search_text=request.form.get("q", ""),
            category=request.form.get("category", ALL_CATEGORIES),
        )
        flash("Recipes deleted.", "success")
        return redirect(url_for("index"))

    return app


def _allowed_image(filename: str) -> bool:
    if not filename or "." not in filename:
        return False
    ext = filename.rsplit(".", 1)[1].lower()
    return ext in ALLOWED_IMAGE_EXTENSIONS


def _parse_ingredients(ingredients_text: str) -> List[str]:
    return [part.strip() for part in ingredients_text.split(",") if part.strip()]


def _read_image(image: Optional[FileStorage]) -> Optional[RecipeImage]:
    if not image or not image.filename:
        return None

    image.stream.seek(0)
    return RecipeImage(
        data=image.stream.read(),
        mimetype=image.mimetype or "application/octet-stream",
        filename=secure_filename(image.filename),
    )


def _next_url() -> str:
    target = request.form.get("next", "")
    # Only same-site paths; anything else falls back to the list.
    if target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("index")


__all__ = ["create_app"]
