"""WSGI entrypoint for the Recipe Manager application.

The Flask development server is not started from this module; use
``flask --app main run`` which imports the ``app`` object defined below.
Recipes live in process memory, so run a single worker process.
"""

import logging
import os

from recipe_manager import create_app

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


__all__ = ["app"]
