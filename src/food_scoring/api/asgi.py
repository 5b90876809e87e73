"""ASGI entrypoint for the food scoring API."""

from food_scoring.api.app import create_app
from food_scoring.containers import build_container

app = create_app(build_container())
