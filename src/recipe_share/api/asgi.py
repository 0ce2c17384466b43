"""ASGI entrypoint for the recipe sharing API."""

from recipe_share.api.app import create_app
from recipe_share.containers import build_container

app = create_app(build_container())
