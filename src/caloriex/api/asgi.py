"""ASGI entrypoint for the CalorieX API."""

from caloriex.api.app import create_app
from caloriex.containers import build_container

app = create_app(build_container())
