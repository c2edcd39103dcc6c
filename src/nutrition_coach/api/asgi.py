"""ASGI entrypoint for the nutrition coach API."""

from nutrition_coach.api.app import create_app
from nutrition_coach.containers import build_container

app = create_app(build_container())
