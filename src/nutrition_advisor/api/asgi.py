"""ASGI entrypoint for the nutrition advisor API."""

from nutrition_advisor.api.app import create_app
from nutrition_advisor.containers import build_container

app = create_app(build_container())
