"""ASGI entrypoint for the SunTime API."""

from suntime.api.app import create_app
from suntime.containers import build_container

app = create_app(build_container())
