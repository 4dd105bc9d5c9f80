"""ASGI entrypoint for the Chef AI API."""

from chef_ai.api.app import create_app
from chef_ai.containers import build_container

app = create_app(build_container())
