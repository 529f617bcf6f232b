"""ASGI entrypoint for the team wrapped API."""

import os

import uvicorn

from team_wrapped.api.app import create_app
from team_wrapped.containers import build_container

app = create_app(build_container())


def main() -> None:
    """Serve the API with uvicorn."""
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
