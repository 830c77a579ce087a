"""HTTP adapter exposing the conversation engine to the browser front-end."""

from .app import create_app

__all__ = ["create_app"]
