"""API package for the stats cache proxy."""

from statscache.api.app import app, create_app
from statscache.api.routes import router

__all__ = ["app", "create_app", "router"]
