"""FastAPI backend for the solar heating calculator."""

from .app import create_app

__all__ = [
    "create_app",
]
