"""API router factory functions."""
from .history import create_history_router
from .systems import create_systems_router

__all__ = [
    "create_history_router",
    "create_systems_router",
]
