"""
API route handlers.
"""

from catalog.api.routers import movies, system

__all__ = ["movies", "system"]
