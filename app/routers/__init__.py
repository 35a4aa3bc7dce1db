"""
API routers package.
"""

from app.routers import health, sessions

__all__ = [
    "health",
    "sessions",
]
