"""
FastAPI dependencies for the per-application stores.

The stores live on app.state (created in main.create_app) so each app
instance, including each test app, has its own isolated state.
"""

from fastapi import Request

from app.services.store import SessionStore, UserRegistry


def get_session_store(request: Request) -> SessionStore:
    """Session store of the running application."""
    return request.app.state.sessions


def get_user_registry(request: Request) -> UserRegistry:
    """User registry of the running application."""
    return request.app.state.users
