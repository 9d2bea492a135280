"""FastAPI dependencies shared by the endpoint modules."""

from fastapi import Request

from users_api.app.services.user_store import UserStore


def get_user_store(request: Request) -> UserStore:
    """Return the store created for this application by ``create_app``."""
    return request.app.state.user_store
