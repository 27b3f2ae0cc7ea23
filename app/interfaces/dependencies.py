"""
Access to the application's service container from request handlers.
"""

from fastapi import Request

from app.core.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    """Return the container owned by the running application."""
    return request.app.state.container
