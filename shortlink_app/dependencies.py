"""
FastAPI dependencies for dependency injection.

The store, persistence and URL service are built once by the
composition root (main.create_app) and kept on app.state; these
helpers hand them to routes.

Pattern: Dependency Injection
- No module-level store: each app owns exactly one
- Easy to test (build an app around a tmp_path store)
"""

from fastapi import Request

from shortlink_app.services.url_service import URLService


def get_url_service(request: Request) -> URLService:
    """Get the application's URLService."""
    return request.app.state.url_service
