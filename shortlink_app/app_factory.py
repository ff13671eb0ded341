"""
Application factory.

Building the app has startup side effects (logging setup, loading the
store), so nothing here runs at import time; main.py and the tests call
create_app() themselves.
"""

from typing import Optional

from fastapi import FastAPI
from shortlink_app.config import Settings, settings as default_settings
from shortlink_app.logging_config import setup_logging, get_logger
from shortlink_app.api.v1 import urls, redirect, metrics
from shortlink_app.persistence.factory import PersistenceFactory, PersistenceBackend
from shortlink_app.services.short_code_factory import ShortCodeFactory, ShortCodeStrategyType
from shortlink_app.services.url_service import URLService
from shortlink_app.store.url_store import URLStore, CollisionPolicy

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Composition root: build the store, its persistence and the URL
    service, load persisted entries, and wire the routers.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    strategy = ShortCodeFactory.create_strategy(
        ShortCodeStrategyType(settings.short_code_strategy),
        settings.short_code_bytes
    )
    store = URLStore(strategy, collision_policy=CollisionPolicy(settings.collision_policy))
    persistence = PersistenceFactory.create(PersistenceBackend(settings.persistence_backend), settings)
    url_service = URLService(store, persistence, metrics_top_n=settings.metrics_top_n)

    # Startup load: a missing or unreadable store means an empty store
    loaded = url_service.load()
    logger.info("Starting %s with %d stored URLs", settings.app_name, loaded)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A deterministic URL shortener with hit counting built with FastAPI",
        debug=settings.debug
    )
    app.state.url_service = url_service

    @app.get("/")
    def read_root():
        """Root endpoint with API information"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "environment": settings.environment,
            "stored_urls": len(store)
        }

    ######## Include routers
    app.include_router(urls.router)
    app.include_router(redirect.router)
    app.include_router(metrics.router)

    return app
