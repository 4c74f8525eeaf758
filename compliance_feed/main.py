import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from compliance_feed.application.engine import NotificationEngine
from compliance_feed.config import get_settings
from compliance_feed.interfaces.api.routes import register_routes


def create_app(notification_engine: NotificationEngine | None = None) -> FastAPI:
    """Build the FastAPI application serving the notification feed.

    Without an explicit engine, one backed by the configured database and
    the remote vendor API is created at startup.
    """

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from compliance_feed.infrastructure.database import (
            SessionLocal,
            engine,
            initialize_database,
        )

        owns_database = notification_engine is None
        if owns_database:
            initialize_database()
            app.state.notification_engine = NotificationEngine(SessionLocal)
        else:
            app.state.notification_engine = notification_engine
        try:
            yield
        finally:
            app.state.notification_engine.detector.stop()
            if owns_database:
                engine.dispose()

    app = FastAPI(title="Compliance notification feed", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app
