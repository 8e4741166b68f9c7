# user_crud/main.py
from __future__ import annotations

import structlog
from fastapi import FastAPI

from user_crud import __version__
from user_crud.config import Settings, get_settings
from user_crud.db.session import check_connection, create_db_engine, create_session_factory
from user_crud.observability.logging import configure_logging
from user_crud.observability.metrics import router as observability_router
from user_crud.observability.middleware import register_exception_handlers, register_request_middleware
from user_crud.routers.health import router as health_router
from user_crud.routers.users import router as users_router

logger = structlog.get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="User CRUD API", version=__version__)

    # The pool belongs to this app instance; handlers reach it through get_db.
    engine = create_db_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    register_request_middleware(app)
    register_exception_handlers(app)

    @app.on_event("startup")
    def _verify_database() -> None:
        if not settings.DB_CONNECT_ON_STARTUP:
            return
        # Propagates so the server refuses to start without a usable pool.
        check_connection(engine)
        logger.info("db.connected", pool_size=settings.DB_POOL_SIZE)

    @app.on_event("shutdown")
    def _dispose_pool() -> None:
        engine.dispose()

    app.include_router(health_router)
    app.include_router(observability_router)
    app.include_router(users_router)

    return app

