from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_database_settings, get_logging_settings
from app.schemas.health import DatabaseHealthResponse, HealthResponse
from db.session import SessionLocal, get_db


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = get_logging_settings().level
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _ping_database(db: Session) -> None:
    db.execute(text("SELECT 1"))


def _database_health(db: Session) -> DatabaseHealthResponse:
    try:
        _ping_database(db)
    except SQLAlchemyError as exc:
        logging.getLogger(__name__).warning("Database health check failed: %s", exc)
        return DatabaseHealthResponse(connected=False, error=str(exc))
    return DatabaseHealthResponse(connected=True)


def _check_db() -> None:
    """Open a session and run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    try:
        db = SessionLocal()
        try:
            _ping_database(db)
        finally:
            db.close()
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


def _ensure_schema() -> None:
    """
    Create missing tables when DB_AUTO_CREATE_SCHEMA is enabled.
    """

    import db.models  # noqa: F401 registers ORM models on Base.metadata
    from db.base import Base
    from db.session import get_engine

    log = logging.getLogger(__name__)
    if not get_database_settings().auto_create_schema:
        log.info("Schema auto-creation disabled")
        return
    Base.metadata.create_all(bind=get_engine())
    log.info("Database schema ensured (%d tables)", len(Base.metadata.tables))


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    _check_db()
    logging.getLogger(__name__).info("Database connectivity confirmed")
    _ensure_schema()
    yield


def create_app(*, check_database: bool = True) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()

    application = FastAPI(
        title="Sales Import API",
        version="1.0.0",
        lifespan=_lifespan if check_database else None,
    )

    from app.api.routers import reporting_router, sales_import_router

    application.include_router(sales_import_router)
    application.include_router(reporting_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck(db: Session = Depends(get_db)) -> HealthResponse:
        database = _database_health(db)
        return HealthResponse(
            status="ok" if database.connected else "degraded",
            service="sales-import",
            database=database,
        )

    return application


app = create_app()
