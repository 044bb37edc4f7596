# adpc/main.py
from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from adpc.api.v1.endpoints import health, questions, submissions, users
from adpc.core.config import get_settings
from adpc.core.logging import get_request_id, set_request_id, setup_logging
from adpc.db.session import Database
from adpc.services.audit import audit_log

API_V1_PREFIX = "/api/v1"
# Rutas que no pasan por auditoría
UNAUDITED_PATHS = {"/", "/health", f"{API_V1_PREFIX}/healthz", f"{API_V1_PREFIX}/health/db"}

logger = logging.getLogger(__name__)


def _write_audit(database: Database, request: Request, request_id: str, status_code: int) -> None:
    with database.session() as db:
        try:
            audit_log(
                db,
                action=f"{request.method} {request.url.path}",
                request_id=request_id,
                status_code=status_code,
                payload={
                    "body": getattr(request.state, "audit_body", None),
                    "params": dict(request.path_params),
                    "query": dict(request.query_params),
                },
                request=request,
            )
            db.commit()
        except SQLAlchemyError:
            # La auditoría nunca bloquea la respuesta
            db.rollback()
            logger.exception("Error al grabar log de auditoría")


def create_app(database: Database | None = None) -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
        owned = app.state.database is None
        if owned:
            app.state.database = Database(settings.db_url)
        logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)
        try:
            yield
        finally:
            if owned:
                app.state.database.dispose()
                app.state.database = None

    app = FastAPI(
        title=settings.APP_NAME,
        description="API de evaluación conductual ADPC (DISC)",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_id_and_audit(request: Request, call_next):
        request_id = str(uuid.uuid4())
        set_request_id(request_id)
        # los endpoints con cuerpo lo dejan aquí para la auditoría
        request.state.audit_body = None
        response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        if request.url.path not in UNAUDITED_PATHS and app.state.database is not None:
            await run_in_threadpool(_write_audit, app.state.database, request, request_id, response.status_code)
        return response

    # Routers versionados
    app.include_router(health.router,      prefix=API_V1_PREFIX)
    app.include_router(questions.router,   prefix=API_V1_PREFIX)
    app.include_router(submissions.router, prefix=API_V1_PREFIX)
    app.include_router(users.router,       prefix=API_V1_PREFIX)

    # Rutas básicas fuera de /api/v1
    @app.get("/health")
    def health_root():
        return {
            "status": "ok",
            "message": "Sistema ADPC Online",
            "meta": {"request_id": get_request_id()},
        }

    @app.get("/")
    def root():
        return {
            "message": "ADPC Assessment API",
            "environment": settings.ENV,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "docs": "/docs",
            "api_v1": API_V1_PREFIX,
        }

    return app


app = create_app()
