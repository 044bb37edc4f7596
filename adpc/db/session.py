# adpc/db/session.py
from __future__ import annotations

import logging
from typing import Any, Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from adpc.core.logging import mask_url

logger = logging.getLogger(__name__)


def build_engine(db_url: str, **kwargs: Any) -> Engine:
    if db_url.startswith("sqlite"):
        # SQLite no admite las opciones de pool de Postgres
        return create_engine(db_url, **kwargs)

    options: dict[str, Any] = dict(
        pool_size=5,              # 5 conexiones concurrentes
        max_overflow=10,          # Hasta 15 total en picos
        pool_timeout=30,          # 30s para obtener conexión
        pool_recycle=1800,        # Recicla cada 30 min
        pool_pre_ping=True,       # Verifica que la conexión esté viva
        echo=False,
    )
    options.update(kwargs)
    return create_engine(db_url, **options)


class Database:
    """
    Handle de almacenamiento inyectado: engine + fábrica de sesiones.
    Se abre en el arranque del proceso (lifespan) y se cierra con dispose().
    """

    def __init__(self, db_url: str | None = None, *, engine: Engine | None = None, **engine_kwargs: Any):
        if engine is None:
            if not db_url:
                raise ValueError("Database requiere db_url o engine")
            logger.info("Using database %s", mask_url(db_url))
            engine = build_engine(db_url, **engine_kwargs)
        self.engine = engine
        self.SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def session(self) -> Session:
        return self.SessionLocal()

    def check_connection(self) -> bool:
        """Verifica que la conexión funcione"""
        try:
            with self.engine.connect() as conn:
                row = conn.execute(text("SELECT 1")).fetchone()
                return bool(row and row[0] == 1)
        except SQLAlchemyError:
            logger.exception("Database connection check failed")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency para FastAPI"""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
