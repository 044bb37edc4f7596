# adpc/core/config.py
from __future__ import annotations

from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT_DIR = Path(__file__).resolve().parents[2]
ENV_FILE = ROOT_DIR / ".env"

# Ejes DISC, en orden de prioridad para desempates del perfil primario
ADPC_DIMENSIONS: tuple[str, ...] = ("DOMINANCIA", "INFLUENCIA", "ESTABILIDADE", "CONFORMIDADE")
FALLBACK_PROFILE = "EQUILIBRADO"
UNKNOWN_DIMENSION = "UNKNOWN"
SUBMISSION_STATUS_PROCESSED = "PROCESSED"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # App
    APP_NAME: str = "ADPC Assessment API"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Auth por API key (header X-API-Key)
    API_KEY: str = "change-me"

    # Cuestionario
    DEFAULT_VERSION: str = "v1"

    CORS_ORIGINS: str = ""

    # DB URLs (acepta cualquiera de las dos)
    DATABASE_URL: str | None = None
    SQLALCHEMY_DATABASE_URI: str | None = None

    @property
    def cors_list(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def db_url(self) -> str:
        """
        URL unificada para SQLAlchemy. Acepta DATABASE_URL o SQLALCHEMY_DATABASE_URI.
        Fuerza sslmode=require para Supabase si faltara.
        """
        url = (self.DATABASE_URL or self.SQLALCHEMY_DATABASE_URI or "").strip()
        if not url:
            raise ValueError("Define DATABASE_URL o SQLALCHEMY_DATABASE_URI en variables de entorno.")
        if ("supabase.co" in url or "supabase.com" in url) and "sslmode=" not in url:
            sep = "&" if "?" in url else "?"
            url = f"{url}{sep}sslmode=require"
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
