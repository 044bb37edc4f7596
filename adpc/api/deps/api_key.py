# adpc/api/deps/api_key.py
import secrets
from typing import Optional

from fastapi import Header, HTTPException

from adpc.core.config import get_settings


def require_api_key(x_api_key: Optional[str] = Header(None, alias="X-API-Key")) -> str:
    """
    Exige el header X-API-Key igual a settings.API_KEY.
    """
    expected = get_settings().API_KEY
    if not x_api_key or not secrets.compare_digest(x_api_key, expected):
        raise HTTPException(status_code=401, detail="No autorizado: API Key inválida o ausente")
    return x_api_key
