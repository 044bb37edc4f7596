# adpc/core/logging.py
from __future__ import annotations

import json
import logging
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# request_id del request HTTP en curso; lo fija el middleware de auditoría
_REQUEST_ID: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# handler instalado por setup_logging; se reemplaza en llamadas sucesivas
_HANDLER: Optional[logging.Handler] = None

_RESERVED = {
    "msg", "args", "levelname", "levelno", "name", "pathname", "filename", "module",
    "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created", "msecs",
    "relativeCreated", "thread", "threadName", "processName", "process", "taskName",
    "request_id",
}


def set_request_id(request_id: Optional[str]) -> None:
    _REQUEST_ID.set(request_id)


def get_request_id() -> Optional[str]:
    return _REQUEST_ID.get()


def mask_url(url: str) -> str:
    """Enmascara la contraseña en la URL para logs seguros"""
    return re.sub(r"://([^:/]+):([^@]+)@", r"://\1:***@", url)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _REQUEST_ID.get()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        # extras pasados con extra={...}
        for key, value in record.__dict__.items():
            if key in _RESERVED:
                continue
            try:
                json.dumps(value, ensure_ascii=False)
                payload[key] = value
            except TypeError:
                payload[key] = str(value)

        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_logs: bool = False) -> None:
    # Idempotente: solo sustituye su propio handler, respeta los demás
    global _HANDLER
    root = logging.getLogger()
    if _HANDLER is not None:
        root.removeHandler(_HANDLER)
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())

    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s request_id=%(request_id)s %(message)s"
        ))

    root.addHandler(handler)
    _HANDLER = handler
