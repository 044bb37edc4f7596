# adpc/services/audit.py
from __future__ import annotations
from typing import Any, Optional

from fastapi import Request
from sqlalchemy.orm import Session
from adpc.models.audit import AuditLog

def audit_log(
    db: Session,
    *,
    action: str,
    request_id: Optional[str] = None,
    status_code: Optional[int] = None,
    payload: Optional[dict[str, Any]] = None,
    request: Optional[Request] = None,
) -> None:
    ip = request.client.host if (request and request.client) else None
    ua = request.headers.get("user-agent") if request else None
    db.add(AuditLog(
        request_id=request_id,
        action=action,
        ip=ip,
        user_agent=ua,
        status_code=status_code,
        payload=payload,
    ))
    # No hacemos commit aquí: lo hace quien abre la sesión.
