# adpc/models/audit.py
import uuid

from sqlalchemy import Column, DateTime, Integer, String, Text, Uuid, func

from adpc.db.base_class import Base
from adpc.models.submission import JSONType


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id         = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    request_id = Column(String, nullable=True, index=True)
    action     = Column(String, nullable=False)          # "POST /api/v1/submissions"
    ip         = Column(String, nullable=True)
    user_agent = Column(Text, nullable=True)
    status_code = Column(Integer, nullable=True)
    payload    = Column(JSONType, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
