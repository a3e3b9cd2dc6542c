from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, JSON, DateTime, func
from typing import Optional

from .records import Base  # reuse same metadata


class SecurityAuditLog(Base):
    __tablename__ = 'security_audit_logs'
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    principal_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    event_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    role: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    resource: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    action: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    tenant_group_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    detail: Mapped[dict] = mapped_column(JSON, default=dict)
    created_at: Mapped[str] = mapped_column(DateTime(timezone=True), server_default=func.now())
