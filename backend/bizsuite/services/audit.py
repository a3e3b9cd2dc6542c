from __future__ import annotations
from typing import Any, Dict, Optional
from flask import current_app, has_request_context, request
from sqlalchemy.exc import SQLAlchemyError
from bizsuite import get_db
from bizsuite.models.audit import SecurityAuditLog


def _code(value: Any) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, 'value', None) or str(value)


def record_security_event(event_type: str, session=None, resource=None, action=None, detail: Optional[Dict[str, Any]] = None):
    """Persist a security event (authorization denials) and commit it.

    Parameters:
      event_type: denial kind e.g. PERMISSION_DENIED, SCOPE_DENIED
      session: caller Session, if one was established
      resource / action: what the endpoint declared
      detail: additional JSON-safe dictionary (shallow copied); the client address and
              user agent are added when called inside a request

    The request is being rejected anyway, so a failed write is logged and the rejection proceeds.
    """
    detail = dict(detail or {})
    if has_request_context():
        detail.setdefault('ip_address', request.remote_addr)
        detail.setdefault('user_agent', request.user_agent.string)
    db = get_db()
    log = SecurityAuditLog(
        principal_id=session.principal_id if session else None,
        event_type=event_type,
        role=_code(session.role) if session else None,
        resource=_code(resource),
        action=_code(action),
        tenant_group_id=session.tenant_group_id if session else None,
        detail=detail,
    )
    try:
        db.add(log)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        current_app.logger.exception('Failed to record security event %s', event_type)
        return None
    return log
