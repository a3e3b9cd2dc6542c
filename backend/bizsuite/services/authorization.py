"""Per-request authorization composition.

Every endpoint runs, in order, short-circuiting on the first denial:
  1. authorize(session, resource, action)   -> UNAUTHENTICATED / PERMISSION_DENIED
  2. (record endpoints) fetch the record, then authorize_record(session, record)
                                            -> NOT_FOUND / SCOPE_DENIED
Nothing is returned or mutated until every applicable step is ALLOWED. Decisions are
never cached; each request is evaluated from its own token.

enforce() is the single place a denial becomes an HTTP failure. NOT_FOUND and
SCOPE_DENIED produce the same 404 body so callers outside a tenant cannot probe for
the existence of its records; the distinction survives in logs and the security audit.
"""
from __future__ import annotations
from typing import Optional
from flask import abort, current_app
from bizsuite.services.policy import ALLOWED, AuthzResult, Denial, check_tenant_scope, has_permission
from bizsuite.services.audit import record_security_event


def authorize(session, resource, action) -> AuthzResult:
    if session is None:
        return AuthzResult(Denial.UNAUTHENTICATED, 'authentication required')
    if not has_permission(session.role, resource, action):
        return AuthzResult(Denial.PERMISSION_DENIED, 'missing permission')
    return ALLOWED


def authorize_record(session, record) -> AuthzResult:
    """Tenant check for a fetched record; a missing record is NOT_FOUND before scope is considered."""
    if record is None:
        return AuthzResult(Denial.NOT_FOUND, 'record not found')
    return check_tenant_scope(session, record.group_id, getattr(record, 'company_id', None))


def _not_found_detail(resource) -> str:
    label = getattr(resource, 'value', resource)
    return f'{label} not found' if label else 'Not found'


def enforce(result: AuthzResult, session=None, resource=None, action=None, entity_id: Optional[object] = None) -> None:
    """Abort the request for a denied result; no-op when allowed."""
    if result.allowed:
        return
    denial = result.denial
    current_app.logger.warning(
        'Authorization denied: kind=%s principal=%s role=%s resource=%s action=%s entity_id=%s reason=%s',
        denial.value,
        session.principal_id if session else None,
        getattr(session.role, 'value', session.role) if session else None,
        getattr(resource, 'value', resource),
        getattr(action, 'value', action),
        entity_id,
        result.reason,
    )
    if denial is not Denial.NOT_FOUND and current_app.config.get('AUTHZ_AUDIT_DENIALS', True):
        record_security_event(denial.value, session, resource, action,
                              {'reason': result.reason, 'entity_id': entity_id})
    if denial is Denial.UNAUTHENTICATED:
        abort(401, description='Authentication required')
    if denial is Denial.PERMISSION_DENIED:
        abort(403, description='Missing permission')
    abort(404, description=_not_found_detail(resource))
