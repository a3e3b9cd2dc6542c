from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from sqlalchemy import false, or_
from bizsuite.constants.permissions import (
    PERMISSION_MATRIX, Matrix, RoleLike, ResourceLike, ActionLike, normalize_resource,
)


class Denial(str, Enum):
    UNAUTHENTICATED = 'UNAUTHENTICATED'
    PERMISSION_DENIED = 'PERMISSION_DENIED'
    NOT_FOUND = 'NOT_FOUND'
    SCOPE_DENIED = 'SCOPE_DENIED'


@dataclass(frozen=True)
class AuthzResult:
    """Outcome of an authorization step: either allowed (denial is None) or one denial kind."""
    denial: Optional[Denial] = None
    reason: str = ''

    @property
    def allowed(self) -> bool:
        return self.denial is None


ALLOWED = AuthzResult()


def has_permission(role: RoleLike, resource: ResourceLike, action: ActionLike, matrix: Matrix = PERMISSION_MATRIX) -> bool:
    """Role-level decision: may `role` perform `action` on `resource`?

    Unknown roles, unknown resources and unlisted actions are all denied. Never raises.
    """
    canonical = normalize_resource(resource)
    try:
        role_perms = matrix.get(role)
        if not role_perms:
            return False
        actions = role_perms.get(canonical)
        if not actions:
            return False
        return action in actions
    except TypeError:
        return False


def can_access(role: RoleLike, resource: ResourceLike, action: ActionLike) -> bool:
    return has_permission(role, resource, action)


def check_tenant_scope(session, owner_group_id, owner_company_id=None) -> AuthzResult:
    """Compare the caller's tenant with the owning tenant of an already fetched record.

    The group must match exactly. A company-bound session is additionally pinned to its
    company whenever the record names one; group-level sessions span every company of the group.
    A session without a group id is outside every tenant.
    """
    if session.tenant_group_id is None or owner_group_id is None:
        return AuthzResult(Denial.SCOPE_DENIED, 'tenant group missing')
    if str(session.tenant_group_id) != str(owner_group_id):
        return AuthzResult(Denial.SCOPE_DENIED, 'tenant group mismatch')
    if session.tenant_company_id is not None and owner_company_id is not None:
        if str(session.tenant_company_id) != str(owner_company_id):
            return AuthzResult(Denial.SCOPE_DENIED, 'tenant company mismatch')
    return ALLOWED


def filter_query_by_tenant(query, model, session):
    """Restrict a select() over a tenant-owned model to rows the session may see."""
    if session.tenant_group_id is None:
        return query.where(false())
    query = query.where(model.group_id == str(session.tenant_group_id))
    if session.tenant_company_id is not None:
        query = query.where(or_(model.company_id == str(session.tenant_company_id), model.company_id.is_(None)))
    return query
