"""Per-request authenticated principal context.

Sessions are built from already verified access-token claims; the authorization core only reads them.
Claims layout (set by the issuing side):
  sub               principal id (string)
  role              one of constants.permissions.Role; any other string is kept and denied by the matrix
  tenant_group_id   owning group of the principal's data
  tenant_company_id optional company inside the group; absent for group-level principals
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from flask import current_app
from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from bizsuite.constants.permissions import Role, RoleLike


@dataclass(frozen=True)
class Session:
    principal_id: str
    role: RoleLike
    tenant_group_id: Optional[str]
    tenant_company_id: Optional[str] = None


def _coerce_role(raw: Any) -> RoleLike:
    try:
        return Role(raw)
    except (ValueError, TypeError):
        return raw


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None or value == '' else str(value)


def session_from_claims(identity: Any, claims: Mapping[str, Any]) -> Optional[Session]:
    if identity is None:
        return None
    return Session(
        principal_id=str(identity),
        role=_coerce_role(claims.get('role')),
        tenant_group_id=_opt_str(claims.get('tenant_group_id')),
        tenant_company_id=_opt_str(claims.get('tenant_company_id')),
    )


def current_session() -> Optional[Session]:
    """Return the Session for the current request, or None when no usable bearer token was sent.

    Malformed, forged, expired or wrong-type tokens establish no Session, so they end up on the
    same UNAUTHENTICATED path as a missing token.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError) as exc:
        current_app.logger.info("Rejected bearer token: %s", exc)
        return None
    return session_from_claims(get_jwt_identity(), get_jwt() or {})


def issue_access_token(session: Session, **kwargs) -> str:
    """Mint an access token carrying `session` (dev tooling and tests; production tokens come from the identity provider)."""
    role = session.role.value if isinstance(session.role, Role) else session.role
    return create_access_token(identity=session.principal_id, additional_claims={
        'role': role,
        'tenant_group_id': session.tenant_group_id,
        'tenant_company_id': session.tenant_company_id,
    }, **kwargs)
