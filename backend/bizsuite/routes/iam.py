from flask import Blueprint, abort, g
from bizsuite.constants.permissions import Role, get_permissions
from bizsuite.decorators.auth import require_permission, require_session

iam_bp = Blueprint('iam', __name__)


def _matrix_json(role):
    return {res.value: sorted(a.value for a in actions) for res, actions in get_permissions(role).items()}


@iam_bp.get('/me')
@require_session
def me():
    session = g.authz_session
    role = getattr(session.role, 'value', session.role)
    return {
        'principal_id': session.principal_id,
        'role': role,
        'tenant_group_id': session.tenant_group_id,
        'tenant_company_id': session.tenant_company_id,
        'permissions': _matrix_json(session.role),
    }


@iam_bp.get('/roles')
@require_permission('USERS', 'MANAGE_USERS')
def list_roles():
    return {'data': [r.value for r in Role]}


@iam_bp.get('/roles/<role_name>/permissions')
@require_permission('USERS', 'MANAGE_USERS')
def role_permissions(role_name: str):
    try:
        role = Role(role_name.upper())
    except ValueError:
        abort(404, description='Role not found')
    return {'role': role.value, 'permissions': _matrix_json(role)}
