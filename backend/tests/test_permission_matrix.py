import pytest
from bizsuite.constants.permissions import (
    Action, Resource, Role, PERMISSION_MATRIX, PERMISSION_TABLE, build_matrix, get_permissions,
)
from bizsuite.services.policy import has_permission


def test_every_role_declares_every_canonical_resource():
    for role in Role:
        assert set(PERMISSION_MATRIX[role].keys()) == set(Resource), role


@pytest.mark.parametrize('role', list(Role))
def test_matrix_returns_exactly_the_declared_actions(role):
    for res in Resource:
        declared = {Action(a) for a in PERMISSION_TABLE[role.value][res.value]}
        granted = {a for a in Action if has_permission(role, res, a)}
        assert granted == declared, (role, res)


def test_admin_may_delete_clients_viewer_may_not():
    assert has_permission(Role.ADMIN, 'Client', Action.DELETE) is True
    assert has_permission(Role.VIEWER, 'Client', Action.DELETE) is False


def test_stock_role_has_no_user_permissions():
    assert has_permission(Role.STOCK, 'User', Action.MANAGE_USERS) is False
    assert all(not has_permission(Role.STOCK, Resource.USER, a) for a in Action)


def test_no_inheritance_between_roles():
    # Admin-only grants must not leak into Manager
    assert has_permission(Role.ADMIN, Resource.SALE, Action.DELETE)
    assert not has_permission(Role.MANAGER, Resource.SALE, Action.DELETE)
    assert has_permission(Role.ACCOUNTANT, Resource.INVOICE, Action.CREATE)
    assert not has_permission(Role.STOCK, Resource.INVOICE, Action.CREATE)


def test_matrix_is_read_only():
    with pytest.raises(TypeError):
        PERMISSION_MATRIX[Role.VIEWER] = {}
    with pytest.raises(TypeError):
        PERMISSION_MATRIX[Role.VIEWER][Resource.CLIENT] = frozenset(Action)
    assert isinstance(PERMISSION_MATRIX[Role.VIEWER][Resource.CLIENT], frozenset)


def test_build_matrix_rejects_unknown_codes():
    with pytest.raises(ValueError):
        build_matrix({'SUPERUSER': {'CLIENT': ['READ']}})
    with pytest.raises(ValueError):
        build_matrix({'VIEWER': {'WEBHOOK': ['READ']}})
    with pytest.raises(ValueError):
        build_matrix({'VIEWER': {'CLIENT': ['PURGE']}})


def test_get_permissions_for_known_and_unknown_roles():
    admin = get_permissions(Role.ADMIN)
    assert Action.MANAGE_USERS in admin[Resource.USER]
    assert get_permissions('ADMIN') == admin
    assert dict(get_permissions('AUDITOR')) == {}
    assert dict(get_permissions(None)) == {}
