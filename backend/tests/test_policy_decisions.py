import copy
from bizsuite.constants.permissions import (
    Action, Resource, Role, PERMISSION_TABLE, build_matrix,
)
from bizsuite.services.policy import has_permission


def test_unlisted_triples_are_denied():
    sparse = build_matrix({'MANAGER': {'CLIENT': ['READ']}})
    for role in Role:
        for res in Resource:
            for action in Action:
                expected = (role, res, action) == (Role.MANAGER, Resource.CLIENT, Action.READ)
                assert has_permission(role, res, action, matrix=sparse) is expected


def test_role_without_matrix_entry_is_denied_everything():
    for res in Resource:
        for action in Action:
            assert has_permission('AUDITOR', res, action) is False
            assert has_permission(None, res, action) is False


def test_plain_strings_match_enum_members():
    assert has_permission('ADMIN', 'INVOICE', 'DELETE') is True
    assert has_permission('ACCOUNTANT', 'PAYMENT', 'CREATE') is True
    assert has_permission('ACCOUNTANT', 'PAYMENT', 'DELETE') is False


def test_unknown_action_is_denied():
    assert has_permission(Role.ADMIN, Resource.CLIENT, 'PURGE') is False


def test_decisions_never_raise_on_odd_input():
    assert has_permission(['ADMIN'], Resource.CLIENT, Action.READ) is False
    assert has_permission(Role.ADMIN, {'CLIENT': 1}, Action.READ) is False
    assert has_permission(Role.ADMIN, Resource.CLIENT, ['READ']) is False


def test_changing_one_entry_leaves_every_other_pair_untouched():
    table = copy.deepcopy(PERMISSION_TABLE)
    table['VIEWER']['BOAT'] = ['READ', 'UPDATE', 'EXPORT']
    changed = build_matrix(table)
    baseline = build_matrix(PERMISSION_TABLE)
    for role in Role:
        for res in Resource:
            if (role, res) == (Role.VIEWER, Resource.BOAT):
                continue
            for action in Action:
                assert has_permission(role, res, action, matrix=changed) == has_permission(role, res, action, matrix=baseline)
    assert has_permission(Role.VIEWER, Resource.BOAT, Action.UPDATE, matrix=changed)
    assert not has_permission(Role.VIEWER, Resource.BOAT, Action.UPDATE, matrix=baseline)


def test_repeated_calls_are_stable():
    first = [has_permission(r, res, a) for r in Role for res in Resource for a in Action]
    second = [has_permission(r, res, a) for r in Role for res in Resource for a in Action]
    assert first == second
