from concurrent.futures import ThreadPoolExecutor
from bizsuite.constants.permissions import Action, Resource, Role
from bizsuite.services.policy import check_tenant_scope, has_permission
from bizsuite.services.session import Session


def _evaluate(session):
    decisions = tuple(has_permission(session.role, res, a) for res in Resource for a in Action)
    scope = tuple(check_tenant_scope(session, g).allowed for g in ('grp-a', 'grp-b', 'grp-c'))
    return decisions, scope


def test_concurrent_checks_do_not_interfere():
    sessions = [
        Session(f'user-{i}', list(Role)[i % len(Role)], ('grp-a', 'grp-b', 'grp-c')[i % 3])
        for i in range(60)
    ]
    expected = [_evaluate(s) for s in sessions]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(_evaluate, sessions * 5))
    assert results == expected * 5
