from tests.test_utils_seed import auth_headers, unique_group, ensure_invoice


def test_missing_token_is_401(client):
    resp = client.get('/sales/invoices')
    assert resp.status_code == 401
    assert resp.get_json()['error']['status'] == 401
    assert client.get('/iam/me').status_code == 401


def test_viewer_reads_but_cannot_write(client, app_instance):
    group = unique_group()
    inv = ensure_invoice(group)
    viewer = auth_headers(app_instance, 'VIEWER', group)
    assert client.get(f'/sales/invoices/{inv.id}', headers=viewer).status_code == 200
    assert client.patch(f'/sales/invoices/{inv.id}', json={'status': 'PAID'}, headers=viewer).status_code == 403
    denied = client.post('/sales/invoices', json={'number': 'X'}, headers=viewer)
    assert denied.status_code == 403
    assert denied.get_json()['error']['detail'] == 'Missing permission'


def test_role_outside_matrix_is_denied_everywhere(client, app_instance):
    group = unique_group()
    inv = ensure_invoice(group)
    headers = auth_headers(app_instance, 'AUDITOR', group)
    assert client.get('/sales/invoices', headers=headers).status_code == 403
    assert client.get(f'/sales/invoices/{inv.id}', headers=headers).status_code == 403
    assert client.get('/purchases/orders', headers=headers).status_code == 403
    me = client.get('/iam/me', headers=headers)
    assert me.status_code == 200
    assert me.get_json()['permissions'] == {}


def test_role_change_takes_effect_on_next_request(client, app_instance):
    group = unique_group()
    inv = ensure_invoice(group)
    as_admin = auth_headers(app_instance, 'ADMIN', group, principal='same-person')
    as_viewer = auth_headers(app_instance, 'VIEWER', group, principal='same-person')
    assert client.patch(f'/sales/invoices/{inv.id}', json={'amount_cents': 1}, headers=as_admin).status_code == 200
    assert client.patch(f'/sales/invoices/{inv.id}', json={'amount_cents': 2}, headers=as_viewer).status_code == 403


def test_iam_me_reports_session_and_matrix(client, app_instance):
    headers = auth_headers(app_instance, 'STOCK', 'grp-me', 'co-me', principal='u-42')
    body = client.get('/iam/me', headers=headers).get_json()
    assert body['principal_id'] == 'u-42'
    assert body['role'] == 'STOCK'
    assert body['tenant_group_id'] == 'grp-me' and body['tenant_company_id'] == 'co-me'
    assert body['permissions']['STOCK'] == ['CREATE', 'READ', 'UPDATE']
    assert body['permissions']['USER'] == []


def test_role_matrix_view_requires_manage_users(client, app_instance):
    group = unique_group()
    admin = auth_headers(app_instance, 'ADMIN', group)
    manager = auth_headers(app_instance, 'MANAGER', group)
    assert client.get('/iam/roles', headers=manager).status_code == 403
    assert client.get('/iam/roles', headers=admin).get_json()['data'] == ['ADMIN', 'MANAGER', 'STOCK', 'ACCOUNTANT', 'VIEWER']
    view = client.get('/iam/roles/accountant/permissions', headers=admin).get_json()
    assert view['role'] == 'ACCOUNTANT'
    assert view['permissions']['INVOICE'] == ['CREATE', 'READ', 'UPDATE']
    assert client.get('/iam/roles/nobody/permissions', headers=admin).status_code == 404


def _unauthenticated_events():
    from sqlalchemy import func, select
    from bizsuite import get_db
    from bizsuite.models.audit import SecurityAuditLog
    stmt = select(func.count()).select_from(SecurityAuditLog).where(SecurityAuditLog.event_type == 'UNAUTHENTICATED')
    return get_db().execute(stmt).scalar_one()


def _assert_rejected_as_unauthenticated(client, headers):
    before = _unauthenticated_events()
    resp = client.get('/sales/invoices', headers=headers)
    assert resp.status_code == 401
    body = resp.get_json()
    assert body['error']['status'] == 401
    assert body['error']['detail'] == 'Authentication required'
    assert _unauthenticated_events() == before + 1


def test_tampered_token_is_401(client, app_instance):
    headers = auth_headers(app_instance, 'ADMIN', unique_group())
    token = headers['Authorization'][len('Bearer '):]
    tail = 'AAA' if not token.endswith('AAA') else 'BBB'
    _assert_rejected_as_unauthenticated(client, {'Authorization': f'Bearer {token[:-3]}{tail}'})


def test_garbage_token_is_401(client):
    _assert_rejected_as_unauthenticated(client, {'Authorization': 'Bearer not-a-jwt'})


def test_expired_token_is_401(client, app_instance):
    from datetime import timedelta
    from bizsuite.services.session import Session, issue_access_token
    with app_instance.app_context():
        token = issue_access_token(Session('late-user', 'ADMIN', unique_group()), expires_delta=timedelta(minutes=-5))
    _assert_rejected_as_unauthenticated(client, {'Authorization': f'Bearer {token}'})


def test_token_signed_with_other_key_is_401(client, app_instance):
    from flask_jwt_extended import create_access_token
    with app_instance.app_context():
        original_key = app_instance.config['JWT_SECRET_KEY']
        app_instance.config['JWT_SECRET_KEY'] = 'someone-elses-key-of-sufficient-length'
        try:
            token = create_access_token(identity='forger', additional_claims={'role': 'ADMIN', 'tenant_group_id': 'g'})
        finally:
            app_instance.config['JWT_SECRET_KEY'] = original_key
    _assert_rejected_as_unauthenticated(client, {'Authorization': f'Bearer {token}'})
