from __future__ import annotations
from flask import Blueprint, request, abort, g
from sqlalchemy import select
from bizsuite import get_db
from bizsuite.constants.permissions import Action, Resource
from bizsuite.models.records import Invoice
from bizsuite.decorators.auth import require_permission
from bizsuite.services.authorization import authorize_record, enforce
from bizsuite.services.policy import check_tenant_scope, filter_query_by_tenant
from bizsuite.utils.validation import json_body, validate_status, parse_cents, optional_id

invoices_bp = Blueprint('invoices', __name__)


@invoices_bp.get('/invoices')
@require_permission(Resource.INVOICE, Action.READ)
def list_invoices():
    q = filter_query_by_tenant(select(Invoice), Invoice, g.authz_session)
    status = request.args.get('status')
    if status:
        q = q.where(Invoice.status == validate_status(status, Invoice.ALL_STATUSES))
    rows = get_db().execute(q.order_by(Invoice.id.desc())).scalars().all()
    return {'data': [_invoice_json(i) for i in rows]}


@invoices_bp.post('/invoices')
@require_permission(Resource.INVOICE, Action.CREATE)
def create_invoice():
    session = g.authz_session
    data = json_body()
    number = data.get('number')
    if not number:
        abort(400, description='number required')
    amount = parse_cents(data.get('amount_cents'), 'amount_cents')
    # Owning tenant defaults to the caller's; an explicit one must still be in scope
    group_id = optional_id(data.get('group_id')) or session.tenant_group_id
    company_id = optional_id(data.get('company_id')) or session.tenant_company_id
    enforce(check_tenant_scope(session, group_id, company_id), session, Resource.INVOICE, Action.CREATE)
    inv = Invoice(number=number, amount_cents=amount, group_id=group_id, company_id=company_id,
                  created_by=session.principal_id)
    db = get_db()
    db.add(inv); db.commit()
    return _invoice_json(inv), 201


@invoices_bp.get('/invoices/<int:invoice_id>')
@require_permission(Resource.INVOICE, Action.READ)
def get_invoice(invoice_id: int):
    return _invoice_json(_load_scoped(invoice_id, Action.READ))


@invoices_bp.patch('/invoices/<int:invoice_id>')
@require_permission(Resource.INVOICE, Action.UPDATE)
def update_invoice(invoice_id: int):
    inv = _load_scoped(invoice_id, Action.UPDATE)
    data = json_body()
    if 'status' in data:
        inv.status = validate_status(data['status'], Invoice.ALL_STATUSES)
    if 'amount_cents' in data:
        inv.amount_cents = parse_cents(data['amount_cents'], 'amount_cents')
    get_db().commit()
    return _invoice_json(inv)


@invoices_bp.delete('/invoices/<int:invoice_id>')
@require_permission(Resource.INVOICE, Action.DELETE)
def delete_invoice(invoice_id: int):
    inv = _load_scoped(invoice_id, Action.DELETE)
    db = get_db()
    db.delete(inv); db.commit()
    return {'data': {'success': True}}


def _load_scoped(invoice_id: int, action: Action) -> Invoice:
    session = g.authz_session
    inv = get_db().execute(select(Invoice).where(Invoice.id == invoice_id)).scalar_one_or_none()
    enforce(authorize_record(session, inv), session, Resource.INVOICE, action, entity_id=invoice_id)
    return inv


def _invoice_json(i: Invoice):
    return {
        'id': i.id,
        'number': i.number,
        'amount_cents': i.amount_cents,
        'status': i.status,
        'group_id': i.group_id,
        'company_id': i.company_id,
    }
