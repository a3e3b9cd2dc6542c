from __future__ import annotations
from flask import Blueprint, request, abort, g
from sqlalchemy import select
from bizsuite import get_db
from bizsuite.models.records import PurchaseOrder
from bizsuite.decorators.auth import require_permission
from bizsuite.services.authorization import authorize_record, enforce
from bizsuite.services.policy import check_tenant_scope, filter_query_by_tenant
from bizsuite.utils.validation import json_body, validate_status, parse_cents, optional_id

purchases_bp = Blueprint('purchases', __name__)

# Legacy spelling; resolved to PURCHASE by the alias table
RESOURCE = 'PURCHASE_ORDER'


@purchases_bp.get('/orders')
@require_permission(RESOURCE, 'READ')
def list_orders():
    q = filter_query_by_tenant(select(PurchaseOrder), PurchaseOrder, g.authz_session)
    status = request.args.get('status')
    if status:
        q = q.where(PurchaseOrder.status == validate_status(status, PurchaseOrder.ALL_STATUSES))
    rows = get_db().execute(q.order_by(PurchaseOrder.id.desc())).scalars().all()
    return {'data': [_order_json(po) for po in rows]}


@purchases_bp.post('/orders')
@require_permission(RESOURCE, 'CREATE')
def create_order():
    session = g.authz_session
    data = json_body()
    supplier_name = data.get('supplier_name')
    if not supplier_name:
        abort(400, description='supplier_name required')
    total = parse_cents(data.get('total_cents'), 'total_cents')
    group_id = optional_id(data.get('group_id')) or session.tenant_group_id
    company_id = optional_id(data.get('company_id')) or session.tenant_company_id
    enforce(check_tenant_scope(session, group_id, company_id), session, RESOURCE, 'CREATE')
    po = PurchaseOrder(supplier_name=supplier_name, total_cents=total, group_id=group_id,
                       company_id=company_id, created_by=session.principal_id)
    db = get_db()
    db.add(po); db.commit()
    return _order_json(po), 201


@purchases_bp.get('/orders/<int:order_id>')
@require_permission(RESOURCE, 'READ')
def get_order(order_id: int):
    return _order_json(_load_scoped(order_id, 'READ'))


@purchases_bp.post('/orders/<int:order_id>/approve')
@require_permission(RESOURCE, 'APPROVE')
def approve_order(order_id: int):
    po = _load_scoped(order_id, 'APPROVE')
    if po.status == PurchaseOrder.STATUS_APPROVED:
        abort(400, description='already approved')
    po.status = PurchaseOrder.STATUS_APPROVED
    get_db().commit()
    return _order_json(po)


@purchases_bp.delete('/orders/<int:order_id>')
@require_permission(RESOURCE, 'DELETE')
def delete_order(order_id: int):
    po = _load_scoped(order_id, 'DELETE')
    db = get_db()
    db.delete(po); db.commit()
    return {'data': {'success': True}}


def _load_scoped(order_id: int, action: str) -> PurchaseOrder:
    session = g.authz_session
    po = get_db().execute(select(PurchaseOrder).where(PurchaseOrder.id == order_id)).scalar_one_or_none()
    enforce(authorize_record(session, po), session, RESOURCE, action, entity_id=order_id)
    return po


def _order_json(po: PurchaseOrder):
    return {
        'id': po.id,
        'supplier_name': po.supplier_name,
        'total_cents': po.total_cents,
        'status': po.status,
        'group_id': po.group_id,
        'company_id': po.company_id,
    }
