#!/usr/bin/env python
"""Idempotent demo seed for tenant-owned records, plus permission matrix inspection.

Usage:
    python backend/scripts/seed_demo.py                          # seed demo invoices / purchase orders
    python backend/scripts/seed_demo.py --show-roles             # print role -> resource -> actions summary
    python backend/scripts/seed_demo.py --export-json [FILE]     # matrix JSON with checksum (stdout if FILE omitted)
    python backend/scripts/seed_demo.py --token MANAGER grp-a    # mint a dev access token for a session
    python backend/scripts/seed_demo.py --dry-run                # run logic then rollback (no DB changes)
"""
from __future__ import annotations
import os, sys, argparse, textwrap, json, hashlib
from sqlalchemy import select, text
from sqlalchemy.exc import OperationalError

# Allow running from repo root
sys.path.append(os.path.abspath('backend'))

from bizsuite import create_app, get_db  # type: ignore
from bizsuite.constants.permissions import PERMISSION_MATRIX, Resource
from bizsuite.models.records import Base, Invoice, PurchaseOrder
from bizsuite.services.session import Session, issue_access_token

DEMO_TENANTS = [
    # (group, company)
    ('grp-north', 'co-north-1'),
    ('grp-north', 'co-north-2'),
    ('grp-south', 'co-south-1'),
]


def ensure_demo_records(session):
    created = 0
    for group_id, company_id in DEMO_TENANTS:
        number = f"INV-{company_id}-0001"
        if not session.execute(select(Invoice).where(Invoice.number == number)).scalar_one_or_none():
            session.add(Invoice(number=number, amount_cents=12500, group_id=group_id, company_id=company_id, created_by='seed'))
            created += 1
        supplier = f"Supplier of {company_id}"
        if not session.execute(select(PurchaseOrder).where(PurchaseOrder.supplier_name == supplier)).scalar_one_or_none():
            session.add(PurchaseOrder(supplier_name=supplier, total_cents=9900, group_id=group_id, company_id=company_id, created_by='seed'))
            created += 1
    return created


def build_matrix_map():
    return {
        role.value: {res.value: sorted(a.value for a in actions) for res, actions in resources.items()}
        for role, resources in PERMISSION_MATRIX.items()
    }


def print_role_summary():
    matrix = build_matrix_map()
    res_w = max(len(r.value) for r in Resource)
    for role, resources in matrix.items():
        granted = sum(len(v) for v in resources.values())
        print(f"\n{role} ({granted} grants)")
        print('-' * (res_w + 40))
        for res in Resource:
            actions = resources.get(res.value, [])
            print(f"{res.value.ljust(res_w)} | {', '.join(actions) or '-'}")


def parse_args():
    p = argparse.ArgumentParser(
        description="Seed demo tenant records & inspect the permission matrix",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""Examples:\n  seed normally: seed_demo.py\n  dry run: seed_demo.py --dry-run\n  show roles: seed_demo.py --show-roles\n  dev token: seed_demo.py --token ACCOUNTANT grp-north co-north-1\n""")
    )
    p.add_argument('--show-roles', action='store_true', help='Print the permission matrix per role')
    p.add_argument('--dry-run', action='store_true', help='Rollback after operations (no commit)')
    p.add_argument('--export-json', nargs='?', const='-', metavar='FILE', help='Export role->resource->actions JSON (to FILE or stdout if omitted)')
    p.add_argument('--token', nargs='+', metavar='ARG', help='ROLE GROUP [COMPANY] [PRINCIPAL]: print a dev access token')
    return p.parse_args()


def main():
    args = parse_args()
    app = create_app()
    with app.app_context():
        session = get_db()
        try:
            session.execute(text('SELECT 1 FROM invoices LIMIT 1'))
        except OperationalError:
            # Auto-create schema for bootstrap; in real env prefer alembic upgrade
            session.rollback()
            import bizsuite.models.audit  # noqa: F401
            Base.metadata.create_all(session.get_bind())

    with app.app_context():
        session = get_db()
        try:
            created = ensure_demo_records(session)
            if args.dry_run:
                session.rollback()
                print(f"[DRY-RUN] (rolled back) Records would create: {created}")
            else:
                session.commit()
                print(f"[DONE] Records created: {created}")
            if args.show_roles:
                print('\nPermission Matrix:')
                print_role_summary()
            if args.export_json is not None:
                matrix = build_matrix_map()
                canonical = json.dumps(matrix, sort_keys=True, separators=(',', ':'))
                payload = {
                    'roles': matrix,
                    'meta': {'matrix_checksum_sha256': hashlib.sha256(canonical.encode('utf-8')).hexdigest()},
                }
                if args.export_json == '-':
                    print(json.dumps(payload, indent=2, sort_keys=True))
                else:
                    with open(args.export_json, 'w', encoding='utf-8') as f:
                        json.dump(payload, f, indent=2, sort_keys=True)
                    print(f"[INFO] Exported JSON to {args.export_json}")
            if args.token:
                if len(args.token) < 2:
                    print('[ERROR] --token needs at least ROLE GROUP')
                    sys.exit(2)
                role, group_id = args.token[0].upper(), args.token[1]
                company_id = args.token[2] if len(args.token) > 2 else None
                principal = args.token[3] if len(args.token) > 3 else 'dev-user'
                print(issue_access_token(Session(principal, role, group_id, company_id)))
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

if __name__ == '__main__':
    main()
