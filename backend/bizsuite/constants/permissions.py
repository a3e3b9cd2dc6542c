"""Central role/resource/action vocabulary and the compiled permission matrix.
Extend cautiously; a new role or resource stays locked down until it is added to
PERMISSION_TABLE, and legacy call-site names belong in RESOURCE_ALIASES, never in the table.
"""
from __future__ import annotations
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Union


class Role(str, Enum):
    ADMIN = 'ADMIN'
    MANAGER = 'MANAGER'
    STOCK = 'STOCK'
    ACCOUNTANT = 'ACCOUNTANT'
    VIEWER = 'VIEWER'


class Action(str, Enum):
    CREATE = 'CREATE'
    READ = 'READ'
    UPDATE = 'UPDATE'
    DELETE = 'DELETE'
    EXPORT = 'EXPORT'
    APPROVE = 'APPROVE'
    MANAGE_USERS = 'MANAGE_USERS'


class Resource(str, Enum):
    COMPANY = 'COMPANY'
    CLIENT = 'CLIENT'
    SUPPLIER = 'SUPPLIER'
    PRODUCT = 'PRODUCT'
    SALE = 'SALE'
    PURCHASE = 'PURCHASE'
    INVOICE = 'INVOICE'
    STOCK = 'STOCK'
    EMPLOYEE = 'EMPLOYEE'
    BOAT = 'BOAT'
    PAYMENT = 'PAYMENT'
    REPORT = 'REPORT'
    USER = 'USER'


# str-mixin enums hash like their values, so plain strings from tokens or call sites
# find the same matrix entries as the enum members.
RoleLike = Union[Role, str]
ResourceLike = Union[Resource, str]
ActionLike = Union[Action, str]
Matrix = Mapping[str, Mapping[str, FrozenSet[Action]]]

CRUD = ['CREATE', 'READ', 'UPDATE', 'DELETE']
READ_ONLY = ['READ']

PERMISSION_TABLE: Dict[str, Dict[str, list]] = {
    'ADMIN': {
        'COMPANY': CRUD + ['MANAGE_USERS'],
        'CLIENT': CRUD,
        'SUPPLIER': CRUD,
        'PRODUCT': CRUD,
        'SALE': CRUD + ['APPROVE'],
        'PURCHASE': CRUD + ['APPROVE'],
        'INVOICE': CRUD,
        'STOCK': CRUD,
        'EMPLOYEE': CRUD,
        'BOAT': CRUD,
        'PAYMENT': CRUD,
        'REPORT': ['READ', 'EXPORT'],
        'USER': CRUD + ['MANAGE_USERS'],
    },
    # Manager: day-to-day operations and approvals, no deletes, no user administration
    'MANAGER': {
        'COMPANY': READ_ONLY,
        'CLIENT': ['CREATE', 'READ', 'UPDATE'],
        'SUPPLIER': ['CREATE', 'READ', 'UPDATE'],
        'PRODUCT': READ_ONLY,
        'SALE': ['CREATE', 'READ', 'UPDATE', 'APPROVE'],
        'PURCHASE': ['CREATE', 'READ', 'UPDATE', 'APPROVE'],
        'INVOICE': ['CREATE', 'READ', 'UPDATE'],
        'STOCK': READ_ONLY,
        'EMPLOYEE': ['READ', 'UPDATE'],
        'BOAT': READ_ONLY,
        'PAYMENT': ['CREATE', 'READ', 'UPDATE'],
        'REPORT': ['READ', 'EXPORT'],
        'USER': READ_ONLY,
    },
    'STOCK': {
        'COMPANY': READ_ONLY,
        'CLIENT': READ_ONLY,
        'SUPPLIER': READ_ONLY,
        'PRODUCT': READ_ONLY,
        'SALE': READ_ONLY,
        'PURCHASE': READ_ONLY,
        'INVOICE': READ_ONLY,
        'STOCK': ['CREATE', 'READ', 'UPDATE'],
        'EMPLOYEE': READ_ONLY,
        'BOAT': READ_ONLY,
        'PAYMENT': READ_ONLY,
        'REPORT': READ_ONLY,
        'USER': [],
    },
    'ACCOUNTANT': {
        'COMPANY': READ_ONLY,
        'CLIENT': READ_ONLY,
        'SUPPLIER': READ_ONLY,
        'PRODUCT': READ_ONLY,
        'SALE': READ_ONLY,
        'PURCHASE': READ_ONLY,
        'INVOICE': ['CREATE', 'READ', 'UPDATE'],
        'STOCK': READ_ONLY,
        'EMPLOYEE': READ_ONLY,
        'BOAT': READ_ONLY,
        'PAYMENT': ['CREATE', 'READ', 'UPDATE'],
        'REPORT': ['READ', 'EXPORT'],
        'USER': [],
    },
    'VIEWER': {
        'COMPANY': READ_ONLY,
        'CLIENT': READ_ONLY,
        'SUPPLIER': READ_ONLY,
        'PRODUCT': READ_ONLY,
        'SALE': READ_ONLY,
        'PURCHASE': READ_ONLY,
        'INVOICE': READ_ONLY,
        'STOCK': READ_ONLY,
        'EMPLOYEE': READ_ONLY,
        'BOAT': READ_ONLY,
        'PAYMENT': READ_ONLY,
        'REPORT': READ_ONLY,
        'USER': [],
    },
}


def build_matrix(table: Mapping[str, Mapping[str, Iterable[str]]]) -> Matrix:
    """Compile a nested {role: {resource: [actions]}} declaration into a read-only matrix.

    Unknown role/resource/action codes raise ValueError here, at import time, rather than
    turning into silent denials later.
    """
    compiled = {}
    for role_code, resources in table.items():
        role = Role(role_code)
        compiled[role] = MappingProxyType({
            Resource(res_code): frozenset(Action(a) for a in actions)
            for res_code, actions in resources.items()
        })
    return MappingProxyType(compiled)


PERMISSION_MATRIX: Matrix = build_matrix(PERMISSION_TABLE)


def _camel(code: str) -> str:
    """PURCHASE_ORDER -> PurchaseOrder"""
    return ''.join(part.capitalize() for part in code.split('_'))


# Legacy / plural / compound spellings still used by endpoints.
_LEGACY_ALIASES = {
    'COMPANIES': 'COMPANY',
    'CLIENTS': 'CLIENT',
    'CUSTOMER': 'CLIENT',
    'CUSTOMERS': 'CLIENT',
    'SUPPLIERS': 'SUPPLIER',
    'VENDOR': 'SUPPLIER',
    'VENDORS': 'SUPPLIER',
    'PRODUCTS': 'PRODUCT',
    'SALES': 'SALE',
    'SALES_ORDER': 'SALE',
    'SALES_ORDERS': 'SALE',
    'PURCHASES': 'PURCHASE',
    'PURCHASE_ORDER': 'PURCHASE',
    'PURCHASE_ORDERS': 'PURCHASE',
    'INVOICES': 'INVOICE',
    'SALES_INVOICE': 'INVOICE',
    'SALES_INVOICES': 'INVOICE',
    'PURCHASE_INVOICE': 'INVOICE',
    'PURCHASE_INVOICES': 'INVOICE',
    'INVENTORY': 'STOCK',
    'EMPLOYEES': 'EMPLOYEE',
    'BOATS': 'BOAT',
    'MARITIME': 'BOAT',
    'PAYMENTS': 'PAYMENT',
    'FINANCIAL': 'PAYMENT',
    'REPORTS': 'REPORT',
    'EXPORT': 'REPORT',
    'USERS': 'USER',
}


def build_aliases(legacy: Mapping[str, str]) -> Mapping[str, Resource]:
    aliases: Dict[str, Resource] = {}
    for alias, target in legacy.items():
        canonical = Resource(target)
        aliases[alias] = canonical
        aliases[_camel(alias)] = canonical
    # CamelCase spellings of the canonical names themselves (e.g. 'Client')
    for res in Resource:
        aliases.setdefault(_camel(res.value), res)
    return MappingProxyType(aliases)


RESOURCE_ALIASES: Mapping[str, Resource] = build_aliases(_LEGACY_ALIASES)


def normalize_resource(resource: ResourceLike) -> ResourceLike:
    """Map a call-site resource spelling onto its canonical resource; unknown names pass through."""
    try:
        return RESOURCE_ALIASES.get(resource, resource)
    except TypeError:  # unhashable input; denied downstream
        return resource


def get_permissions(role: RoleLike, matrix: Matrix = PERMISSION_MATRIX) -> Mapping[Resource, FrozenSet[Action]]:
    try:
        return matrix.get(role) or MappingProxyType({})
    except TypeError:
        return MappingProxyType({})
