"""Payload helpers shared by the record endpoints; every failure is a 400 with a field-named detail."""
from __future__ import annotations
from typing import Any, Dict, Iterable, Optional
from flask import abort, request


def json_body() -> Dict[str, Any]:
    """Request body as a JSON object; an absent body is empty, any other JSON value is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        abort(400, description='JSON object body required')
    return data


def validate_status(new_status: str, allowed: Iterable[str], field_name: str = 'status') -> str:
    """Return new_status if it is inside allowed, otherwise abort with 400."""
    if new_status not in allowed:
        abort(400, description=f"{field_name} invalid")
    return new_status


def parse_cents(raw: Any, field_name: str) -> int:
    if raw is None:
        return 0
    if isinstance(raw, bool):
        abort(400, description=f"{field_name} must be an integer")
    try:
        value = int(raw)
    except (TypeError, ValueError):
        abort(400, description=f"{field_name} must be an integer")
    if value < 0:
        abort(400, description=f"{field_name} must be >= 0")
    return value


def optional_id(raw: Any) -> Optional[str]:
    if raw is None or raw == '':
        return None
    return str(raw)

__all__ = ['json_body', 'validate_status', 'parse_cents', 'optional_id']
