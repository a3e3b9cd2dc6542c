from functools import wraps
from flask import g
from bizsuite.services.authorization import authorize, enforce
from bizsuite.services.policy import ALLOWED, AuthzResult, Denial
from bizsuite.services.session import current_session


def require_permission(resource, action):
    """Authenticate, then check (resource, action) against the permission matrix.

    The established Session is available to the view as g.authz_session. The declared pair is
    kept on the view as `required_permission` so route coverage can be verified.
    """
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            session = current_session()
            enforce(authorize(session, resource, action), session, resource, action)
            g.authz_session = session
            return fn(*args, **kwargs)
        wrapper.required_permission = (resource, action)
        return wrapper
    return outer


def require_session(fn):
    """Authentication only; for endpoints describing the caller itself."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        session = current_session()
        result = ALLOWED if session is not None else AuthzResult(Denial.UNAUTHENTICATED, 'authentication required')
        enforce(result)
        g.authz_session = session
        return fn(*args, **kwargs)
    wrapper.required_permission = None
    return wrapper
