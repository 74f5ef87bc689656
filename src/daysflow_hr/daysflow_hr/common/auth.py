from __future__ import annotations

from functools import wraps

from flask import session

from ..core.enums import Role
from .http import fail

# The session itself (login, tokens) is established outside this service;
# handlers only read ``employee_id`` and ``role`` from it.


def current_employee_id() -> int:
    return int(session["employee_id"])


def current_role() -> Role:
    return Role(session.get("role", Role.EMPLOYEE.value))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return fail("Please sign in to continue", status=401, code="UNAUTHENTICATED")
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return fail("Please sign in to continue", status=401, code="UNAUTHENTICATED")
        if session.get("role") != Role.ADMIN.value:
            return fail("You are not allowed to do this", status=403, code="FORBIDDEN")
        return view(*args, **kwargs)

    return wrapper
