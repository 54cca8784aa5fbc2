from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthError,
    AuthorizationError,
    ConflictError,
    DataIntegrityError,
    DomainError,
    DuplicateAttendanceError,
    NotFoundError,
    NotificationError,
    RemoteUnavailableError,
    ValidationError,
)
from ..identity.model import Principal

logger = logging.getLogger(__name__)

# Most specific first.
_STATUS_CODES = (
    (ValidationError, 400),
    (AuthError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (DuplicateAttendanceError, 409),
    (ConflictError, 409),
    (RemoteUnavailableError, 503),
    (NotificationError, 503),
    (DataIntegrityError, 500),
)


def status_for(error: DomainError) -> int:
    for cls, code in _STATUS_CODES:
        if isinstance(error, cls):
            return code
    return 400


def ok(payload: dict | None = None, *, message: str | None = None, status: int = 200):
    body = {"ok": True}
    if message:
        body["message"] = message
    if payload:
        body.update(payload)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"ok": False, "message": message}), status


def payload() -> dict:
    """Request body as a dict: JSON when sent as JSON, form fields otherwise."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def current_principal() -> Principal:
    return Principal(uid=session["uid"], email=session["email"])


def current_role() -> Role:
    return Role(session.get("role"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return fail("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return fail("Please log in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return fail("Admins only", 403)
        return view(*args, **kwargs)

    return wrapper


def employee_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return fail("Please log in to continue", 401)
        if session.get("role") != Role.EMPLOYEE.value:
            return fail("Employees only", 403)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    """Every domain failure becomes a transient JSON message; nothing is retried."""

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        code = status_for(e)
        if code >= 500:
            logger.error("%s on %s %s: %s", type(e).__name__, request.method, request.path, e)
        return fail(str(e), code)


def own_employee_id(resolver) -> str:
    """Employee id of the logged-in principal; guests have none and cannot write."""

    identity = resolver.resolve(session["email"])
    if identity.is_guest:
        raise ValidationError("No employee profile found for this account")
    return identity.employee.employee_id
