"""Shared Flask plumbing: session guards and domain error -> JSON mapping."""

from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_role() -> Role:
    return Role(session.get("role", Role.EMPLOYEE.value))


def current_employee_id() -> int:
    return int(session["employee_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return error_response("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return error_response("Please log in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return error_response("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e):
        return error_response(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e):
        return error_response(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e):
        return error_response(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return error_response(str(e), 404)
