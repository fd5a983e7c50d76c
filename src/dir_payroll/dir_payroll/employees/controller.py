from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.formatting import format_optional_money
from ..common.web import admin_required, current_role, login_required
from ..container import Container
from .model import Employee


def employee_to_dict(e: Employee) -> dict:
    return {
        "employee_id": e.employee_id,
        "name": e.display_name,
        "full_name": e.full_name,
        "email": e.email,
        "role": e.role.value,
        "yearly_salary": format_optional_money(e.yearly_salary),
        "salary_pending": e.yearly_salary is None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember"))
        session["employee_id"] = user.employee_id
        session["name"] = user.display_name
        session["role"] = user.role.value
        return jsonify({"success": True, "employee_id": user.employee_id, "role": user.role.value})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = request.get_json(silent=True) or {}
        employee_id = container.employee_service.register(
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
        )
        return jsonify({"success": True, "employee_id": employee_id}), 201

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        employee = container.employee_service.get(int(session["employee_id"]))
        return jsonify({"success": True, "employee": employee_to_dict(employee)})

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @admin_required
    def list_employees():
        employees = container.employee_service.list_employees(current_role=current_role())
        return jsonify({"success": True, "employees": [employee_to_dict(e) for e in employees]})

    @app.route("/api/profiles/<int:employee_id>/salary", methods=["PATCH"], endpoint="set_salary")
    @admin_required
    def set_salary(employee_id: int):
        data = request.get_json(silent=True) or {}
        employee = container.employee_service.set_salary(
            current_role=current_role(),
            employee_id=employee_id,
            salary=data.get("salary"),
        )
        return jsonify({"success": True, "employee": employee_to_dict(employee)})
