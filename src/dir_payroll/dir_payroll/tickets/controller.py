from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.formatting import format_money
from ..common.validators import require_int
from ..common.web import admin_required, current_employee_id, current_role, login_required
from ..container import Container
from ..payroll.serializers import ticket_row_to_dict
from ..periods.calendar import get_pay_period
from .model import Ticket


def ticket_to_dict(t: Ticket) -> dict:
    return {
        "ticket_id": t.ticket_id,
        "dir_number": t.dir_number,
        "project_title": t.project_title,
        "date_worked": t.date_worked.isoformat(),
        "hours_worked": format_money(t.hours_worked),
        "pay_period": get_pay_period(t.date_worked).label,
        "status": t.status.value,
        "document_status": t.document_status.value,
        "document_url": t.document_url,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tickets", methods=["GET"], endpoint="my_tickets")
    @login_required
    def my_tickets():
        tickets = container.ticket_service.list_for_employee(employee_id=current_employee_id())
        return jsonify({"success": True, "tickets": [ticket_to_dict(t) for t in tickets]})

    @app.route("/api/tickets", methods=["POST"], endpoint="create_ticket")
    @login_required
    def create_ticket():
        data = request.get_json(silent=True) or {}
        ticket_id = container.ticket_service.create_ticket(
            employee_id=current_employee_id(),
            dir_number=data.get("dir_number"),
            project_title=data.get("project_title"),
            date_worked=data.get("date_worked"),
            hours_worked=data.get("hours_worked"),
        )
        return jsonify({"success": True, "ticket_id": ticket_id}), 201

    @app.route("/api/admin/tickets", methods=["GET"], endpoint="admin_tickets")
    @admin_required
    def admin_tickets():
        rows = container.ticket_service.list_admin_view(current_role=current_role())
        out = []
        for r in rows:
            item = ticket_row_to_dict(r, container.calculator)
            item["pay_period"] = get_pay_period(r.date_worked).label
            out.append(item)
        return jsonify({"success": True, "tickets": out})

    @app.route("/api/tickets/<int:ticket_id>/status", methods=["POST"], endpoint="update_ticket_status")
    @admin_required
    def update_ticket_status(ticket_id: int):
        data = request.get_json(silent=True) or {}
        status = container.ticket_service.update_status(
            current_role=current_role(),
            ticket_id=ticket_id,
            status=data.get("status"),
        )
        return jsonify({"success": True, "status": status.value})

    @app.route(
        "/api/tickets/<int:ticket_id>/document-status", methods=["POST"], endpoint="update_ticket_document_status"
    )
    @admin_required
    def update_ticket_document_status(ticket_id: int):
        data = request.get_json(silent=True) or {}
        status = container.ticket_service.update_document_status(
            current_role=current_role(),
            ticket_id=ticket_id,
            status=data.get("status"),
        )
        return jsonify({"success": True, "document_status": status.value})

    @app.route("/api/tickets/<int:ticket_id>/document", methods=["POST"], endpoint="attach_ticket_document")
    @login_required
    def attach_ticket_document(ticket_id: int):
        data = request.get_json(silent=True) or {}
        container.ticket_service.attach_document(
            current_role=current_role(),
            current_employee_id=current_employee_id(),
            ticket_id=ticket_id,
            document_url=data.get("document_url"),
        )
        return jsonify({"success": True})

    @app.route("/api/generate-xml", methods=["POST"], endpoint="generate_ticket_xml")
    @admin_required
    def generate_ticket_xml():
        data = request.get_json(silent=True) or {}
        generated = container.dir_submission_service.generate_ticket_xml(
            current_role=current_role(),
            ticket_id=require_int(data.get("ticket_id"), "ticket_id"),
        )
        return Response(
            generated.xml,
            mimetype="application/xml",
            headers={"Content-Disposition": f'attachment; filename="{generated.filename}"'},
        )
