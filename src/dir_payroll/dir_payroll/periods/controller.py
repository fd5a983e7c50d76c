from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.formatting import format_optional_money
from ..common.validators import require_int, require_non_empty
from ..common.web import admin_required, current_role
from ..container import Container
from ..dir_xml.model import CheckInformation
from ..employee_periods.service import parse_status
from ..payroll.serializers import employee_summary_to_dict, period_summary_to_dict


def register(app: Flask, container: Container) -> None:
    calculator = container.calculator

    @app.route("/api/periods", methods=["GET"], endpoint="list_periods")
    @admin_required
    def list_periods():
        employee_id = request.args.get("employee_id", type=int)
        periods = container.payroll_report_service.list_periods(
            current_role=current_role(),
            employee_id=employee_id,
        )
        return jsonify({"success": True, "periods": [period_summary_to_dict(p, calculator) for p in periods]})

    @app.route("/api/periods/<period_key>", methods=["GET"], endpoint="period_detail")
    @admin_required
    def period_detail(period_key: str):
        period = container.payroll_report_service.get_period(current_role=current_role(), period_key=period_key)
        return jsonify({"success": True, "period": period_summary_to_dict(period, calculator)})

    @app.route("/api/periods/<period_key>/<int:employee_id>", methods=["GET"], endpoint="employee_period_detail")
    @admin_required
    def employee_period_detail(period_key: str, employee_id: int):
        summary = container.payroll_report_service.get_employee_period(
            current_role=current_role(),
            period_key=period_key,
            employee_id=employee_id,
        )
        return jsonify({"success": True, "employee": employee_summary_to_dict(summary, calculator)})

    @app.route("/api/update-employee-period", methods=["POST"], endpoint="update_employee_period")
    @admin_required
    def update_employee_period():
        data = request.get_json(silent=True) or {}
        record = container.employee_period_service.update_status(
            current_role=current_role(),
            period_key=require_non_empty(data.get("period_key"), "period_key"),
            employee_id=require_int(data.get("employee_id"), "employee_id"),
            status=parse_status(data.get("status")),
        )
        return jsonify(
            {
                "success": True,
                "data": {
                    "employee_period_id": record.employee_period_id,
                    "employee_id": record.employee_id,
                    "year": record.year,
                    "month": record.month,
                    "period": record.period,
                    "status": record.status.value,
                    "hourly_wage": format_optional_money(record.hourly_wage),
                },
            }
        )

    @app.route("/api/generate-period-xml", methods=["POST"], endpoint="generate_period_xml")
    @admin_required
    def generate_period_xml():
        data = request.get_json(silent=True) or {}
        generated = container.dir_submission_service.generate_period_xml(
            current_role=current_role(),
            period_key=require_non_empty(data.get("period_key"), "period_key"),
            employee_id=require_int(data.get("employee_id"), "employee_id"),
            check=CheckInformation.from_mapping(data.get("check")),
        )
        if request.args.get("format") == "json":
            return jsonify({"success": True, "xml": generated.xml, "filename": generated.filename})
        return Response(
            generated.xml,
            mimetype="application/xml",
            headers={"Content-Disposition": f'attachment; filename="{generated.filename}"'},
        )
