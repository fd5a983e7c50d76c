from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role
from ..container import Container
from ..core.exceptions import ValidationError


def _read_upload() -> str:
    upload = request.files.get("file")
    if upload is not None:
        raw = upload.read()
    else:
        raw = request.get_data()
    if not raw:
        raise ValidationError("No CSV content received")
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("CSV must be UTF-8 encoded")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/import-csv", methods=["POST"], endpoint="import_csv")
    @admin_required
    def import_csv():
        report = container.import_service.import_csv(current_role=current_role(), text=_read_upload())
        payload = report.to_dict()
        payload["success"] = True
        return jsonify(payload)
