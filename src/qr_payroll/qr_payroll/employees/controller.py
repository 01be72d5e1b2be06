from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.auth import CAN_SCAN, login_required, roles_required
from ..common.http import ok
from ..core.exceptions import ValidationError
from ..qr.renderer import render_employee_badge
from ..container import Container


def _optional_int(name: str):
    raw = request.args.get(name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} inválido")


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @login_required
    def employees_list():
        return ok([e.to_dict() for e in service.list_active()])

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def employees_get(employee_id: int):
        return ok(service.get_active(employee_id).to_dict())

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @roles_required(*CAN_SCAN)
    def employees_create():
        data = request.get_json(silent=True) or {}
        employee = service.create(
            full_name=data.get("name", ""),
            dni=data.get("dni", ""),
            employee_type=data.get("type"),
            monthly_salary=data.get("monthly_salary"),
        )
        return ok(employee.to_dict(), status=201, message="Empleado creado")

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @roles_required(*CAN_SCAN)
    def employees_update(employee_id: int):
        data = request.get_json(silent=True) or {}
        employee = service.update(
            employee_id,
            full_name=data.get("name", ""),
            dni=data.get("dni", ""),
            employee_type=data.get("type"),
            monthly_salary=data.get("monthly_salary"),
        )
        return ok(employee.to_dict(), message="Empleado actualizado")

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @roles_required(*CAN_SCAN)
    def employees_delete(employee_id: int):
        service.deactivate(employee_id)
        return ok(message="Empleado desactivado")

    @app.route("/api/employees/<int:employee_id>/qr", methods=["GET"], endpoint="employees_qr")
    @login_required
    def employees_qr(employee_id: int):
        employee = service.get_active(employee_id)
        png = render_employee_badge(employee.employee_id)
        return send_file(
            io.BytesIO(png),
            mimetype="image/png",
            as_attachment=request.args.get("download") == "1",
            download_name=f"empleado_{employee.employee_id}.png",
        )

    @app.route("/api/employees/<int:employee_id>/stats", methods=["GET"], endpoint="employees_stats")
    @login_required
    def employees_stats(employee_id: int):
        stats = container.payroll_report_service.get_employee_stats(
            employee_id,
            year=_optional_int("year"),
            month=_optional_int("month"),
        )
        return ok(stats.to_dict())
