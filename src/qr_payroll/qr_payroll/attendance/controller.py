from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import CAN_SCAN, current_actor, login_required, roles_required
from ..common.http import ok
from ..core.enums import ScanAction
from ..core.exceptions import InvalidCodeError
from ..qr.image_decoder import decode_qr_image
from ..container import Container
from .model import ScanResult


def _scan_response(result: ScanResult):
    if result.action == ScanAction.NOOP:
        # Nothing changed; the client still gets the stored record to display.
        return jsonify({"success": False, "data": result.to_dict(), "error": {"message": result.message, "code": "NOOP"}}), 409
    return ok(result.to_dict(), message=result.message)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        rows = service.get_today_records()
        return ok([row.to_dict() for row in rows], date=service.today().isoformat())

    @app.route("/api/attendance/entry", methods=["POST"], endpoint="attendance_entry")
    @roles_required(*CAN_SCAN)
    def attendance_entry():
        data = request.get_json(silent=True) or {}
        record = service.record_entry(data.get("employee_id"))
        app.logger.debug("Entry by %s for employee %s", current_actor().username, record.employee_id)
        return ok(record.to_dict(), status=201, message="Entrada registrada")

    @app.route("/api/attendance/exit", methods=["POST"], endpoint="attendance_exit")
    @roles_required(*CAN_SCAN)
    def attendance_exit():
        data = request.get_json(silent=True) or {}
        record = service.record_exit(data.get("employee_id"), data)
        app.logger.debug("Exit by %s for employee %s", current_actor().username, record.employee_id)
        return ok(record.to_dict(), message="Salida registrada")

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="attendance_scan")
    @roles_required(*CAN_SCAN)
    def attendance_scan():
        data = request.get_json(silent=True) or {}
        return _scan_response(service.record_scan(data.get("qr")))

    @app.route("/api/attendance/scan/image", methods=["POST"], endpoint="attendance_scan_image")
    @roles_required(*CAN_SCAN)
    def attendance_scan_image():
        upload = request.files.get("image")
        if upload is None or not upload.filename:
            raise InvalidCodeError("Falta la imagen del código QR")
        payload = decode_qr_image(upload.stream)
        return _scan_response(service.record_scan(payload))
