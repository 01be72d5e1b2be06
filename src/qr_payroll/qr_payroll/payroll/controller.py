from __future__ import annotations

import csv
import io

from flask import Flask, Response, request

from ..common.auth import login_required
from ..common.datetime_utils import parse_iso_date
from ..common.http import ok
from ..common.validators import require_non_empty
from ..container import Container
from .service import PayrollReportService

CSV_FIELDS = [
    "type",
    "employee_id",
    "name",
    "dni",
    "days_worked",
    "task_amount",
    "overtime_pay",
    "saturday",
    "seventh_day",
    "net_pay",
]


def _period_args():
    start = require_non_empty(request.args.get("start_date"), "start_date")
    end = require_non_empty(request.args.get("end_date"), "end_date")
    return parse_iso_date(start), parse_iso_date(end)


def register(app: Flask, container: Container) -> None:
    reports = container.payroll_report_service

    @app.route("/api/reports/daily", methods=["GET"], endpoint="reports_daily")
    @login_required
    def reports_daily():
        raw = request.args.get("date")
        work_date = parse_iso_date(raw) if raw else None
        rows = container.attendance_service.get_daily_report(work_date)
        day = work_date or container.attendance_service.today()
        return ok([row.to_dict() for row in rows], date=day.isoformat())

    @app.route("/api/reports/period", methods=["GET"], endpoint="reports_period")
    @app.route("/api/reports/weekly", methods=["GET"], endpoint="reports_weekly")
    @login_required
    def reports_period():
        start, end = _period_args()
        return ok(reports.build_period_report(start=start, end=end).to_dict())

    @app.route("/api/reports/period.csv", methods=["GET"], endpoint="reports_period_csv")
    @login_required
    def reports_period_csv():
        start, end = _period_args()
        report = reports.build_period_report(start=start, end=end)

        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=CSV_FIELDS)
        writer.writeheader()
        writer.writerows(PayrollReportService.csv_rows(report))

        filename = f"planilla_{start.isoformat()}_{end.isoformat()}.csv"
        return Response(
            output.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
