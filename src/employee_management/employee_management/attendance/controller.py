from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import require_iso_date
from ..common.web import admin_required, employee_required, ok, own_employee_id, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance", methods=["POST"], endpoint="mark_attendance")
    @employee_required
    def mark_attendance():
        employee_id = own_employee_id(container.resolver)
        record = container.attendance_service.mark_attendance(employee_id, payload().get("status", ""))
        return ok(
            {
                "attendance": {
                    "date": record.work_date.isoformat(),
                    "time": record.time_label,
                    "status": record.status.value,
                }
            },
            message="Attendance marked successfully!",
            status=201,
        )

    @app.route("/attendance", methods=["GET"], endpoint="attendance_history")
    @employee_required
    def attendance_history():
        employee_id = own_employee_id(container.resolver)
        return ok({"history": container.attendance_service.get_history_ui(employee_id)})

    @app.route("/admin/attendance/report", methods=["GET"], endpoint="attendance_report")
    @admin_required
    def attendance_report():
        start = require_iso_date(request.args.get("start"), "Start date")
        end = require_iso_date(request.args.get("end"), "End date")
        employee_id = request.args.get("employee_id") or None
        if employee_id == "all":
            employee_id = None

        report = container.attendance_service.build_report(start=start, end=end, employee_id=employee_id)
        message = (
            f"Fetched attendance records for {len(report.groups)} employees"
            if report.groups
            else "No attendance records found for the selected criteria"
        )
        return ok({"groups": report.groups, "total_records": report.total_records}, message=message)
