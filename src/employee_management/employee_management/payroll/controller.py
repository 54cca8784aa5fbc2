from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import require_iso_date
from ..common.web import admin_required, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/salaries/<employee_id>", methods=["GET"], endpoint="employee_salary")
    @admin_required
    def employee_salary(employee_id: str):
        current = container.salary_service.get_current(employee_id)
        history = container.salary_service.get_history(employee_id)
        return ok(
            {
                "current": current.to_dict() if current else None,
                "history": [h.to_dict() for h in history],
            }
        )

    @app.route("/admin/salaries", methods=["POST"], endpoint="save_salary")
    @admin_required
    def save_salary():
        data = payload()
        employee_id = data.get("employee_id") or None
        had_salary = bool(employee_id) and container.salary_service.get_current(employee_id) is not None

        record = container.salary_service.upsert_salary(
            employee_id=employee_id,
            basic=data.get("basic_salary"),
            allowances=data.get("allowances"),
            deductions=data.get("deductions"),
            pay_date=require_iso_date(data.get("pay_date"), "Pay date"),
            increment_percent=data.get("increment_percent"),
        )
        verb = "updated" if had_salary else "added"
        return ok({"salary": record.to_dict()}, message=f"Salary {verb} successfully!")
