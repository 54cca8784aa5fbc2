from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        return ok({"counts": container.directory_service.dashboard_counts()})

    @app.route("/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def admin_employees():
        employees = container.directory_service.list_employees()
        return ok({"employees": [e.to_public_dict() for e in employees]})

    @app.route("/admin/employees/<employee_id>", methods=["GET"], endpoint="employee_profile")
    @admin_required
    def employee_profile(employee_id: str):
        employee = container.directory_service.get_employee(employee_id)
        return ok({"employee": employee.to_public_dict()})

    @app.route("/admin/employees", methods=["POST"], endpoint="upsert_employee")
    @admin_required
    def upsert_employee():
        data = payload()
        email = data.pop("email", None)
        password = data.pop("password", None) or None

        result = container.upsert_service.upsert(email=email, candidate=data, password=password)

        body = {
            "employee": result.employee.to_public_dict(),
            "created": result.created,
        }
        if not result.created:
            return ok(body, message="User updated successfully!")

        body["notification_sent"] = result.notification_sent
        if result.notification_error:
            body["notification_error"] = "Email sending failed!"
        return ok(body, message="New user created successfully!", status=201)
