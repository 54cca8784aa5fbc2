from __future__ import annotations

from flask import Flask, request, session

from ..common.datetime_utils import require_iso_date
from ..common.validators import require_non_empty
from ..common.web import admin_required, current_role, employee_required, ok, own_employee_id, payload
from ..container import Container
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/leaves", methods=["POST"], endpoint="new_leave")
    @employee_required
    def new_leave():
        data = payload()
        leave = container.leave_service.create_leave(
            current_role=current_role(),
            employee_id=own_employee_id(container.resolver),
            start_date=require_iso_date(data.get("start_date"), "Start date"),
            end_date=require_iso_date(data.get("end_date"), "End date"),
            reason=data.get("reason", ""),
        )
        return ok({"leave": leave.to_dict()}, message="Leave request submitted", status=201)

    @app.route("/leaves", methods=["GET"], endpoint="my_leaves")
    @employee_required
    def my_leaves():
        leaves = container.leave_service.list_my_requests(employee_id=own_employee_id(container.resolver))
        return ok({"leaves": [x.to_dict() for x in leaves]})

    @app.route("/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    def admin_leaves():
        status = container.leave_service.parse_status(request.args.get("status"))
        return ok({"leaves": list(container.leave_service.list_admin(status=status))})

    @app.route(
        "/admin/leaves/<employee_id>/<int:request_id>/decision",
        methods=["POST"],
        endpoint="decide_leave",
    )
    @admin_required
    def decide_leave(employee_id: str, request_id: int):
        try:
            status = LeaveStatus(require_non_empty(payload().get("status"), "Status").lower())
        except ValueError:
            raise ValidationError("Status must be approved or rejected")

        leave = container.leave_service.decide_leave(
            current_role=current_role(),
            reviewer=session["email"],
            employee_id=employee_id,
            request_id=request_id,
            status=status,
        )
        return ok({"leave": leave.to_dict()}, message=f"Leave request {leave.status.value}")
