from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .repository import LeaveRepository
from .state_machine import ensure_transition

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._leaves = leaves
        self._employees = employees
        self._clock = clock or datetime.now

    @staticmethod
    def parse_status(value: Optional[str]) -> Optional[LeaveStatus]:
        """Parse a list filter; blank or 'all' means no filter."""

        v = (value or "").strip().lower()
        if not v or v == "all":
            return None
        try:
            return LeaveStatus(v)
        except ValueError:
            raise ValidationError("Unknown leave status")

    def create_leave(
        self,
        *,
        current_role: Role,
        employee_id: str,
        start_date: Optional[date],
        end_date: Optional[date],
        reason: Optional[str],
    ) -> LeaveRequest:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can request leave")

        if not start_date or not end_date:
            raise ValidationError("Start date and end date are required")
        reason = require_non_empty(reason, "Reason")
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Employee profile not found")

        # Overlapping requests for the same employee are not checked.
        created_at = self._clock()
        request_id = self._leaves.create(
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            created_at=created_at,
        )
        logger.info("leave request %s created for %s", request_id, employee_id)
        return LeaveRequest(
            request_id=request_id,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=created_at,
        )

    def decide_leave(
        self,
        *,
        current_role: Role,
        reviewer: str,
        employee_id: str,
        request_id: int,
        status: LeaveStatus,
    ) -> LeaveRequest:
        """Approve/reject a request, or reverse an earlier decision."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        req = self._leaves.get(employee_id=employee_id, request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")

        ensure_transition(req.status, status)

        reviewed_at = self._clock()
        ok = self._leaves.set_status(
            employee_id=employee_id,
            request_id=int(request_id),
            expected=req.status,
            status=status,
            reviewed_at=reviewed_at,
            reviewed_by=reviewer,
        )
        if not ok:
            raise ConflictError("Leave request was changed by someone else, reload and try again")

        logger.info("leave request %s: %s -> %s by %s", request_id, req.status.value, status.value, reviewer)
        return LeaveRequest(
            request_id=req.request_id,
            employee_id=req.employee_id,
            start_date=req.start_date,
            end_date=req.end_date,
            reason=req.reason,
            status=status,
            created_at=req.created_at,
            reviewed_at=reviewed_at,
            reviewed_by=reviewer,
        )

    def approve_leave(self, *, current_role: Role, reviewer: str, employee_id: str, request_id: int) -> LeaveRequest:
        return self.decide_leave(
            current_role=current_role,
            reviewer=reviewer,
            employee_id=employee_id,
            request_id=request_id,
            status=LeaveStatus.APPROVED,
        )

    def reject_leave(self, *, current_role: Role, reviewer: str, employee_id: str, request_id: int) -> LeaveRequest:
        return self.decide_leave(
            current_role=current_role,
            reviewer=reviewer,
            employee_id=employee_id,
            request_id=request_id,
            status=LeaveStatus.REJECTED,
        )

    def list_my_requests(self, *, employee_id: str) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_employee(employee_id)

    def list_admin(self, *, status: Optional[LeaveStatus] = None) -> Sequence[dict]:
        return self._leaves.list_all(status=status, limit=DEFAULT_LIST_LIMIT)
