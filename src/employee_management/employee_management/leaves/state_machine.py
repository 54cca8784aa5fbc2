from __future__ import annotations

from ..core.enums import LeaveStatus
from ..core.exceptions import InvalidTransitionError

# pending -> approved|rejected; approved <-> rejected; nothing returns to pending.
ALLOWED_TRANSITIONS: dict[LeaveStatus, frozenset[LeaveStatus]] = {
    LeaveStatus.PENDING: frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED}),
    LeaveStatus.APPROVED: frozenset({LeaveStatus.REJECTED}),
    LeaveStatus.REJECTED: frozenset({LeaveStatus.APPROVED}),
}

INITIAL_STATUS = LeaveStatus.PENDING


def can_transition(current: LeaveStatus, target: LeaveStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: LeaveStatus, target: LeaveStatus) -> None:
    if current == target:
        raise InvalidTransitionError(f"Leave request is already {current.value}")
    if target == LeaveStatus.PENDING:
        raise InvalidTransitionError("A reviewed leave request cannot go back to pending")
    if not can_transition(current, target):
        raise InvalidTransitionError(f"Cannot change leave request from {current.value} to {target.value}")
