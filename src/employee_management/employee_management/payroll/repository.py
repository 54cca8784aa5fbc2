from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SalaryRecord


class SalaryRepository(Protocol):
    def get_current(self, employee_id: str) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def save(self, record: SalaryRecord) -> None:
        """Replace the current snapshot and append the same values to the history."""

        raise NotImplementedError

    def list_history(self, employee_id: str) -> Sequence[SalaryRecord]:
        """Newest first. History rows are append-only."""

        raise NotImplementedError
