from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Sequence

from .model import Employee, EmployeeSummary


class EmployeeRepository(Protocol):
    """Directory interface used by the booking services.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_summaries(self, employee_ids: Iterable[str]) -> Mapping[str, EmployeeSummary]:
        """Batch lookup keyed by employee id; unknown ids are left out."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError
