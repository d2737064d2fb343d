from __future__ import annotations

import threading
from typing import Iterable, Mapping, Optional, Sequence

from .model import Employee, EmployeeSummary
from .repository import EmployeeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    """Process-local directory, used with the in-memory shift store."""

    def __init__(self, employees: Iterable[Employee] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[str, Employee] = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> None:
        with self._lock:
            self._by_id[employee.employee_id] = employee

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with self._lock:
            return self._by_id.get(str(employee_id))

    def get_summaries(self, employee_ids: Iterable[str]) -> Mapping[str, EmployeeSummary]:
        with self._lock:
            return {
                eid: self._by_id[eid].summary()
                for eid in {str(i) for i in employee_ids}
                if eid in self._by_id
            }

    def list_all(self) -> Sequence[Employee]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda e: e.name)
