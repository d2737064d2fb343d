from __future__ import annotations

from typing import List

from .model import EmployeeSummary
from .repository import EmployeeRepository


class EmployeeService:
    """Use case: list the employee directory (for pickers and filters)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self) -> List[EmployeeSummary]:
        summaries = [e.summary() for e in self._employees.list_all()]
        summaries.sort(key=lambda s: s.name)
        return summaries
