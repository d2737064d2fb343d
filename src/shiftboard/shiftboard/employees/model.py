from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as known to the directory.

    Read-only for the booking core; rows are owned by the directory.
    """

    employee_id: str
    name: str
    employee_code: str
    department: str

    def summary(self) -> "EmployeeSummary":
        return EmployeeSummary(
            employee_id=self.employee_id,
            name=self.name,
            employee_code=self.employee_code,
            department=self.department,
        )


@dataclass(frozen=True)
class EmployeeSummary:
    """Denormalized projection embedded in shift results."""

    employee_id: str
    name: str
    employee_code: str
    department: str

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "employeeCode": self.employee_code,
            "department": self.department,
        }
