from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_date, format_time
from ..employees.model import EmployeeSummary


@dataclass(frozen=True)
class Shift:
    """Domain entity: one booked interval for one employee on one date.

    Never mutated after creation. An end_time earlier than start_time means
    the shift runs past midnight.
    """

    shift_id: str
    employee_id: str
    work_date: date
    start_time: time
    end_time: time
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class ShiftFilters:
    employee_id: Optional[str] = None
    work_date: Optional[date] = None


@dataclass(frozen=True)
class ShiftView:
    """A shift joined with its owner's directory summary at read time."""

    shift: Shift
    employee: Optional[EmployeeSummary]

    def to_dict(self) -> dict:
        s = self.shift
        return {
            "id": s.shift_id,
            "employeeId": s.employee_id,
            "date": format_date(s.work_date),
            "startTime": format_time(s.start_time),
            "endTime": format_time(s.end_time),
            "createdAt": s.created_at.isoformat() if s.created_at else None,
            "updatedAt": s.updated_at.isoformat() if s.updated_at else None,
            "employee": self.employee.to_dict() if self.employee else None,
        }
