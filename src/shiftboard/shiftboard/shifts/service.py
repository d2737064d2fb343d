from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import Callable, List, Optional, Union

from ..common.datetime_utils import now_local, start_instant
from ..common.interval_math import duration_hours, overlaps
from ..common.validators import require_hhmm, require_iso_date, require_non_empty
from ..core.constants import MIN_SHIFT_HOURS
from ..core.enums import Role
from ..core.exceptions import (
    ForbiddenError,
    NotFoundError,
    OverlappingShiftError,
    PastBookingError,
    TooShortError,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from .model import Shift, ShiftFilters, ShiftView
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

RoleLike = Union[Role, str]


def _as_role(value: RoleLike) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ForbiddenError(f"Unknown role: {value!r}") from None


class ShiftAllocator:
    """Admission control and role-scoped access for shifts.

    A booking passes, in order: format checks, the no-past-booking rule, the
    minimum duration and the overlap check. The overlap check and the insert
    run inside one calendar session of the store.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        employees: EmployeeRepository,
        *,
        min_shift_hours: float = MIN_SHIFT_HOURS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._shifts = shifts
        self._employees = employees
        self._min_shift_hours = float(min_shift_hours)
        self._clock = clock

    def create_shift(
        self,
        *,
        employee_id: str,
        work_date: Union[str, date],
        start_time: Union[str, time],
        end_time: Union[str, time],
        now: Optional[datetime] = None,
    ) -> ShiftView:
        try:
            return self._admit(
                employee_id=employee_id,
                work_date=work_date,
                start_time=start_time,
                end_time=end_time,
                now=now,
            )
        except ValidationError as e:
            logger.info(
                "Rejected shift for employee %s on %s %s-%s: %s",
                employee_id, work_date, start_time, end_time, e,
            )
            raise

    def _admit(self, *, employee_id, work_date, start_time, end_time, now) -> ShiftView:
        employee_id = require_non_empty(employee_id, "Employee ID")
        day = require_iso_date(work_date)
        start = require_hhmm(start_time, "Start time")
        end = require_hhmm(end_time, "End time")

        now = now or self._clock()
        if start_instant(day, start) < now:
            raise PastBookingError("Cannot create a shift in the past. Please select a future date and time.")

        if duration_hours(start, end) < self._min_shift_hours:
            raise TooShortError(f"Shift must be at least {self._min_shift_hours:g} hours long")

        with self._shifts.calendar_session(employee_id=employee_id, work_date=day) as calendar:
            for existing in calendar.existing():
                if overlaps(start, end, existing.start_time, existing.end_time):
                    raise OverlappingShiftError("Shift overlaps with an existing shift on the same date")

            employee = self._employees.get_by_id(employee_id)
            if employee is None:
                raise NotFoundError("Employee not found")

            shift = calendar.insert(start_time=start, end_time=end)

        logger.info(
            "Booked shift %s for employee %s on %s %s-%s",
            shift.shift_id, employee_id, day, start.strftime("%H:%M"), end.strftime("%H:%M"),
        )
        return ShiftView(shift=shift, employee=employee.summary())

    def scope_filters(
        self,
        *,
        caller_role: RoleLike,
        caller_employee_id: str,
        filters: ShiftFilters,
    ) -> ShiftFilters:
        """Apply role policy to the requested filters.

        A user is always pinned to their own employee id, whatever employee
        they asked for.
        """
        if _as_role(caller_role) == Role.ADMIN:
            return filters
        return replace(filters, employee_id=require_non_empty(caller_employee_id, "Employee ID"))

    def list_shifts(
        self,
        *,
        caller_role: RoleLike,
        caller_employee_id: str,
        filters: Optional[ShiftFilters] = None,
    ) -> List[ShiftView]:
        effective = self.scope_filters(
            caller_role=caller_role,
            caller_employee_id=caller_employee_id,
            filters=filters or ShiftFilters(),
        )
        shifts = list(self._shifts.list_filtered(effective))
        summaries = self._employees.get_summaries({s.employee_id for s in shifts})
        return [ShiftView(shift=s, employee=summaries.get(s.employee_id)) for s in shifts]

    def delete_shift(self, *, shift_id: str, caller_role: RoleLike, caller_employee_id: str) -> None:
        role = _as_role(caller_role)
        shift: Optional[Shift] = self._shifts.get_by_id(shift_id)
        if shift is None:
            raise NotFoundError("Shift not found")

        if role == Role.USER and shift.employee_id != str(caller_employee_id):
            logger.warning(
                "Employee %s attempted to delete shift %s owned by %s",
                caller_employee_id, shift_id, shift.employee_id,
            )
            raise ForbiddenError("You can only delete your own shifts")

        if not self._shifts.delete_by_id(shift.shift_id):
            raise NotFoundError("Shift not found")

        logger.info("Deleted shift %s (employee %s) by %s %s", shift_id, shift.employee_id, role.value, caller_employee_id)
