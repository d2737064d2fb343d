from __future__ import annotations

from datetime import date, time
from typing import ContextManager, Optional, Protocol, Sequence

from .model import Shift, ShiftFilters


class CalendarSession(Protocol):
    """Atomic unit of work over one employee's shifts on one date.

    Everything read and written through a session happens as if no other
    booking for the same employee and date ran at the same time. Nothing
    inserted is visible to others until the session exits cleanly.
    """

    def existing(self) -> Sequence[Shift]:
        raise NotImplementedError

    def insert(self, *, start_time: time, end_time: time) -> Shift:
        raise NotImplementedError


class ShiftRepository(Protocol):
    def calendar_session(self, *, employee_id: str, work_date: date) -> ContextManager[CalendarSession]:
        """Open a CalendarSession.

        Raises StoreTimeoutError when the calendar cannot be locked in time.
        """

        raise NotImplementedError

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def delete_by_id(self, shift_id: str) -> bool:
        raise NotImplementedError

    def list_filtered(self, filters: ShiftFilters) -> Sequence[Shift]:
        """Shifts matching the filters, ordered by date then start time.

        Ties keep creation order.
        """

        raise NotImplementedError
