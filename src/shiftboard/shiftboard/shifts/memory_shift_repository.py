from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_STORE_TIMEOUT_SECONDS
from ..core.exceptions import StoreTimeoutError
from .model import Shift, ShiftFilters
from .repository import CalendarSession, ShiftRepository

CalendarKey = Tuple[str, date]


class _CalendarLock:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        # sessions holding or waiting on the lock
        self.users = 0


class _InMemoryCalendarSession(CalendarSession):
    def __init__(self, store: "InMemoryShiftRepository", *, employee_id: str, work_date: date):
        self._store = store
        self._employee_id = employee_id
        self._work_date = work_date
        self.pending: List[Shift] = []

    def existing(self) -> Sequence[Shift]:
        committed = self._store.list_filtered(ShiftFilters(employee_id=self._employee_id, work_date=self._work_date))
        return list(committed) + list(self.pending)

    def insert(self, *, start_time: time, end_time: time) -> Shift:
        now = self._store.clock()
        shift = Shift(
            shift_id=uuid.uuid4().hex,
            employee_id=self._employee_id,
            work_date=self._work_date,
            start_time=start_time,
            end_time=end_time,
            created_at=now,
            updated_at=now,
        )
        self.pending.append(shift)
        return shift


class InMemoryShiftRepository(ShiftRepository):
    """Process-local shift store.

    Not transactional, so bookings are serialized with a mutex per
    (employee_id, work_date). Inserts become visible only when the calendar
    session exits without an exception.
    """

    def __init__(
        self,
        *,
        lock_timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._lock_timeout = float(lock_timeout)
        self.clock = clock
        self._guard = threading.Lock()
        self._shifts: Dict[str, Shift] = {}
        # only calendars with a live session have an entry
        self._calendar_locks: Dict[CalendarKey, _CalendarLock] = {}

    def _checkout(self, key: CalendarKey) -> _CalendarLock:
        with self._guard:
            entry = self._calendar_locks.get(key)
            if entry is None:
                entry = self._calendar_locks[key] = _CalendarLock()
            entry.users += 1
            return entry

    def _checkin(self, key: CalendarKey, entry: _CalendarLock) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._calendar_locks[key]

    @contextmanager
    def calendar_session(self, *, employee_id: str, work_date: date) -> Iterator[CalendarSession]:
        key = (str(employee_id), work_date)
        entry = self._checkout(key)
        try:
            if not entry.lock.acquire(timeout=self._lock_timeout):
                raise StoreTimeoutError("Timed out waiting for the employee calendar")
            try:
                session = _InMemoryCalendarSession(self, employee_id=key[0], work_date=work_date)
                yield session
                with self._guard:
                    for shift in session.pending:
                        self._shifts[shift.shift_id] = shift
            finally:
                entry.lock.release()
        finally:
            self._checkin(key, entry)

    def open_calendars(self) -> int:
        with self._guard:
            return len(self._calendar_locks)

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        with self._guard:
            return self._shifts.get(str(shift_id))

    def delete_by_id(self, shift_id: str) -> bool:
        with self._guard:
            return self._shifts.pop(str(shift_id), None) is not None

    def list_filtered(self, filters: ShiftFilters) -> Sequence[Shift]:
        with self._guard:
            # dict keeps insertion order; sorted() is stable
            matches = [
                s
                for s in self._shifts.values()
                if (filters.employee_id is None or s.employee_id == str(filters.employee_id))
                and (filters.work_date is None or s.work_date == filters.work_date)
            ]
        return sorted(matches, key=lambda s: (s.work_date, s.start_time))
