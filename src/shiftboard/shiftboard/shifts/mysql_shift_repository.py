from __future__ import annotations

import uuid
from contextlib import contextmanager
from datetime import date, time
from typing import Iterator, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Shift, ShiftFilters
from .repository import CalendarSession, ShiftRepository

_SELECT_COLUMNS = "shift_id, employee_id, work_date, start_time, end_time, created_at, updated_at"


def _row_to_shift(r: dict) -> Shift:
    return Shift(
        shift_id=str(r["shift_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class _MySQLCalendarSession(CalendarSession):
    def __init__(self, cur, *, employee_id: str, work_date: date):
        self._cur = cur
        self._employee_id = employee_id
        self._work_date = work_date

    def existing(self) -> Sequence[Shift]:
        self._cur.execute(
            f"""
            SELECT {_SELECT_COLUMNS}
            FROM shifts
            WHERE employee_id=%s AND work_date=%s
            ORDER BY start_time ASC, shift_seq ASC
            """,
            (self._employee_id, self._work_date),
        )
        return [_row_to_shift(r) for r in fetchall(self._cur)]

    def insert(self, *, start_time: time, end_time: time) -> Shift:
        shift_id = uuid.uuid4().hex
        self._cur.execute(
            """
            INSERT INTO shifts(shift_id, employee_id, work_date, start_time, end_time)
            VALUES(%s,%s,%s,%s,%s)
            """,
            (shift_id, self._employee_id, self._work_date, start_time, end_time),
        )
        self._cur.execute(f"SELECT {_SELECT_COLUMNS} FROM shifts WHERE shift_id=%s", (shift_id,))
        return _row_to_shift(fetchone(self._cur))


class MySQLShiftRepository(ShiftRepository):
    """InnoDB-backed shift store.

    A calendar session locks the employee row (SELECT ... FOR UPDATE) before
    reading that day's shifts, so concurrent bookings for one employee run
    one after another. Lock waits are bounded by innodb_lock_wait_timeout.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def calendar_session(self, *, employee_id: str, work_date: date) -> Iterator[CalendarSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SET SESSION innodb_lock_wait_timeout = %s",
                (self._conn_factory.lock_wait_timeout,),
            )
            cur.execute(
                "SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE",
                (str(employee_id),),
            )
            fetchall(cur)
            yield _MySQLCalendarSession(cur, employee_id=str(employee_id), work_date=work_date)

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SELECT_COLUMNS} FROM shifts WHERE shift_id=%s", (str(shift_id),))
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def delete_by_id(self, shift_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (str(shift_id),))
            return cur.rowcount > 0

    def list_filtered(self, filters: ShiftFilters) -> Sequence[Shift]:
        clauses: list[str] = []
        params: list[object] = []
        if filters.employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(str(filters.employee_id))
        if filters.work_date is not None:
            clauses.append("work_date=%s")
            params.append(filters.work_date)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SELECT_COLUMNS}
                FROM shifts
                {where}
                ORDER BY work_date ASC, start_time ASC, shift_seq ASC
                """,
                tuple(params),
            )
            return [_row_to_shift(r) for r in fetchall(cur)]
