from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, EmployeeSummary
from .repository import EmployeeRepository


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        name=r["name"],
        employee_code=r["employee_code"],
        department=r["department"],
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, employee_code, department
                FROM employees
                WHERE employee_id=%s
                """,
                (str(employee_id),),
            )
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_summaries(self, employee_ids: Iterable[str]) -> Mapping[str, EmployeeSummary]:
        ids = sorted({str(i) for i in employee_ids})
        if not ids:
            return {}

        placeholders = ", ".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, name, employee_code, department
                FROM employees
                WHERE employee_id IN ({placeholders})
                """,
                tuple(ids),
            )
            return {str(r["employee_id"]): _row_to_employee(r).summary() for r in fetchall(cur)}

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, employee_code, department
                FROM employees
                ORDER BY name ASC
                """
            )
            return [_row_to_employee(r) for r in fetchall(cur)]
