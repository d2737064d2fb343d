from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .core.constants import (
    DEFAULT_STORE_CONNECT_ATTEMPTS,
    DEFAULT_STORE_TIMEOUT_SECONDS,
    MIN_SHIFT_HOURS,
)
from .database.connection import DBConfig, DatabaseConnection
from .employees.memory_employee_repository import InMemoryEmployeeRepository
from .employees.model import Employee
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .shifts.memory_shift_repository import InMemoryShiftRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftAllocator

BACKEND_MYSQL = "mysql"
BACKEND_MEMORY = "memory"


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    shifts_repo: ShiftRepository

    employee_service: EmployeeService
    shift_allocator: ShiftAllocator


def build_container(
    *,
    db_config: Optional[dict] = None,
    backend: str = BACKEND_MYSQL,
    store_timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
    connect_attempts: int = DEFAULT_STORE_CONNECT_ATTEMPTS,
    min_shift_hours: float = MIN_SHIFT_HOURS,
    employees: Iterable[Employee] = (),
) -> Container:
    """Wire repositories and services for the selected storage backend.

    ``employees`` seeds the in-memory directory and is ignored for MySQL.
    """
    conn: Optional[DatabaseConnection] = None

    if backend == BACKEND_MYSQL:
        if not db_config:
            raise ValueError("db_config is required for the mysql backend")
        config = DBConfig(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            connection_timeout=float(db_config.get("connection_timeout", store_timeout)),
            lock_wait_timeout=float(store_timeout),
            connect_attempts=int(connect_attempts),
        )
        conn = DatabaseConnection.get_instance(config)
        employees_repo: EmployeeRepository = MySQLEmployeeRepository(conn)
        shifts_repo: ShiftRepository = MySQLShiftRepository(conn)
    elif backend == BACKEND_MEMORY:
        employees_repo = InMemoryEmployeeRepository(employees)
        shifts_repo = InMemoryShiftRepository(lock_timeout=store_timeout)
    else:
        raise ValueError(f"Unknown store backend: {backend!r}")

    employee_service = EmployeeService(employees_repo)
    shift_allocator = ShiftAllocator(shifts_repo, employees_repo, min_shift_hours=min_shift_hours)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        employee_service=employee_service,
        shift_allocator=shift_allocator,
    )
