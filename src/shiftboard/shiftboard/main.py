from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import BACKEND_MYSQL, Container, build_container
from .core.constants import DEFAULT_STORE_CONNECT_ATTEMPTS, DEFAULT_STORE_TIMEOUT_SECONDS, MIN_SHIFT_HOURS
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables, read_seed_rows
from .employees.controller import register as register_employees
from .employees.model import Employee
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def load_demo_employees(seed_path: Path = DATABASE_DIR / "seed.sql") -> List[Employee]:
    return [
        Employee(
            employee_id=str(row["employee_id"]),
            name=str(row["name"]),
            employee_code=str(row["employee_code"]),
            department=str(row["department"]),
        )
        for row in read_seed_rows(seed_path, "employees")
    ]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG", None)
        backend = getattr(settings, "STORE_BACKEND", BACKEND_MYSQL)
        logger.info("settings=%s backend=%s", settings_module, backend)

        if backend == BACKEND_MYSQL:
            logger.info(
                "db=%s@%s:%s/%s",
                db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
            )
            if getattr(settings, "AUTO_INIT_DB", False):
                apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
                logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
            if getattr(settings, "AUTO_SEED_DB", False):
                apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
                logger.info("demo seed ready")

        employees: List[Employee] = []
        if backend != BACKEND_MYSQL and getattr(settings, "AUTO_SEED_DB", False):
            employees = load_demo_employees()
            logger.info("in-memory directory seeded (employees=%d)", len(employees))

        container = build_container(
            db_config=db_config,
            backend=backend,
            store_timeout=float(getattr(settings, "STORE_TIMEOUT_SECONDS", DEFAULT_STORE_TIMEOUT_SECONDS)),
            connect_attempts=int(getattr(settings, "STORE_CONNECT_ATTEMPTS", DEFAULT_STORE_CONNECT_ATTEMPTS)),
            min_shift_hours=float(getattr(settings, "MIN_SHIFT_HOURS", MIN_SHIFT_HOURS)),
            employees=employees,
        )

    app.extensions["shiftboard"] = container

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    register_employees(app, container)
    register_shifts(app, container)

    return app
