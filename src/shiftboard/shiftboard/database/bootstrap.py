from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Tuple

import mysql.connector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "shiftboard")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


_SQL_TOKEN = re.compile(
    r"""
      (?P<string>'(?:[^'\\]|\\.|'')*')
    | (?P<ident>"(?:[^"\\]|\\.)*"|`[^`]*`)
    | (?P<comment>--[^\n]*|\#[^\n]*)
    | (?P<end>;)
    | (?P<text>[^'"`;\-\#]+|[\-\#])
    """,
    re.VERBOSE | re.DOTALL,
)

# schema.sql and seed.sql name their own database; the configured one wins
_DATABASE_SELECTOR = re.compile(r"(?is)^(CREATE\s+DATABASE|USE)\b")

_INSERT = re.compile(
    r"(?is)^INSERT\s+INTO\s+`?(?P<table>\w+)`?\s*\((?P<columns>[^)]*)\)\s*VALUES\s*(?P<values>.*?)"
    r"(?:\s+ON\s+DUPLICATE\s+KEY\s+UPDATE\b.*)?$"
)

_VALUE_TOKEN = re.compile(r"'((?:[^'\\]|\\.|'')*)'|(NULL)\b|(-?\d+(?:\.\d+)?)|([(),])", re.IGNORECASE)


def _iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on top-level ';', dropping comments."""
    buf: List[str] = []
    for m in _SQL_TOKEN.finditer(sql):
        kind = m.lastgroup
        if kind == "comment":
            continue
        if kind == "end":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(m.group())

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _script_statements(path: Path) -> List[str]:
    sql = path.read_text(encoding="utf-8")
    return [s for s in _iter_sql_statements(sql) if not _DATABASE_SELECTOR.match(s)]


def _unquote(raw: str) -> str:
    return re.sub(r"\\(.)", r"\1", raw.replace("''", "'"))


def _iter_value_rows(values: str) -> Iterator[Tuple[Any, ...]]:
    row: Optional[List[Any]] = None
    for m in _VALUE_TOKEN.finditer(values):
        quoted, null, number, punct = m.groups()
        if punct == "(":
            row = []
        elif punct == ")":
            if row is not None:
                yield tuple(row)
            row = None
        elif punct == "," or row is None:
            continue
        elif quoted is not None:
            row.append(_unquote(quoted))
        elif null:
            row.append(None)
        else:
            row.append(float(number) if "." in number else int(number))


def read_seed_rows(seed_path: str | Path, table: str) -> List[dict]:
    """Rows that the seed script inserts into ``table``, keyed by column.

    Lets the in-memory backend start from the same demo data as MySQL.
    """
    path = Path(seed_path)
    rows: List[dict] = []
    for stmt in _script_statements(path):
        m = _INSERT.match(stmt)
        if m is None or m.group("table").lower() != table.lower():
            continue
        columns = [c.strip().strip("`") for c in m.group("columns").split(",")]
        for values in _iter_value_rows(m.group("values")):
            if len(values) != len(columns):
                raise ValueError(f"{path.name}: {len(values)} values for {len(columns)} columns of {table}")
            rows.append(dict(zip(columns, values)))
    return rows


def _apply_sql_file(db_config: dict, path: str | Path) -> int:
    statements = _script_statements(Path(path))
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.debug("applied %d statements from %s", len(statements), Path(path).name)
    return len(statements)


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _apply_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _apply_sql_file(db_config, seed_path)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def missing_tables(db_config: dict, required: Iterable[str] = ("employees", "shifts")) -> list[str]:
    present = {t.lower() for t in list_tables(db_config)}
    return [t for t in required if t.lower() not in present]
