"""Create the service database and its tables from ``database/*.sql``."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Mapping

from .connection import DatabaseConnection, DBConfig
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("employees", "salary_details", "attendance_records", "leave_requests", "payroll_records")

# Quoted strings, line comments, statement terminators, then everything else.
_SQL_TOKEN = re.compile(
    r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|--[^\n]*|;|[^'";-]+|.""",
    re.DOTALL,
)
_SKIPPED_STATEMENT = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def split_sql(sql: str) -> list[str]:
    """Split a script into statements, dropping comments and database selection.

    ``CREATE DATABASE``/``USE`` lines are dropped so the files work against
    whichever database ``DB_CONFIG`` names.
    """
    statements: list[str] = []
    current: list[str] = []

    def flush() -> None:
        stmt = "".join(current).strip()
        current.clear()
        if stmt and not _SKIPPED_STATEMENT.match(stmt):
            statements.append(stmt)

    for match in _SQL_TOKEN.finditer(sql):
        token = match.group(0)
        if token == ";":
            flush()
        elif not token.startswith("--"):
            current.append(token)
    flush()
    return statements


def ensure_database_exists(config: DBConfig) -> None:
    with db_cursor(DatabaseConnection(config.server_only()), dictionary=False) as (_, cur):
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def run_sql_file(config: DBConfig, path: str | Path) -> int:
    statements = split_sql(Path(path).read_text(encoding="utf-8"))
    with db_cursor(DatabaseConnection(config), dictionary=False) as (_, cur):
        for stmt in statements:
            cur.execute(stmt)
    logger.info("Applied %s (%d statements) to %s", Path(path).name, len(statements), config.database)
    return len(statements)


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> None:
    config = DBConfig.from_settings(db_config)
    ensure_database_exists(config)
    run_sql_file(config, schema_path)


def apply_seed_sql(db_config: Mapping, *, seed_path: str | Path) -> None:
    run_sql_file(DBConfig.from_settings(db_config), seed_path)


def list_tables(db_config: Mapping) -> list[str]:
    with db_cursor(DatabaseConnection(DBConfig.from_settings(db_config)), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())


def missing_tables(db_config: Mapping) -> list[str]:
    present = set(list_tables(db_config))
    return [name for name in REQUIRED_TABLES if name not in present]
