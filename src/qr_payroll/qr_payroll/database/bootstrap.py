from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection

log = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    sql = _strip_line_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    log.info("Schema applied to %s", conn_factory.config.database)


def ensure_admin_user(conn_factory: DatabaseConnection, *, username: str = "admin", password: str = "admin123") -> bool:
    """Create the default super admin if missing. Returns True when created."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
        if cur.fetchone():
            return False
        cur.execute(
            "INSERT INTO users (username, password_hash, role, is_active) VALUES (%s, %s, 'super_admin', 1)",
            (username, generate_password_hash(password)),
        )
        conn.commit()
        log.info("Default super admin %r created", username)
        return True
    finally:
        conn.close()


def reset_attendance_data(conn_factory: DatabaseConnection) -> dict:
    """Bulk administrative reset: drop all attendance and employees, keep users."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("DELETE FROM attendance_records")
        attendance_deleted = cur.rowcount
        cur.execute("DELETE FROM employees")
        employees_deleted = cur.rowcount
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()

    # AUTO_INCREMENT resets are DDL (implicit commit), so run them after the deletes.
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("ALTER TABLE attendance_records AUTO_INCREMENT = 1")
        cur.execute("ALTER TABLE employees AUTO_INCREMENT = 1")
    finally:
        conn.close()

    log.warning("Database reset: %s attendance rows, %s employees deleted", attendance_deleted, employees_deleted)
    return {"attendance": attendance_deleted, "employees": employees_deleted}


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
