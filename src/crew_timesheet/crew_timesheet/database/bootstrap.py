from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# username, email, full name, password, role
DEMO_USERS = (
    ("admin", "admin@uspcontractor.com", "John Administrator", "admin123", "SuperAdmin"),
    ("field_manager", "field@uspcontractor.com", "Sarah Field Manager", "manager123", "Admin"),
    ("viewer", "viewer@uspcontractor.com", "Mike Observer", "viewer123", "Viewer"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql hardcodes a database name; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ``;`` outside of quoted strings."""
    buf: list[str] = []
    quote: str | None = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
            continue
        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
            continue
        if ch == ";" and quote is None:
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(config: DBConfig, path: str | Path) -> int:
    sql = _strip_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    conn = DatabaseConnection(config).connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(config: DBConfig) -> None:
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    config = DBConfig.from_dict(db_config)
    ensure_database_exists(config)
    count = _run_script(config, schema_path)
    logger.info("applied %s statements from %s to %s", count, schema_path, config.describe())


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    config = DBConfig.from_dict(db_config)
    count = _run_script(config, seed_path)
    logger.info("applied %s seed statements to %s", count, config.describe())


def ensure_demo_users(db_config: dict) -> None:
    """Upsert the demo accounts with real password hashes."""
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect()
    try:
        cur = conn.cursor(dictionary=True)
        for username, email, full_name, password, role in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM users WHERE username=%s", (username,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET email=%s, full_name=%s, password_hash=%s, role=%s, active=1
                    WHERE username=%s
                    """,
                    (email, full_name, password_hash, role, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (username, email, full_name, password_hash, role)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (username, email, full_name, password_hash, role),
                )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
