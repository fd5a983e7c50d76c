from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List

import mysql.connector
from werkzeug.security import generate_password_hash

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
        database=str(db_config.get("database", "dir_payroll")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


_STATEMENT_PARTS = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|;|[^'\";]+", re.S)
_SKIPPED = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.I)


def schema_statements(sql: str) -> List[str]:
    """Split a schema file into statements.

    ``--`` comment lines are dropped, and so are ``CREATE DATABASE`` / ``USE``
    so the schema lands in whatever database the settings name.
    """
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))

    out: List[str] = []
    current = ""
    for part in _STATEMENT_PARTS.findall(body) + [";"]:
        if part != ";":
            current += part
            continue
        stmt = current.strip()
        current = ""
        if stmt and not _SKIPPED.match(stmt):
            out.append(stmt)
    return out


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
    target = _as_target(db_config)
    ensure_database_exists(db_config)

    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied schema %s to %s", schema_path, target.database)


def ensure_admin_user(db_config: dict, *, email: str, password: str, full_name: str = "Administrator") -> None:
    """Create (or reset) the bootstrap admin account."""
    target = _as_target(db_config)
    password_hash = generate_password_hash(password)

    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            INSERT INTO employees(email, full_name, role, password_hash)
            VALUES(%s,%s,'admin',%s)
            ON DUPLICATE KEY UPDATE full_name=VALUES(full_name), role='admin', password_hash=VALUES(password_hash)
            """,
            (email, full_name, password_hash),
        )
        conn.commit()
    finally:
        conn.close()
    logger.info("Admin account %s ready", email)


def list_tables(db_config: dict) -> list[str]:
    target = _as_target(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
