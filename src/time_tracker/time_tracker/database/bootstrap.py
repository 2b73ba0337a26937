from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

import mysql.connector

from ..core.exceptions import PersistenceError
from .connection import DBConfig

logger = logging.getLogger(__name__)

_CREATE_DB_OR_USE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def schema_statements(sql: str) -> List[str]:
    """Split a schema file into executable statements.

    Comment lines and ``CREATE DATABASE`` / ``USE`` lines are dropped so the
    file works against whatever database DB_CONFIG names. Semicolons inside
    quoted strings do not split.
    """

    sql = _CREATE_DB_OR_USE.sub("", _LINE_COMMENT.sub("", sql))

    statements: List[str] = []
    buf: List[str] = []
    quote = ""
    escaped = False
    for ch in sql:
        if escaped:
            escaped = False
        elif ch == "\\" and quote:
            escaped = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            if stmt:
                statements.append(stmt)
            buf = []
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        statements.append(tail)
    return statements


@contextmanager
def _admin_cursor(target: DBConfig, *, with_database: bool = True) -> Iterator:
    try:
        conn = mysql.connector.connect(**target.connect_kwargs(with_database=with_database))
    except mysql.connector.Error as e:
        logger.error("Cannot connect to MySQL at %s:%s: %s", target.host, target.port, e)
        raise PersistenceError("Database unavailable") from e
    try:
        cur = conn.cursor()
        yield cur
        conn.commit()
    except mysql.connector.Error as e:
        logger.error("Schema operation failed: %s", e)
        raise PersistenceError("Schema operation failed") from e
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    with _admin_cursor(target, with_database=False) as cur:
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))
    with _admin_cursor(DBConfig.from_dict(db_config)) as cur:
        for stmt in statements:
            cur.execute(stmt)
    logger.info("Applied %s schema statements from %s", len(statements), schema_path)


def list_tables(db_config: dict) -> List[str]:
    with _admin_cursor(DBConfig.from_dict(db_config)) as cur:
        cur.execute("SHOW TABLES")
        rows = cur.fetchall()
    names = []
    for row in rows:
        name = row[0]
        names.append(name.decode("utf-8") if isinstance(name, (bytes, bytearray)) else str(name))
    return names
