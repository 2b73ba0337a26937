from __future__ import annotations

from pathlib import Path

from src.time_tracker.time_tracker.database.bootstrap import schema_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_schema_file_yields_only_table_statements():
    stmts = schema_statements(SCHEMA.read_text(encoding="utf-8"))

    assert len(stmts) == 2
    assert stmts[0].startswith("CREATE TABLE IF NOT EXISTS workers")
    assert stmts[1].startswith("CREATE TABLE IF NOT EXISTS worker_states")


def test_quoted_semicolons_do_not_split():
    sql = "-- seed\nUSE other;\nINSERT INTO t VALUES('a;b', \"c;d\");\nSELECT 1"

    assert schema_statements(sql) == ["INSERT INTO t VALUES('a;b', \"c;d\")", "SELECT 1"]
