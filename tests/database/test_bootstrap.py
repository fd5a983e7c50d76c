from pathlib import Path

from dir_payroll.database.bootstrap import schema_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_schema_file_splits_into_table_statements():
    statements = schema_statements(SCHEMA.read_text(encoding="utf-8"))

    assert [s.split("(")[0].split()[-1] for s in statements] == ["employees", "tickets", "employee_periods"]
    assert not any(s.upper().startswith(("USE", "CREATE DATABASE")) for s in statements)
    assert not any("--" in s for s in statements)


def test_semicolons_inside_quotes_do_not_split():
    sql = "-- seed\nINSERT INTO t VALUES('a;b', \"c;d\");\nUSE other;\nSELECT 1"
    assert schema_statements(sql) == ["INSERT INTO t VALUES('a;b', \"c;d\")", "SELECT 1"]
