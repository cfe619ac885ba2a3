from __future__ import annotations

import mysql.connector
import pytest

from employee_records.database import bootstrap

DB_CONFIG = {"host": "db", "port": 3306, "user": "root", "password": "pw", "database": "ems"}


class FakeCursor:
    def __init__(self, server: "FakeServer"):
        self._server = server
        self._result = None

    def execute(self, sql, params=None):
        self._server.statements.append(" ".join(sql.split()))
        if any(fragment in sql for fragment in self._server.fail_on):
            raise mysql.connector.Error(msg="boom")
        if "information_schema.tables" in sql:
            self._result = [{"total": 1 if self._server.table_exists else 0}]
        elif "information_schema.columns" in sql:
            self._result = [{"name": c.upper()} for c in sorted(self._server.columns)]
        elif sql.startswith("SELECT COUNT(*) AS total FROM employees"):
            self._result = [{"total": self._server.row_count}]
        elif sql == "SHOW TABLES":
            self._result = [("employees",)]
        else:
            self._result = []

    def executemany(self, sql, rows):
        self._server.inserted.extend(rows)

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result or [])

    def close(self):
        pass


class FakeConnection:
    def __init__(self, server: "FakeServer"):
        self._server = server

    def cursor(self, dictionary=False):
        return FakeCursor(self._server)

    def commit(self):
        self._server.commits += 1

    def rollback(self):
        self._server.rollbacks += 1

    def close(self):
        pass


class FakeServer:
    def __init__(self, *, table_exists=True, columns=None, row_count=0, fail_on=()):
        self.table_exists = table_exists
        self.columns = set(columns if columns is not None else bootstrap.EXPECTED_COLUMNS)
        self.row_count = row_count
        self.fail_on = tuple(fail_on)
        self.statements: list[str] = []
        self.inserted: list[tuple] = []
        self.commits = 0
        self.rollbacks = 0
        self.connect_kwargs: list[dict] = []

    def connect(self, **kwargs):
        self.connect_kwargs.append(kwargs)
        return FakeConnection(self)


@pytest.fixture
def server(monkeypatch):
    def _install(**kwargs) -> FakeServer:
        fake = FakeServer(**kwargs)
        monkeypatch.setattr(bootstrap.mysql.connector, "connect", fake.connect)
        return fake

    return _install


def test_missing_table_is_created_and_seeded(server):
    fake = server(table_exists=False)

    assert bootstrap.run_bootstrap(DB_CONFIG) is True

    assert any(s.startswith("CREATE DATABASE IF NOT EXISTS `ems`") for s in fake.statements)
    assert any(s.startswith("CREATE TABLE IF NOT EXISTS employees") for s in fake.statements)
    assert len(fake.inserted) == 5
    assert {row[3] for row in fake.inserted} == {"Engineering", "HR", "Sales", "Marketing", "Finance"}


def test_existing_table_gets_missing_columns_and_date_fixes(server):
    fake = server(columns={"id", "first_name", "last_name", "email", "department", "position"}, row_count=3)

    bootstrap.run_bootstrap(DB_CONFIG)

    alters = [s for s in fake.statements if s.startswith("ALTER TABLE")]
    assert alters == [
        "ALTER TABLE employees ADD COLUMN hire_date DATE NOT NULL DEFAULT '2020-01-01'",
        "ALTER TABLE employees ADD COLUMN salary DECIMAL(10,2) DEFAULT 0.00",
        "ALTER TABLE employees ADD COLUMN is_active BOOLEAN NOT NULL DEFAULT TRUE",
        "ALTER TABLE employees ADD COLUMN created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
        "ALTER TABLE employees ADD COLUMN updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP",
    ]
    assert sum(1 for s in fake.statements if s.startswith("UPDATE employees SET")) == 3
    assert fake.inserted == []


def test_complete_table_with_rows_is_left_alone(server):
    fake = server(row_count=12)

    assert bootstrap.run_bootstrap(DB_CONFIG) is True

    assert not any(s.startswith(("CREATE TABLE", "ALTER TABLE")) for s in fake.statements)
    assert fake.inserted == []


def test_seeding_can_be_disabled(server):
    fake = server(table_exists=False)

    bootstrap.run_bootstrap(DB_CONFIG, seed=False)

    assert fake.inserted == []


def test_failed_alter_does_not_stop_other_columns(server):
    fake = server(columns={"id", "first_name", "last_name", "email", "department", "position", "hire_date"},
                  fail_on=("ADD COLUMN salary",))

    bootstrap.run_bootstrap(DB_CONFIG)

    assert any("ADD COLUMN is_active" in s for s in fake.statements)
    assert any("ADD COLUMN updated_at" in s for s in fake.statements)


def test_unreachable_server_never_raises(monkeypatch):
    def refuse(**kwargs):
        raise mysql.connector.Error(msg="Can't connect to MySQL server")

    monkeypatch.setattr(bootstrap.mysql.connector, "connect", refuse)

    assert bootstrap.run_bootstrap(DB_CONFIG) is False


def test_seed_failure_is_logged_and_rolled_back(server, caplog):
    fake = server(table_exists=False, fail_on=("SELECT COUNT(*) AS total FROM employees",))

    assert bootstrap.run_bootstrap(DB_CONFIG) is False

    assert fake.rollbacks == 1
    assert "Error initializing sample data" in caplog.text
