"""Startup schema reconciliation and sample data for the employees table.

Every step is idempotent and best-effort: failures are logged and the next
step still runs, so a broken database never stops the web app from starting.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import mysql.connector

logger = logging.getLogger(__name__)

TABLE_NAME = "employees"

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS employees (
    id BIGINT AUTO_INCREMENT PRIMARY KEY,
    first_name VARCHAR(50) NOT NULL,
    last_name VARCHAR(50) NOT NULL,
    email VARCHAR(100) NOT NULL UNIQUE,
    department VARCHAR(100) NOT NULL,
    position VARCHAR(100) NOT NULL,
    hire_date DATE NOT NULL,
    salary DECIMAL(10,2),
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,

    INDEX idx_department (department),
    INDEX idx_is_active (is_active),
    INDEX idx_email (email)
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci
"""

# Column -> definition used when an existing table lacks it (order matters for `id`).
EXPECTED_COLUMNS = {
    "id": "BIGINT AUTO_INCREMENT PRIMARY KEY FIRST",
    "first_name": "VARCHAR(50) NOT NULL DEFAULT ''",
    "last_name": "VARCHAR(50) NOT NULL DEFAULT ''",
    "email": "VARCHAR(100) NOT NULL DEFAULT ''",
    "department": "VARCHAR(100) NOT NULL DEFAULT ''",
    "position": "VARCHAR(100) NOT NULL DEFAULT ''",
    "hire_date": "DATE NOT NULL DEFAULT '2020-01-01'",
    "salary": "DECIMAL(10,2) DEFAULT 0.00",
    "is_active": "BOOLEAN NOT NULL DEFAULT TRUE",
    "created_at": "TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
    "updated_at": "TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP",
}

NORMALIZE_DATES_SQL = (
    "UPDATE employees SET hire_date = '2020-01-01' WHERE hire_date = '0000-00-00' OR hire_date IS NULL",
    "UPDATE employees SET created_at = NOW() WHERE created_at = '0000-00-00 00:00:00' OR created_at IS NULL",
    "UPDATE employees SET updated_at = NOW() WHERE updated_at = '0000-00-00 00:00:00' OR updated_at IS NULL",
)

SAMPLE_EMPLOYEES = (
    ("John", "Doe", "john.doe@company.com", "Engineering", "Software Engineer", date(2022, 1, 15), Decimal("75000.00")),
    ("Jane", "Smith", "jane.smith@company.com", "HR", "HR Manager", date(2021, 3, 10), Decimal("65000.00")),
    ("Mike", "Johnson", "mike.johnson@company.com", "Sales", "Sales Representative", date(2023, 6, 1), Decimal("55000.00")),
    ("Sarah", "Williams", "sarah.williams@company.com", "Marketing", "Marketing Specialist", date(2022, 9, 20), Decimal("60000.00")),
    ("David", "Brown", "david.brown@company.com", "Finance", "Financial Analyst", date(2021, 11, 5), Decimal("70000.00")),
)


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
        database=str(db_config.get("database", "ems")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def table_exists(cur, database: str) -> bool:
    cur.execute(
        "SELECT COUNT(*) AS total FROM information_schema.tables WHERE table_schema=%s AND table_name=%s",
        (database, TABLE_NAME),
    )
    row = cur.fetchone()
    return bool(row and int(row["total"]))


def existing_columns(cur, database: str) -> set[str]:
    cur.execute(
        "SELECT column_name AS name FROM information_schema.columns WHERE table_schema=%s AND table_name=%s",
        (database, TABLE_NAME),
    )
    return {str(r["name"]).lower() for r in cur.fetchall()}


def ensure_columns(cur, database: str) -> list[str]:
    """ALTER TABLE ADD every expected column the table is missing. Returns what was added."""

    present = existing_columns(cur, database)
    added: list[str] = []
    for name, definition in EXPECTED_COLUMNS.items():
        if name in present:
            continue
        try:
            cur.execute(f"ALTER TABLE {TABLE_NAME} ADD COLUMN {name} {definition}")
            added.append(name)
            logger.info("Added %s column", name)
        except mysql.connector.Error:
            logger.exception("Could not add %s column", name)
    return added


def normalize_dates(cur) -> None:
    for stmt in NORMALIZE_DATES_SQL:
        try:
            cur.execute(stmt)
        except mysql.connector.Error:
            logger.exception("Date normalization failed: %s", stmt)


def ensure_employee_table(cur, database: str) -> bool:
    """Create the table, or repair an existing one. Returns True when it was created."""

    if not table_exists(cur, database):
        logger.info("Creating employees table...")
        cur.execute(CREATE_TABLE_SQL)
        logger.info("Employees table created successfully")
        return True

    logger.info("Employees table exists, checking structure...")
    ensure_columns(cur, database)
    normalize_dates(cur)
    return False


def seed_sample_employees(cur) -> int:
    """Insert the sample employees when the table is empty. Returns rows inserted."""

    cur.execute(f"SELECT COUNT(*) AS total FROM {TABLE_NAME}")
    row = cur.fetchone()
    count = int(row["total"]) if row else 0
    if count:
        logger.info("Found %s existing employees, skipping sample data creation", count)
        return 0

    logger.info("No employees found, creating sample data...")
    cur.executemany(
        f"""
        INSERT INTO {TABLE_NAME}(first_name, last_name, email, department, position, hire_date, salary, is_active)
        VALUES(%s,%s,%s,%s,%s,%s,%s,TRUE)
        """,
        list(SAMPLE_EMPLOYEES),
    )
    logger.info("Created %s sample employees", len(SAMPLE_EMPLOYEES))
    return len(SAMPLE_EMPLOYEES)


def _quiet_rollback(conn) -> None:
    try:
        conn.rollback()
    except Exception:
        logger.warning("Rollback failed", exc_info=True)


def run_bootstrap(db_config: dict, *, seed: bool = True) -> bool:
    """Run every startup step. Never raises; returns False if any step failed."""

    logger.info("Starting database initialization...")
    target = _as_target(db_config)
    ok = True

    try:
        ensure_database_exists(db_config)
    except Exception:
        logger.exception("Could not ensure database %s exists", target.database)
        ok = False

    try:
        conn = _connect(target)
    except Exception:
        logger.exception("Error during database initialization")
        return False

    try:
        cur = conn.cursor(dictionary=True)

        try:
            ensure_employee_table(cur, target.database)
            conn.commit()
        except Exception:
            logger.exception("Error ensuring table structure")
            _quiet_rollback(conn)
            ok = False

        if seed:
            try:
                seed_sample_employees(cur)
                conn.commit()
            except Exception:
                logger.exception("Error initializing sample data")
                _quiet_rollback(conn)
                ok = False
    except Exception:
        logger.exception("Error during database initialization")
        ok = False
    finally:
        try:
            conn.close()
        except Exception:
            logger.warning("Could not close bootstrap connection", exc_info=True)

    if ok:
        logger.info("Database initialization completed successfully!")
    return ok


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
