from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Sequence

from mysql.connector import errorcode

from ..common.pagination import Page, PageRequest
from ..core.constants import SORTABLE_FIELDS
from ..core.exceptions import DataAccessError, DuplicateEmailError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, EmployeeInput
from .repository import EmployeeRepository

COLUMNS = (
    "id, first_name, last_name, email, department, position, hire_date, salary, "
    "is_active, created_at, updated_at"
)

SEARCH_COLUMNS = ("first_name", "last_name", "email", "department", "position")


def _row_to_employee(r: dict) -> Employee:
    salary = r.get("salary")
    return Employee(
        id=int(r["id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r["email"],
        department=r["department"],
        position=r["position"],
        hire_date=r["hire_date"],
        salary=Decimal(salary) if salary is not None else None,
        is_active=bool(r.get("is_active", True)),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _order_by(page_request: PageRequest) -> str:
    # Only whitelisted column names reach the SQL text.
    column = page_request.sort_by
    if column not in SORTABLE_FIELDS.values():
        column = "id"
    direction = "DESC" if page_request.direction.value == "desc" else "ASC"
    if column == "id":
        return f"ORDER BY id {direction}"
    return f"ORDER BY {column} {direction}, id {direction}"


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _page(self, where: str, params: Sequence[Any], page_request: PageRequest) -> Page[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM employees WHERE {where}", tuple(params))
            total = int(fetchone(cur)["total"])

            cur.execute(
                f"""
                SELECT {COLUMNS}
                FROM employees
                WHERE {where}
                {_order_by(page_request)}
                LIMIT %s OFFSET %s
                """,
                (*params, int(page_request.size), int(page_request.offset)),
            )
            items = [_row_to_employee(r) for r in fetchall(cur)]

        return Page(items=items, page=page_request.page, size=page_request.size, total_items=total)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {COLUMNS} FROM employees WHERE id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def find_active(self, page_request: PageRequest) -> Page[Employee]:
        return self._page("is_active = TRUE", (), page_request)

    def find_active_by_department(self, department: str, page_request: PageRequest) -> Page[Employee]:
        return self._page("is_active = TRUE AND department=%s", (department,), page_request)

    def search_active(self, term: str, page_request: PageRequest) -> Page[Employee]:
        pattern = f"%{term.lower()}%"
        matches = " OR ".join(f"LOWER({c}) LIKE %s" for c in SEARCH_COLUMNS)
        return self._page(f"is_active = TRUE AND ({matches})", (pattern,) * len(SEARCH_COLUMNS), page_request)

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees WHERE is_active = TRUE")
            return int(fetchone(cur)["total"])

    def count_active_by_department(self) -> dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT department, COUNT(*) AS total
                FROM employees
                WHERE is_active = TRUE
                GROUP BY department
                ORDER BY department
                """
            )
            return {r["department"]: int(r["total"]) for r in fetchall(cur)}

    def list_departments(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT department FROM employees WHERE is_active = TRUE ORDER BY department")
            return [r["department"] for r in fetchall(cur)]

    def exists_by_email(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS hit FROM employees WHERE email=%s LIMIT 1", (email,))
            return fetchone(cur) is not None

    def exists_by_email_for_other_id(self, email: str, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS hit FROM employees WHERE email=%s AND id<>%s LIMIT 1",
                (email, int(employee_id)),
            )
            return fetchone(cur) is not None

    def create(self, data: EmployeeInput) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(first_name, last_name, email, department, position, hire_date, salary, is_active)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,TRUE)
                    """,
                    (
                        data.first_name,
                        data.last_name,
                        data.email,
                        data.department,
                        data.position,
                        data.hire_date,
                        data.salary,
                    ),
                )
                return int(cur.lastrowid)
        except DataAccessError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise DuplicateEmailError(data.email) from e
            raise

    def update(self, employee_id: int, data: EmployeeInput) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE employees
                    SET first_name=%s, last_name=%s, email=%s, department=%s, position=%s,
                        hire_date=%s, salary=%s, updated_at=CURRENT_TIMESTAMP
                    WHERE id=%s
                    """,
                    (
                        data.first_name,
                        data.last_name,
                        data.email,
                        data.department,
                        data.position,
                        data.hire_date,
                        data.salary,
                        int(employee_id),
                    ),
                )
                return cur.rowcount > 0
        except DataAccessError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise DuplicateEmailError(data.email) from e
            raise

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET is_active=%s, updated_at=CURRENT_TIMESTAMP WHERE id=%s",
                (bool(is_active), int(employee_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (int(employee_id),))
            return cur.rowcount > 0
