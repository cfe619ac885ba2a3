from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Sequence

import pytest

from employee_records.common.pagination import Page, PageRequest
from employee_records.container import Container
from employee_records.employees.model import Employee, EmployeeInput
from employee_records.employees.service import EmployeeService
from employee_records.main import create_app

BASE_TIME = datetime(2026, 1, 1, 9, 0, 0)


class InMemoryEmployees:
    """EmployeeRepository kept in a dict, mirroring the SQL semantics."""

    SEARCH_FIELDS = ("first_name", "last_name", "email", "department", "position")

    def __init__(self):
        self.rows: dict[int, Employee] = {}
        self._next_id = 1

    def _paged(self, rows: Sequence[Employee], page_request: PageRequest) -> Page[Employee]:
        descending = page_request.direction.value == "desc"
        # id breaks ties in the same direction as the requested sort
        ordered = sorted(rows, key=lambda e: e.id, reverse=descending)
        if page_request.sort_by != "id":
            ordered = sorted(
                ordered,
                key=lambda e: (getattr(e, page_request.sort_by) is None, getattr(e, page_request.sort_by)),
                reverse=descending,
            )
        start = page_request.offset
        return Page(
            items=ordered[start : start + page_request.size],
            page=page_request.page,
            size=page_request.size,
            total_items=len(ordered),
        )

    def _active(self) -> list[Employee]:
        return [e for e in self.rows.values() if e.is_active]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.rows.get(employee_id)

    def find_active(self, page_request: PageRequest) -> Page[Employee]:
        return self._paged(self._active(), page_request)

    def find_active_by_department(self, department: str, page_request: PageRequest) -> Page[Employee]:
        return self._paged([e for e in self._active() if e.department == department], page_request)

    def search_active(self, term: str, page_request: PageRequest) -> Page[Employee]:
        needle = term.lower()
        hits = [e for e in self._active() if any(needle in getattr(e, f).lower() for f in self.SEARCH_FIELDS)]
        return self._paged(hits, page_request)

    def count_active(self) -> int:
        return len(self._active())

    def count_active_by_department(self) -> dict[str, int]:
        out: dict[str, int] = {}
        for e in self._active():
            out[e.department] = out.get(e.department, 0) + 1
        return out

    def list_departments(self) -> Sequence[str]:
        return sorted({e.department for e in self._active()})

    def exists_by_email(self, email: str) -> bool:
        return any(e.email == email for e in self.rows.values())

    def exists_by_email_for_other_id(self, email: str, employee_id: int) -> bool:
        return any(e.email == email and e.id != employee_id for e in self.rows.values())

    def create(self, data: EmployeeInput) -> int:
        employee_id = self._next_id
        self._next_id += 1
        stamp = BASE_TIME + timedelta(minutes=employee_id)
        self.rows[employee_id] = Employee(
            id=employee_id,
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            department=data.department,
            position=data.position,
            hire_date=data.hire_date,
            salary=data.salary,
            is_active=True,
            created_at=stamp,
            updated_at=stamp,
        )
        return employee_id

    def update(self, employee_id: int, data: EmployeeInput) -> bool:
        current = self.rows.get(employee_id)
        if current is None:
            return False
        self.rows[employee_id] = replace(
            current,
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            department=data.department,
            position=data.position,
            hire_date=data.hire_date,
            salary=data.salary,
            updated_at=(current.updated_at or BASE_TIME) + timedelta(days=1),
        )
        return True

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        current = self.rows.get(employee_id)
        if current is None:
            return False
        self.rows[employee_id] = replace(current, is_active=is_active)
        return True

    def delete_by_id(self, employee_id: int) -> bool:
        return self.rows.pop(employee_id, None) is not None


def make_input(
    first_name: str = "Ada",
    last_name: str = "Lovelace",
    email: Optional[str] = None,
    department: str = "Engineering",
    position: str = "Software Engineer",
    hire_date: date = date(2022, 1, 15),
    salary: Optional[Decimal] = Decimal("75000.00"),
) -> EmployeeInput:
    return EmployeeInput(
        first_name=first_name,
        last_name=last_name,
        email=email or f"{first_name.lower()}.{last_name.lower()}@company.com",
        department=department,
        position=position,
        hire_date=hire_date,
        salary=salary,
    )


@pytest.fixture
def employee_input():
    return make_input


@pytest.fixture
def repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def service(repo) -> EmployeeService:
    return EmployeeService(repo)


@pytest.fixture
def app(monkeypatch, repo, service):
    monkeypatch.setenv("APP_ENV", "testing")
    container = Container(conn=None, employees_repo=repo, employee_service=service, database_name="ems_test")
    flask_app = create_app(container=container)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def payload():
    def _payload(**overrides) -> dict:
        body = {
            "firstName": "John",
            "lastName": "Doe",
            "email": "john.doe@company.com",
            "department": "Engineering",
            "position": "Software Engineer",
            "hireDate": "2022-01-15",
            "salary": "75000.00",
        }
        body.update(overrides)
        return body

    return _payload
