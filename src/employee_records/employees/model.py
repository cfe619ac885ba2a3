from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Employee:
    """Domain entity: one row of the employees table.

    Note: Plain data object, no database access here.
    """

    id: int
    first_name: str
    last_name: str
    email: str
    department: str
    position: str
    hire_date: date
    salary: Optional[Decimal] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "fullName": self.full_name,
            "email": self.email,
            "department": self.department,
            "position": self.position,
            "hireDate": _iso(self.hire_date),
            "salary": str(self.salary) if self.salary is not None else None,
            "isActive": self.is_active,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass(frozen=True)
class EmployeeInput:
    """Replaceable fields of an employee, already validated and typed."""

    first_name: str
    last_name: str
    email: str
    department: str
    position: str
    hire_date: date
    salary: Optional[Decimal] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class EmployeeStatistics:
    """Read-model for the dashboard and the statistics endpoint."""

    total_employees: int
    department_stats: dict[str, int] = field(default_factory=dict)
    departments: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "departmentStats": dict(self.department_stats),
            "departments": list(self.departments),
        }
