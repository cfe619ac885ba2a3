from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.pagination import Page, PageRequest
from .model import Employee, EmployeeInput


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note: the service layer depends on this interface, not on a concrete database.
    Every "active" query filters is_active = true.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def find_active(self, page_request: PageRequest) -> Page[Employee]:
        raise NotImplementedError

    def find_active_by_department(self, department: str, page_request: PageRequest) -> Page[Employee]:
        raise NotImplementedError

    def search_active(self, term: str, page_request: PageRequest) -> Page[Employee]:
        """Case-insensitive substring match on first/last name, email, department, position."""

        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError

    def count_active_by_department(self) -> dict[str, int]:
        raise NotImplementedError

    def list_departments(self) -> Sequence[str]:
        """Distinct departments of active employees, sorted."""

        raise NotImplementedError

    def exists_by_email(self, email: str) -> bool:
        raise NotImplementedError

    def exists_by_email_for_other_id(self, email: str, employee_id: int) -> bool:
        raise NotImplementedError

    def create(self, data: EmployeeInput) -> int:
        """Insert an active employee. Returns the new id."""

        raise NotImplementedError

    def update(self, employee_id: int, data: EmployeeInput) -> bool:
        raise NotImplementedError

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError
