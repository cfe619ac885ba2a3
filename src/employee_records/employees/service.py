from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.pagination import Page, PageRequest
from ..core.exceptions import DuplicateEmailError, EmployeeNotFoundError
from .model import Employee, EmployeeInput, EmployeeStatistics
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use cases: manage employee records.

    Deleting is a soft delete (is_active = false). Lookup by id still returns
    soft-deleted rows; only listings, search and statistics hide them.
    """

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def find(self, employee_id: int) -> Optional[Employee]:
        return self._employees.get_by_id(int(employee_id))

    def get(self, employee_id: int) -> Employee:
        employee = self.find(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(int(employee_id))
        return employee

    def create(self, data: EmployeeInput) -> Employee:
        if self._employees.exists_by_email(data.email):
            raise DuplicateEmailError(data.email)

        employee_id = self._employees.create(data)
        logger.info("Created employee id=%s (%s)", employee_id, data.email)
        return self.get(employee_id)

    def update(self, employee_id: int, data: EmployeeInput) -> Employee:
        current = self.get(employee_id)

        if current.email != data.email and self._employees.exists_by_email_for_other_id(data.email, current.id):
            raise DuplicateEmailError(data.email)

        self._employees.update(current.id, data)
        logger.info("Updated employee id=%s", current.id)
        return self.get(current.id)

    def soft_delete(self, employee_id: int) -> Employee:
        current = self.get(employee_id)
        self._employees.set_active(current.id, is_active=False)
        logger.info("Deactivated employee id=%s", current.id)
        return current

    def hard_delete(self, employee_id: int) -> bool:
        removed = self._employees.delete_by_id(int(employee_id))
        if removed:
            logger.warning("Permanently deleted employee id=%s", employee_id)
        return removed

    def list_active(self, page_request: PageRequest) -> Page[Employee]:
        return self._employees.find_active(page_request)

    def list_by_department(self, department: str, page_request: PageRequest) -> Page[Employee]:
        return self._employees.find_active_by_department(department, page_request)

    def search(self, term: str, page_request: PageRequest) -> Page[Employee]:
        return self._employees.search_active(term, page_request)

    def browse(
        self,
        page_request: PageRequest,
        *,
        search: Optional[str] = None,
        department: Optional[str] = None,
    ) -> Page[Employee]:
        """Listing used by both surfaces: search wins over department, else all active."""

        if search and search.strip():
            return self.search(search.strip(), page_request)
        if department and department.strip():
            return self.list_by_department(department.strip(), page_request)
        return self.list_active(page_request)

    def count_active(self) -> int:
        return self._employees.count_active()

    def departments(self) -> Sequence[str]:
        return list(self._employees.list_departments())

    def statistics(self) -> EmployeeStatistics:
        return EmployeeStatistics(
            total_employees=self._employees.count_active(),
            department_stats=self._employees.count_active_by_department(),
            departments=list(self._employees.list_departments()),
        )
