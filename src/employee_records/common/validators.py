from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..core.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_BY,
    DEFAULT_SORT_DIRECTION,
    MAX_PAGE_SIZE,
    SORTABLE_FIELDS,
)
from ..core.enums import SortDirection
from ..core.exceptions import FieldError, ValidationError
from ..employees.model import EmployeeInput
from .datetime_utils import parse_iso_date, today_local
from .pagination import PageRequest

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# DECIMAL(10,2)
SALARY_MAX_INTEGER_DIGITS = 8


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value).strip()


def require_non_empty(errors: list[FieldError], value: str, field_name: str, label: str) -> bool:
    if not value:
        errors.append(FieldError(field_name, f"{label} is required"))
        return False
    return True


def require_length(
    errors: list[FieldError], value: str, field_name: str, label: str, *, min_len: int = 0, max_len: int
) -> None:
    if len(value) < min_len or len(value) > max_len:
        if min_len:
            errors.append(FieldError(field_name, f"{label} must be between {min_len} and {max_len} characters"))
        else:
            errors.append(FieldError(field_name, f"{label} must be at most {max_len} characters"))


def _parse_salary(raw: Any) -> tuple[Optional[Decimal], Optional[str]]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None, None
    if isinstance(raw, bool):
        return None, "Salary must be a number"
    try:
        salary = Decimal(str(raw).strip())
    except InvalidOperation:
        return None, "Salary must be a number"
    if not salary.is_finite():
        return None, "Salary must be a number"
    if salary < 0:
        return None, "Salary must be a positive number"
    if salary >= Decimal(10) ** SALARY_MAX_INTEGER_DIGITS:
        return None, "Salary is too large"
    if salary != salary.quantize(Decimal("0.01")):
        return None, "Salary can have at most 2 decimal places"
    return salary.quantize(Decimal("0.01")), None


def validate_employee(data: Mapping[str, Any]) -> list[FieldError]:
    """Collect every field-level problem in an employee payload.

    Keys are the camelCase names used by both the JSON API and the HTML form.
    """

    errors: list[FieldError] = []

    for key, label in (("firstName", "First name"), ("lastName", "Last name")):
        value = _text(data, key)
        if require_non_empty(errors, value, key, label):
            require_length(errors, value, key, label, min_len=2, max_len=50)

    email = _text(data, "email")
    if require_non_empty(errors, email, "email", "Email"):
        if len(email) > 100:
            errors.append(FieldError("email", "Email must be at most 100 characters"))
        elif not EMAIL_RE.match(email):
            errors.append(FieldError("email", "Please provide a valid email address"))

    for key, label in (("department", "Department"), ("position", "Position")):
        value = _text(data, key)
        if require_non_empty(errors, value, key, label):
            require_length(errors, value, key, label, max_len=100)

    hire_date_s = _text(data, "hireDate")
    if require_non_empty(errors, hire_date_s, "hireDate", "Hire date"):
        try:
            hire_date = parse_iso_date(hire_date_s)
        except ValueError:
            errors.append(FieldError("hireDate", "Please provide a valid date in YYYY-MM-DD format"))
        else:
            if hire_date > today_local():
                errors.append(FieldError("hireDate", "Hire date cannot be in the future"))

    _, salary_error = _parse_salary(data.get("salary"))
    if salary_error:
        errors.append(FieldError("salary", salary_error))

    return errors


def parse_employee_input(data: Mapping[str, Any]) -> EmployeeInput:
    """Validate and convert a payload into an EmployeeInput.

    Raises ValidationError with the full list of field errors.
    """
    errors = validate_employee(data)
    if errors:
        raise ValidationError(errors)

    salary, _ = _parse_salary(data.get("salary"))
    return EmployeeInput(
        first_name=_text(data, "firstName"),
        last_name=_text(data, "lastName"),
        email=_text(data, "email"),
        department=_text(data, "department"),
        position=_text(data, "position"),
        hire_date=parse_iso_date(_text(data, "hireDate")),
        salary=salary,
    )


def _int_param(errors: list[FieldError], raw: Optional[str], field_name: str, default: int) -> int:
    if raw is None or not str(raw).strip():
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        errors.append(FieldError(field_name, f"{field_name} must be an integer"))
        return default


def parse_page_request(args: Mapping[str, Any]) -> PageRequest:
    """Turn page/size/sortBy/sortDirection query args into a PageRequest."""

    errors: list[FieldError] = []

    page = _int_param(errors, args.get("page"), "page", DEFAULT_PAGE)
    if page < 0:
        errors.append(FieldError("page", "page must be zero or greater"))

    size = _int_param(errors, args.get("size"), "size", DEFAULT_PAGE_SIZE)
    if size < 1 or size > MAX_PAGE_SIZE:
        errors.append(FieldError("size", f"size must be between 1 and {MAX_PAGE_SIZE}"))

    sort_by = str(args.get("sortBy") or DEFAULT_SORT_BY).strip()
    column = SORTABLE_FIELDS.get(sort_by)
    if column is None and sort_by in SORTABLE_FIELDS.values():
        column = sort_by
    if column is None:
        errors.append(FieldError("sortBy", f"Invalid sort field: {sort_by}"))

    direction_s = str(args.get("sortDirection") or DEFAULT_SORT_DIRECTION).strip().lower()
    try:
        direction = SortDirection(direction_s)
    except ValueError:
        errors.append(FieldError("sortDirection", "sortDirection must be asc or desc"))
        direction = SortDirection.ASC

    if errors:
        raise ValidationError(errors)

    return PageRequest(page=page, size=size, sort_by=column, direction=direction)
