from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid.

    Carries every field-level problem found, not just the first one.
    """

    def __init__(self, errors: Iterable[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors) or "Validation failed")

    def as_dict(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for error in self.errors:
            out.setdefault(error.field, error.message)
        return out


class DuplicateEmailError(DomainError):
    """Raised when an email is already used by another employee row."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already exists: {email}")


class EmployeeNotFoundError(DomainError):
    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Employee not found with id: {employee_id}")


class DataAccessError(Exception):
    """Raised by the persistence layer when the database call fails."""

    def __init__(self, message: str, *, errno: Optional[int] = None):
        self.errno = errno
        super().__init__(message)
