"""
Plain value records handed across the persistence boundary.

Records reference each other by id only; the repository builds them from ORM
rows so the services never hold live ORM objects.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from .enums import EmployeeRole, LeaveStatus


def duration_days(start_date: date, end_date: date) -> int:
    """Inclusive length of a leave in calendar days."""
    return (end_date - start_date).days + 1


@dataclass(frozen=True)
class EmployeeRecord:
    id: int
    first_name: str
    last_name: str
    email: str
    role: EmployeeRole
    department: Optional[str] = None
    designation: Optional[str] = None
    contact_no: Optional[str] = None
    created_at: Optional[datetime] = None
    hashed_password: str = field(default="", repr=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == EmployeeRole.ADMIN


@dataclass(frozen=True)
class LeaveCategoryRecord:
    id: int
    name: str
    description: Optional[str] = None
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None


@dataclass(frozen=True)
class BalanceRecord:
    employee_id: int
    category_id: int
    remaining_days: int
    category_name: Optional[str] = None


@dataclass(frozen=True)
class LeaveRequestRecord:
    id: int
    employee_id: int
    category_id: int
    start_date: date
    end_date: date
    submitted_at: datetime
    reason: str
    status: LeaveStatus
    version: int = 1
    employee_name: Optional[str] = None
    category_name: Optional[str] = None

    @property
    def duration_days(self) -> int:
        return duration_days(self.start_date, self.end_date)
