"""
Persistence boundary for the leave core.

Services receive a ``LeaveRepository`` at construction and only ever see the
value records from ``leave_management.domain``. Check-then-mutate sequences
must run inside ``transaction()``.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import ContextManager, Iterable, List, Optional, Tuple

from leave_management.domain import (
    BalanceRecord,
    EmployeeRecord,
    EmployeeRole,
    LeaveCategoryRecord,
    LeaveRequestRecord,
    LeaveStatus,
)


class LeaveRepository(ABC):

    # --- Unit of work ---

    @abstractmethod
    def transaction(self) -> ContextManager[None]:
        """Run the enclosed reads and writes as one atomic unit.

        Nested calls join the outermost transaction. Any exception rolls
        everything back and re-raises.
        """

    @property
    @abstractmethod
    def in_transaction(self) -> bool:
        ...

    # --- Employees ---

    @abstractmethod
    def get_employee(self, employee_id: int) -> Optional[EmployeeRecord]:
        ...

    @abstractmethod
    def get_employee_by_email(self, email: str) -> Optional[EmployeeRecord]:
        ...

    @abstractmethod
    def list_employees(self, role: Optional[EmployeeRole] = None) -> List[EmployeeRecord]:
        ...

    @abstractmethod
    def email_in_use(self, email: str, exclude_id: Optional[int] = None) -> bool:
        ...

    @abstractmethod
    def add_employee(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        hashed_password: str,
        role: EmployeeRole,
        department: Optional[str] = None,
        designation: Optional[str] = None,
        contact_no: Optional[str] = None,
    ) -> EmployeeRecord:
        ...

    @abstractmethod
    def update_employee(self, employee_id: int, **fields) -> EmployeeRecord:
        ...

    @abstractmethod
    def delete_employee(self, employee_id: int) -> None:
        """Delete the employee together with its balances and requests."""

    # --- Leave categories ---

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[LeaveCategoryRecord]:
        ...

    @abstractmethod
    def list_categories(self) -> List[LeaveCategoryRecord]:
        ...

    @abstractmethod
    def add_category(
        self,
        name: str,
        description: Optional[str] = None,
        valid_from: Optional[date] = None,
        valid_to: Optional[date] = None,
    ) -> LeaveCategoryRecord:
        ...

    # --- Balances ---

    @abstractmethod
    def get_balance(self, employee_id: int, category_id: int, *, lock: bool = False) -> Optional[BalanceRecord]:
        """Read one balance row; ``lock`` takes a row lock for the open transaction."""

    @abstractmethod
    def list_balances(self, employee_id: int) -> List[BalanceRecord]:
        ...

    @abstractmethod
    def decrement_balance(self, employee_id: int, category_id: int, days: int) -> bool:
        """Subtract ``days`` only if at least that many remain. False if nothing changed."""

    @abstractmethod
    def replace_balances(self, employee_id: int, balances: Iterable[Tuple[int, int]]) -> List[BalanceRecord]:
        """Delete every balance row of the employee and insert (category_id, days) pairs."""

    # --- Leave requests ---

    @abstractmethod
    def get_request(
        self,
        request_id: int,
        *,
        employee_id: Optional[int] = None,
        lock: bool = False,
    ) -> Optional[LeaveRequestRecord]:
        """Read a request, optionally restricted to one owner."""

    @abstractmethod
    def add_request(
        self,
        *,
        employee_id: int,
        category_id: int,
        start_date: date,
        end_date: date,
        reason: str,
        submitted_at: datetime,
    ) -> LeaveRequestRecord:
        """Persist a new Pending request."""

    @abstractmethod
    def set_request_status(self, request_id: int, expected_version: int, status: LeaveStatus) -> bool:
        """Move a Pending request at ``expected_version`` to ``status``.

        Returns False when the row was changed by someone else in the
        meantime (version moved or status no longer Pending).
        """

    @abstractmethod
    def list_requests(
        self,
        employee_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
    ) -> List[LeaveRequestRecord]:
        """Requests ordered newest submission first."""
