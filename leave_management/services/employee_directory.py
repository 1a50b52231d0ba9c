"""
Employee accounts: registration, profile updates, deletion and login checks.

Balances are always written through ``BalanceLedger.replace_all`` so the
uniqueness and non-negativity rules live in one place.
"""
from typing import Iterable, List, Optional, Tuple

from leave_management.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from leave_management.core.result import returns_result
from leave_management.core.security import get_password_hash, verify_password
from leave_management.domain import EmployeeRecord, EmployeeRole, LeaveStatus
from leave_management.repositories.base import LeaveRepository
from leave_management.services.balance_ledger import BalanceLedger
from leave_management.services.base import BaseService

BalanceSpec = Iterable[Tuple[int, int]]


class EmployeeDirectory(BaseService):

    def __init__(self, repository: LeaveRepository, ledger: Optional[BalanceLedger] = None):
        super().__init__(repository)
        self.ledger = ledger or BalanceLedger(repository)

    def get(self, employee_id: int) -> Optional[EmployeeRecord]:
        return self.repository.get_employee(employee_id)

    def list_employees(self) -> List[EmployeeRecord]:
        """Only regular employees; administrators are not listed."""
        return self.repository.list_employees(role=EmployeeRole.EMPLOYEE)

    @returns_result
    def authenticate(self, email: str, password: str) -> EmployeeRecord:
        employee = self.repository.get_employee_by_email(email)
        if employee is None or not verify_password(password, employee.hashed_password):
            raise AuthenticationError("Invalid email or password")
        return employee

    @returns_result
    def register(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        department: Optional[str] = None,
        designation: Optional[str] = None,
        contact_no: Optional[str] = None,
        balances: BalanceSpec = (),
        role: EmployeeRole = EmployeeRole.EMPLOYEE,
    ) -> EmployeeRecord:
        with self.repository.transaction():
            if self.repository.email_in_use(email):
                raise ConflictError("User with this email already exists", error_code="EMAIL_IN_USE")
            employee = self.repository.add_employee(
                first_name=first_name,
                last_name=last_name,
                email=email,
                hashed_password=get_password_hash(password),
                role=role,
                department=department,
                designation=designation,
                contact_no=contact_no,
            )
            self.ledger.replace_all(employee.id, balances).unwrap()

        self.log_info("Employee registered", employee_id=employee.id, role=role.value)
        return employee

    @returns_result
    def update(
        self,
        employee_id: int,
        *,
        first_name: str,
        last_name: str,
        email: str,
        department: Optional[str] = None,
        designation: Optional[str] = None,
        contact_no: Optional[str] = None,
        balances: BalanceSpec = (),
    ) -> EmployeeRecord:
        with self.repository.transaction():
            existing = self.repository.get_employee(employee_id)
            if existing is None or existing.is_admin:
                raise NotFoundError("User not found")
            if self.repository.email_in_use(email, exclude_id=employee_id):
                raise ConflictError("Email address is already in use by another user", error_code="EMAIL_IN_USE")
            employee = self.repository.update_employee(
                employee_id,
                first_name=first_name,
                last_name=last_name,
                email=email,
                department=department,
                designation=designation,
                contact_no=contact_no,
            )
            self.ledger.replace_all(employee_id, balances).unwrap()

        self.log_info("Employee updated", employee_id=employee_id)
        return employee

    @returns_result
    def delete(self, employee_id: int) -> None:
        """
        Remove an employee with their balances and requests. Administrators
        and anyone holding an approved leave are kept.
        """
        with self.repository.transaction():
            employee = self.repository.get_employee(employee_id)
            if employee is None or employee.is_admin:
                raise NotFoundError("User not found or cannot be deleted")
            if self.repository.list_requests(employee_id=employee_id, status=LeaveStatus.APPROVED):
                raise ConflictError(
                    "Cannot delete user with approved leave records",
                    error_code="EMPLOYEE_HAS_APPROVED_LEAVE",
                )
            self.repository.delete_employee(employee_id)

        self.log_info("Employee deleted", employee_id=employee_id)
