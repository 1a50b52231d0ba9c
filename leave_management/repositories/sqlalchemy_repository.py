import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterable, Iterator, List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.orm import Session

from leave_management.domain import (
    BalanceRecord,
    EmployeeRecord,
    EmployeeRole,
    LeaveCategoryRecord,
    LeaveRequestRecord,
    LeaveStatus,
)
from leave_management.models.employee import Employee
from leave_management.models.leave_balance import LeaveBalance
from leave_management.models.leave_category import LeaveCategory
from leave_management.models.leave_request import LeaveRequest
from leave_management.repositories.base import LeaveRepository

logger = logging.getLogger(__name__)


def _employee_record(row: Employee) -> EmployeeRecord:
    return EmployeeRecord(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        role=row.role,
        department=row.department,
        designation=row.designation,
        contact_no=row.contact_no,
        created_at=row.created_at,
        hashed_password=row.hashed_password,
    )


def _category_record(row: LeaveCategory) -> LeaveCategoryRecord:
    return LeaveCategoryRecord(
        id=row.id,
        name=row.name,
        description=row.description,
        valid_from=row.valid_from,
        valid_to=row.valid_to,
    )


def _balance_record(row: LeaveBalance, category_name: Optional[str] = None) -> BalanceRecord:
    return BalanceRecord(
        employee_id=row.employee_id,
        category_id=row.category_id,
        remaining_days=row.remaining_days,
        category_name=category_name,
    )


def _request_record(
    row: LeaveRequest,
    employee_name: Optional[str] = None,
    category_name: Optional[str] = None,
) -> LeaveRequestRecord:
    return LeaveRequestRecord(
        id=row.id,
        employee_id=row.employee_id,
        category_id=row.category_id,
        start_date=row.start_date,
        end_date=row.end_date,
        submitted_at=row.submitted_at,
        reason=row.reason,
        status=row.status,
        version=row.version,
        employee_name=employee_name,
        category_name=category_name,
    )


class SqlAlchemyLeaveRepository(LeaveRepository):
    """
    LeaveRepository backed by a SQLAlchemy session.

    Status and balance writes are conditional UPDATE statements so the
    database, not the Python process, decides which of two racing writers wins.
    Reads use populate_existing() because those UPDATEs bypass the identity map.
    """

    def __init__(self, db: Session):
        self.db = db
        self._depth = 0

    # --- Unit of work ---

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._depth = 0

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    # --- Employees ---

    def get_employee(self, employee_id: int) -> Optional[EmployeeRecord]:
        row = self.db.get(Employee, employee_id)
        return _employee_record(row) if row else None

    def get_employee_by_email(self, email: str) -> Optional[EmployeeRecord]:
        row = self.db.query(Employee).filter(Employee.email == email).first()
        return _employee_record(row) if row else None

    def list_employees(self, role: Optional[EmployeeRole] = None) -> List[EmployeeRecord]:
        query = self.db.query(Employee)
        if role is not None:
            query = query.filter(Employee.role == role)
        return [_employee_record(row) for row in query.order_by(Employee.id).all()]

    def email_in_use(self, email: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(Employee.id).filter(Employee.email == email)
        if exclude_id is not None:
            query = query.filter(Employee.id != exclude_id)
        return query.first() is not None

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
        row = Employee(
            first_name=first_name,
            last_name=last_name,
            email=email,
            hashed_password=hashed_password,
            role=role,
            department=department,
            designation=designation,
            contact_no=contact_no,
        )
        self.db.add(row)
        self.db.flush()
        self.db.refresh(row)
        return _employee_record(row)

    def update_employee(self, employee_id: int, **fields) -> EmployeeRecord:
        row = self.db.get(Employee, employee_id)
        if row is None:
            raise LookupError(f"Employee {employee_id} does not exist")
        for name, value in fields.items():
            if not hasattr(Employee, name):
                raise AttributeError(f"Employee has no field {name!r}")
            setattr(row, name, value)
        self.db.flush()
        return _employee_record(row)

    def delete_employee(self, employee_id: int) -> None:
        # ORM-level deletes keep the identity map consistent with the table
        for model in (LeaveRequest, LeaveBalance):
            for row in self.db.query(model).filter(model.employee_id == employee_id).all():
                self.db.delete(row)
        self.db.flush()
        row = self.db.get(Employee, employee_id)
        if row is not None:
            self.db.delete(row)
            self.db.flush()

    # --- Leave categories ---

    def get_category(self, category_id: int) -> Optional[LeaveCategoryRecord]:
        row = self.db.get(LeaveCategory, category_id)
        return _category_record(row) if row else None

    def list_categories(self) -> List[LeaveCategoryRecord]:
        rows = self.db.query(LeaveCategory).order_by(LeaveCategory.id).all()
        return [_category_record(row) for row in rows]

    def add_category(
        self,
        name: str,
        description: Optional[str] = None,
        valid_from: Optional[date] = None,
        valid_to: Optional[date] = None,
    ) -> LeaveCategoryRecord:
        row = LeaveCategory(name=name, description=description, valid_from=valid_from, valid_to=valid_to)
        self.db.add(row)
        self.db.flush()
        return _category_record(row)

    # --- Balances ---

    def get_balance(self, employee_id: int, category_id: int, *, lock: bool = False) -> Optional[BalanceRecord]:
        query = self.db.query(LeaveBalance).filter(
            LeaveBalance.employee_id == employee_id,
            LeaveBalance.category_id == category_id,
        ).populate_existing()
        if lock:
            query = query.with_for_update()
        row = query.first()
        return _balance_record(row) if row else None

    def list_balances(self, employee_id: int) -> List[BalanceRecord]:
        rows = (
            self.db.query(LeaveBalance, LeaveCategory.name)
            .join(LeaveCategory, LeaveBalance.category_id == LeaveCategory.id)
            .filter(LeaveBalance.employee_id == employee_id)
            .order_by(LeaveBalance.category_id)
            .populate_existing()
            .all()
        )
        return [_balance_record(row, name) for row, name in rows]

    def decrement_balance(self, employee_id: int, category_id: int, days: int) -> bool:
        result = self.db.execute(
            update(LeaveBalance)
            .where(
                LeaveBalance.employee_id == employee_id,
                LeaveBalance.category_id == category_id,
                LeaveBalance.remaining_days >= days,
            )
            .values(remaining_days=LeaveBalance.remaining_days - days)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def replace_balances(self, employee_id: int, balances: Iterable[Tuple[int, int]]) -> List[BalanceRecord]:
        for row in self.db.query(LeaveBalance).filter(LeaveBalance.employee_id == employee_id).all():
            self.db.delete(row)
        # Deletes must reach the database before inserts hit the unique constraint
        self.db.flush()
        for category_id, days in balances:
            self.db.add(LeaveBalance(employee_id=employee_id, category_id=category_id, remaining_days=days))
        self.db.flush()
        return self.list_balances(employee_id)

    # --- Leave requests ---

    def get_request(
        self,
        request_id: int,
        *,
        employee_id: Optional[int] = None,
        lock: bool = False,
    ) -> Optional[LeaveRequestRecord]:
        query = self.db.query(LeaveRequest).filter(LeaveRequest.id == request_id).populate_existing()
        if employee_id is not None:
            query = query.filter(LeaveRequest.employee_id == employee_id)
        if lock:
            query = query.with_for_update()
        row = query.first()
        if row is None:
            return None
        employee = self.db.get(Employee, row.employee_id)
        category = self.db.get(LeaveCategory, row.category_id)
        return _request_record(
            row,
            employee_name=f"{employee.first_name} {employee.last_name}" if employee else None,
            category_name=category.name if category else None,
        )

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
        row = LeaveRequest(
            employee_id=employee_id,
            category_id=category_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            version=1,
            submitted_at=submitted_at,
        )
        self.db.add(row)
        self.db.flush()
        return self.get_request(row.id)

    def set_request_status(self, request_id: int, expected_version: int, status: LeaveStatus) -> bool:
        result = self.db.execute(
            update(LeaveRequest)
            .where(
                LeaveRequest.id == request_id,
                LeaveRequest.version == expected_version,
                LeaveRequest.status == LeaveStatus.PENDING,
            )
            .values(status=status, version=LeaveRequest.version + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def list_requests(
        self,
        employee_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
    ) -> List[LeaveRequestRecord]:
        query = (
            self.db.query(LeaveRequest, Employee.first_name, Employee.last_name, LeaveCategory.name)
            .join(Employee, LeaveRequest.employee_id == Employee.id)
            .join(LeaveCategory, LeaveRequest.category_id == LeaveCategory.id)
            .populate_existing()
        )
        if employee_id is not None:
            query = query.filter(LeaveRequest.employee_id == employee_id)
        if status is not None:
            query = query.filter(LeaveRequest.status == status)
        rows = query.order_by(LeaveRequest.submitted_at.desc(), LeaveRequest.id.desc()).all()
        return [
            _request_record(row, employee_name=f"{first} {last}", category_name=category_name)
            for row, first, last, category_name in rows
        ]
