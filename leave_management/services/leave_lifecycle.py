"""
Leave request lifecycle.

    Pending -> Approved | Rejected | Cancelled

All three outcomes are terminal. The engine is the only writer of a
request's status and the only caller of ``BalanceLedger.deduct``; each
operation below runs as a single repository transaction and returns a
``Result`` rather than raising business-rule errors.

Balance is checked when a request is created but only deducted when it is
approved, so approval re-checks it: two pending requests may both fit the
balance on their own while only the first approved one still fits.
"""
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from leave_management.core.config import settings
from leave_management.core.exceptions import (
    CancellationWindowClosed,
    ConcurrentModification,
    InvalidTransition,
    NotFoundError,
)
from leave_management.core.result import returns_result
from leave_management.domain import (
    LeaveCategoryRecord,
    LeaveRequestRecord,
    LeaveStatus,
    duration_days,
)
from leave_management.repositories.base import LeaveRepository
from leave_management.services.balance_ledger import BalanceLedger
from leave_management.services.base import BaseService
from leave_management.services.request_validator import validate_request

ADMIN_DECISIONS = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LeaveLifecycleEngine(BaseService):

    def __init__(
        self,
        repository: LeaveRepository,
        ledger: Optional[BalanceLedger] = None,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = _utcnow,
        cancellation_window_days: Optional[int] = None,
    ):
        super().__init__(repository)
        self.ledger = ledger or BalanceLedger(repository)
        self._today = today
        self._now = now
        self.cancellation_window_days = (
            settings.cancellation_window_days if cancellation_window_days is None else cancellation_window_days
        )

    @returns_result
    def create(
        self,
        employee_id: int,
        category_id: int,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequestRecord:
        error = validate_request(start_date, end_date, reason, self._today())
        if error is not None:
            raise error

        days = duration_days(start_date, end_date)
        with self.repository.transaction():
            # Balance is only checked here; deduction waits for approval
            self.ledger.check_sufficient(employee_id, category_id, days).unwrap()
            leave = self.repository.add_request(
                employee_id=employee_id,
                category_id=category_id,
                start_date=start_date,
                end_date=end_date,
                reason=reason.strip(),
                submitted_at=self._now(),
            )

        self.log_info(
            "Leave request submitted",
            leave_request_id=leave.id,
            employee_id=employee_id,
            category_id=category_id,
            days=days,
        )
        return leave

    @returns_result
    def cancel(self, request_id: int, employee_id: int) -> LeaveRequestRecord:
        with self.repository.transaction():
            leave = self.repository.get_request(request_id, employee_id=employee_id, lock=True)
            if leave is None:
                raise NotFoundError("Leave not found")
            if leave.status.is_terminal:
                raise InvalidTransition(leave.status.value, LeaveStatus.CANCELLED.value)
            if (leave.start_date - self._today()).days < self.cancellation_window_days:
                raise CancellationWindowClosed(self.cancellation_window_days)

            self._write_status(leave, LeaveStatus.CANCELLED)
            updated = self.repository.get_request(request_id)

        self.log_info("Leave request cancelled", leave_request_id=request_id, employee_id=employee_id)
        return updated

    @returns_result
    def update_status(self, request_id: int, new_status: LeaveStatus) -> LeaveRequestRecord:
        try:
            target = LeaveStatus(new_status)
        except ValueError:
            target = None
        with self.repository.transaction():
            leave = self.repository.get_request(request_id, lock=True)
            if leave is None:
                raise NotFoundError("Leave not found")
            if leave.status.is_terminal or target not in ADMIN_DECISIONS:
                raise InvalidTransition(leave.status.value, target.value if target else str(new_status))

            if target is LeaveStatus.APPROVED:
                days = leave.duration_days
                # The balance may have shrunk since the request was created
                self.ledger.check_sufficient(leave.employee_id, leave.category_id, days).unwrap()
                self.ledger.deduct(leave.employee_id, leave.category_id, days).unwrap()

            self._write_status(leave, target)
            updated = self.repository.get_request(request_id)

        self.log_info(
            f"Leave request {target.value.lower()}",
            leave_request_id=request_id,
            employee_id=leave.employee_id,
            status=target.value,
        )
        return updated

    def _write_status(self, leave: LeaveRequestRecord, status: LeaveStatus) -> None:
        if not self.repository.set_request_status(leave.id, leave.version, status):
            self.log_warning("Concurrent leave status write detected", leave_request_id=leave.id)
            raise ConcurrentModification(leave.id)

    # --- Reads ---

    def requests_for(self, employee_id: int) -> List[LeaveRequestRecord]:
        return self.repository.list_requests(employee_id=employee_id)

    def all_requests(self, employee_id: Optional[int] = None) -> List[LeaveRequestRecord]:
        return self.repository.list_requests(employee_id=employee_id)

    def categories(self) -> List[LeaveCategoryRecord]:
        return self.repository.list_categories()
