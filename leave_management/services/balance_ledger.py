"""
Balance ledger: remaining entitlement per (employee, leave category).

Balances only shrink through ``deduct``, which the lifecycle engine calls
while approving a request, and are rewritten wholesale by ``replace_all``
when an administrator registers or updates an employee.
"""
from typing import Iterable, List, Tuple

from leave_management.core.exceptions import (
    BalanceNotFound,
    InsufficientBalance,
    LeaveValidationError,
    NotFoundError,
)
from leave_management.core.result import returns_result
from leave_management.domain import BalanceRecord
from leave_management.services.base import BaseService


class BalanceLedger(BaseService):

    @returns_result
    def check_sufficient(self, employee_id: int, category_id: int, days: int) -> BalanceRecord:
        """
        Fails with BalanceNotFound when the employee has no entitlement of
        this type, InsufficientBalance when it is smaller than ``days``.
        Inside a transaction the balance row stays locked until commit.
        """
        balance = self.repository.get_balance(
            employee_id, category_id, lock=self.repository.in_transaction
        )
        if balance is None:
            raise BalanceNotFound(employee_id, category_id)
        if balance.remaining_days < days:
            raise InsufficientBalance(available=balance.remaining_days, requested=days)
        return balance

    @returns_result
    def deduct(self, employee_id: int, category_id: int, days: int) -> BalanceRecord:
        if not self.repository.in_transaction:
            raise RuntimeError("BalanceLedger.deduct must run inside the approving transaction")
        if days < 1:
            raise ValueError(f"Deduction must be at least one day, got {days}")

        if not self.repository.decrement_balance(employee_id, category_id, days):
            # Lost a race against another deduction between check and write
            current = self.repository.get_balance(employee_id, category_id)
            if current is None:
                raise BalanceNotFound(employee_id, category_id)
            raise InsufficientBalance(available=current.remaining_days, requested=days)

        balance = self.repository.get_balance(employee_id, category_id)
        self.log_info(
            "Leave balance deducted",
            employee_id=employee_id,
            category_id=category_id,
            days=days,
            remaining_days=balance.remaining_days,
        )
        return balance

    @returns_result
    def replace_all(self, employee_id: int, balances: Iterable[Tuple[int, int]]) -> List[BalanceRecord]:
        """
        Swap the employee's whole balance set for ``balances``
        ((category_id, days) pairs). A repeated category keeps its first entry.
        """
        replacement = {}
        for category_id, days in balances:
            if days < 0:
                raise LeaveValidationError(
                    LeaveValidationError.NEGATIVE_ENTITLEMENT,
                    f"Leave balance for category {category_id} cannot be negative",
                )
            replacement.setdefault(category_id, days)

        with self.repository.transaction():
            if self.repository.get_employee(employee_id) is None:
                raise NotFoundError("Employee not found")
            for category_id in replacement:
                if self.repository.get_category(category_id) is None:
                    raise NotFoundError(f"Leave category {category_id} not found")
            stored = self.repository.replace_balances(employee_id, replacement.items())

        self.log_info("Leave balances replaced", employee_id=employee_id, categories=sorted(replacement))
        return stored

    def balances_for(self, employee_id: int) -> List[BalanceRecord]:
        return self.repository.list_balances(employee_id)


