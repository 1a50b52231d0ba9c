import pytest
from leave_management.core.exceptions import (
    BalanceNotFound,
    InsufficientBalance,
    LeaveValidationError,
    NotFoundError,
)
from tests.conftest import CASUAL, SICK, UNPAID

def _remaining(ledger, employee_id):
    return {b.category_id: b.remaining_days for b in ledger.balances_for(employee_id)}

def test_check_sufficient_passes_for_exact_balance(ledger, employee):
    result = ledger.check_sufficient(employee.id, CASUAL, 5)
    assert result.ok
    assert result.value.remaining_days == 5

def test_check_sufficient_without_balance_row(ledger, employee):
    result = ledger.check_sufficient(employee.id, UNPAID, 1)
    assert not result.ok
    assert isinstance(result.error, BalanceNotFound)

def test_check_sufficient_reports_shortfall(ledger, employee):
    result = ledger.check_sufficient(employee.id, CASUAL, 6)
    assert isinstance(result.error, InsufficientBalance)
    assert result.error.details == {"available": 5, "requested": 6}

def test_deduct_outside_transaction_is_refused(ledger, employee):
    with pytest.raises(RuntimeError):
        ledger.deduct(employee.id, CASUAL, 1)
    assert _remaining(ledger, employee.id)[CASUAL] == 5

def test_deduct_inside_transaction(ledger, repository, employee):
    with repository.transaction():
        result = ledger.deduct(employee.id, CASUAL, 3)
    assert result.ok
    assert result.value.remaining_days == 2
    assert _remaining(ledger, employee.id)[CASUAL] == 2

def test_deduct_never_goes_negative(ledger, repository, employee):
    with repository.transaction():
        result = ledger.deduct(employee.id, CASUAL, 6)
    assert isinstance(result.error, InsufficientBalance)
    assert result.error.available == 5
    assert _remaining(ledger, employee.id)[CASUAL] == 5

def test_replace_all_swaps_whole_set(ledger, employee):
    result = ledger.replace_all(employee.id, [(UNPAID, 20)])
    assert result.ok
    assert _remaining(ledger, employee.id) == {UNPAID: 20}

def test_replace_all_is_idempotent(ledger, employee):
    balances = [(CASUAL, 7), (SICK, 3)]
    ledger.replace_all(employee.id, balances).unwrap()
    first = ledger.balances_for(employee.id)
    ledger.replace_all(employee.id, balances).unwrap()
    assert ledger.balances_for(employee.id) == first

def test_replace_all_keeps_first_duplicate(ledger, employee):
    ledger.replace_all(employee.id, [(CASUAL, 4), (CASUAL, 9)]).unwrap()
    assert _remaining(ledger, employee.id) == {CASUAL: 4}

def test_replace_all_with_empty_set_clears_balances(ledger, employee):
    ledger.replace_all(employee.id, []).unwrap()
    assert ledger.balances_for(employee.id) == []

def test_replace_all_rejects_negative_days(ledger, employee):
    result = ledger.replace_all(employee.id, [(CASUAL, 2), (SICK, -1)])
    assert result.error.reason == LeaveValidationError.NEGATIVE_ENTITLEMENT
    assert _remaining(ledger, employee.id) == {CASUAL: 5, SICK: 10}

def test_replace_all_rejects_unknown_category(ledger, employee):
    result = ledger.replace_all(employee.id, [(CASUAL, 2), (999, 1)])
    assert isinstance(result.error, NotFoundError)
    # Nothing was half-applied
    assert _remaining(ledger, employee.id) == {CASUAL: 5, SICK: 10}

def test_replace_all_unknown_employee(ledger):
    result = ledger.replace_all(424242, [(CASUAL, 2)])
    assert isinstance(result.error, NotFoundError)

def test_balances_carry_category_names(ledger, employee):
    names = {b.category_id: b.category_name for b in ledger.balances_for(employee.id)}
    assert names == {CASUAL: "Casual Leave", SICK: "Sick Leave"}
