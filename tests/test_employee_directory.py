import pytest
from leave_management.core.exceptions import (
    AuthenticationError,
    ConflictError,
    LeaveValidationError,
    NotFoundError,
)
from leave_management.domain import EmployeeRole, LeaveStatus
from tests.conftest import CASUAL, SICK, UNPAID


def _profile(**overrides):
    profile = {
        "first_name": "Nadia",
        "last_name": "Haddad",
        "email": "nadia@example.com",
        "department": "Finance",
        "designation": "Analyst",
        "contact_no": "5550199",
        "balances": [(CASUAL, 12), (SICK, 7)],
    }
    profile.update(overrides)
    return profile


def _remaining(ledger, employee_id):
    return {b.category_id: b.remaining_days for b in ledger.balances_for(employee_id)}


def test_register_creates_employee_with_balances(directory, ledger):
    result = directory.register(password="Password123!", **_profile())

    assert result.ok
    employee = result.value
    assert employee.role is EmployeeRole.EMPLOYEE
    assert employee.full_name == "Nadia Haddad"
    assert employee.hashed_password != "Password123!"
    assert _remaining(ledger, employee.id) == {CASUAL: 12, SICK: 7}


def test_register_duplicate_email(directory, employee):
    result = directory.register(password="Password123!", **_profile(email=employee.email))

    assert isinstance(result.error, ConflictError)
    assert result.error.error_code == "EMAIL_IN_USE"
    assert len(directory.list_employees()) == 1


def test_register_with_negative_balance_creates_nothing(directory):
    result = directory.register(password="Password123!", **_profile(balances=[(CASUAL, -1)]))

    assert result.error.reason == LeaveValidationError.NEGATIVE_ENTITLEMENT
    assert directory.repository.get_employee_by_email("nadia@example.com") is None


def test_list_employees_hides_admins(directory, employee, admin):
    assert [e.id for e in directory.list_employees()] == [employee.id]


def test_update_replaces_profile_and_balances(directory, ledger, employee):
    result = directory.update(
        employee.id,
        **_profile(email="renamed@example.com", balances=[(UNPAID, 30)]),
    )

    assert result.value.email == "renamed@example.com"
    assert result.value.first_name == "Nadia"
    assert _remaining(ledger, employee.id) == {UNPAID: 30}


def test_update_can_keep_own_email(directory, employee):
    assert directory.update(employee.id, **_profile(email=employee.email)).ok


def test_update_to_taken_email(directory, employee, make_employee):
    other = make_employee()
    result = directory.update(employee.id, **_profile(email=other.email))

    assert isinstance(result.error, ConflictError)
    assert directory.get(employee.id).email == employee.email


@pytest.mark.parametrize("target", ["admin", "missing"])
def test_update_admin_or_unknown(directory, admin, target):
    employee_id = admin.id if target == "admin" else 9999
    assert isinstance(directory.update(employee_id, **_profile()).error, NotFoundError)


def test_delete_removes_balances_and_requests(directory, ledger, lifecycle, employee, days_from_today):
    lifecycle.create(employee.id, CASUAL, days_from_today(5), days_from_today(6), "Trip").unwrap()

    assert directory.delete(employee.id).ok
    assert directory.get(employee.id) is None
    assert ledger.balances_for(employee.id) == []
    assert lifecycle.all_requests(employee_id=employee.id) == []


def test_delete_blocked_by_approved_leave(directory, lifecycle, employee, days_from_today):
    leave = lifecycle.create(employee.id, CASUAL, days_from_today(5), days_from_today(6), "Trip").unwrap()
    lifecycle.update_status(leave.id, LeaveStatus.APPROVED).unwrap()

    result = directory.delete(employee.id)

    assert result.error.error_code == "EMPLOYEE_HAS_APPROVED_LEAVE"
    assert directory.get(employee.id) is not None


@pytest.mark.parametrize("target", ["admin", "missing"])
def test_delete_admin_or_unknown(directory, admin, target):
    employee_id = admin.id if target == "admin" else 9999
    assert isinstance(directory.delete(employee_id).error, NotFoundError)


def test_authenticate(directory, employee):
    assert directory.authenticate(employee.email, "Password123!").value.id == employee.id


@pytest.mark.parametrize("email, password", [
    ("employee1@example.com", "wrong-password"),
    ("nobody@example.com", "Password123!"),
])
def test_authenticate_failures(directory, employee, email, password):
    assert isinstance(directory.authenticate(email, password).error, AuthenticationError)
