from datetime import date, timedelta

from fastapi import status
from tests.conftest import CASUAL, SICK, UNPAID


def _profile(**overrides):
    payload = {
        "first_name": "Lina",
        "last_name": "Aziz",
        "email": "lina@example.com",
        "department": "Sales",
        "designation": "Manager",
        "contact_no": "5550111",
        "leave_balances": [{"category_id": UNPAID, "remaining_days": 20}],
    }
    payload.update(overrides)
    return payload


def _approved_leave(client, employee, admin, auth_headers):
    leave = client.post("/api/leaves/apply", json={
        "category_id": CASUAL,
        "start_date": (date.today() + timedelta(days=5)).isoformat(),
        "end_date": (date.today() + timedelta(days=5)).isoformat(),
        "reason": "Appointment",
    }, headers=auth_headers(employee)).json()["data"]
    client.put("/api/leaves/update-status", json={"leave_id": leave["id"], "status": "Approved"},
               headers=auth_headers(admin))


def test_list_employees(client, employee, admin, auth_headers):
    response = client.get("/api/employees", headers=auth_headers(admin))
    assert response.status_code == status.HTTP_200_OK
    employees = response.json()["data"]
    assert [e["id"] for e in employees] == [employee.id]
    assert len(employees[0]["leave_balances"]) == 2

def test_list_employees_requires_admin(client, employee, auth_headers):
    response = client.get("/api/employees", headers=auth_headers(employee))
    assert response.status_code == status.HTTP_403_FORBIDDEN

def test_get_own_profile(client, employee, auth_headers):
    response = client.get(f"/api/employees/{employee.id}", headers=auth_headers(employee))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["email"] == employee.email

def test_get_other_profile_is_forbidden(client, employee, make_employee, auth_headers):
    other = make_employee()
    response = client.get(f"/api/employees/{other.id}", headers=auth_headers(employee))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["errors"][0]["code"] == "PERMISSION_DENIED"

def test_admin_gets_any_profile(client, employee, admin, auth_headers):
    assert client.get(f"/api/employees/{employee.id}", headers=auth_headers(admin)).status_code == 200
    assert client.get("/api/employees/9999", headers=auth_headers(admin)).status_code == 404

def test_replace_leave_balance(client, employee, admin, auth_headers):
    response = client.put(f"/api/employees/{employee.id}/leave-balance", json=[
        {"category_id": SICK, "remaining_days": 3},
        {"category_id": UNPAID, "remaining_days": 0},
    ], headers=auth_headers(admin))

    assert response.status_code == status.HTTP_200_OK
    stored = {b["category_id"]: b["remaining_days"] for b in response.json()["data"]}
    assert stored == {SICK: 3, UNPAID: 0}

def test_replace_leave_balance_unknown_employee(client, admin, auth_headers):
    response = client.put("/api/employees/9999/leave-balance", json=[], headers=auth_headers(admin))
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_replace_leave_balance_requires_admin(client, employee, auth_headers):
    response = client.put(f"/api/employees/{employee.id}/leave-balance",
                          json=[{"category_id": CASUAL, "remaining_days": 99}], headers=auth_headers(employee))
    assert response.status_code == status.HTTP_403_FORBIDDEN

def test_update_employee(client, employee, admin, auth_headers):
    response = client.put(f"/api/employees/{employee.id}", json=_profile(), headers=auth_headers(admin))

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["email"] == "lina@example.com"
    assert data["full_name"] == "Lina Aziz"
    assert [b["category_id"] for b in data["leave_balances"]] == [UNPAID]

def test_update_employee_email_taken(client, employee, admin, make_employee, auth_headers):
    other = make_employee()
    response = client.put(f"/api/employees/{employee.id}", json=_profile(email=other.email),
                          headers=auth_headers(admin))
    assert response.status_code == status.HTTP_409_CONFLICT

def test_update_admin_account_is_not_found(client, admin, auth_headers):
    response = client.put(f"/api/employees/{admin.id}", json=_profile(), headers=auth_headers(admin))
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_delete_employee(client, employee, admin, auth_headers):
    response = client.delete(f"/api/employees/{employee.id}", headers=auth_headers(admin))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "User deleted successfully"
    assert client.get(f"/api/employees/{employee.id}", headers=auth_headers(admin)).status_code == 404

def test_delete_employee_with_approved_leave(client, employee, admin, auth_headers):
    _approved_leave(client, employee, admin, auth_headers)

    response = client.delete(f"/api/employees/{employee.id}", headers=auth_headers(admin))

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["errors"][0]["code"] == "EMPLOYEE_HAS_APPROVED_LEAVE"

def test_delete_admin_is_not_found(client, admin, auth_headers):
    response = client.delete(f"/api/employees/{admin.id}", headers=auth_headers(admin))
    assert response.status_code == status.HTTP_404_NOT_FOUND
