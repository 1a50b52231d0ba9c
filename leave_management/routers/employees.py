from typing import List
from fastapi import APIRouter, Depends

from leave_management.core.exceptions import AccessDeniedError, NotFoundError
from leave_management.core.schemas import ApiResponse
from leave_management.routers.auth_deps import Identity, get_current_identity, get_directory, require_admin
from leave_management.schemas.employee import EmployeeResponse, UpdateEmployeeRequest
from leave_management.schemas.leave import LeaveBalanceItem
from leave_management.services.employee_directory import EmployeeDirectory

router = APIRouter(
    prefix="/employees",
    tags=["employees"]
)

@router.get("", response_model=ApiResponse[List[EmployeeResponse]])
def list_employees(
    admin: Identity = Depends(require_admin),
    directory: EmployeeDirectory = Depends(get_directory),
):
    employees = directory.list_employees()
    return ApiResponse.ok([
        EmployeeResponse.from_record(e, directory.ledger.balances_for(e.id)) for e in employees
    ])

@router.get("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
def get_employee(
    employee_id: int,
    identity: Identity = Depends(get_current_identity),
    directory: EmployeeDirectory = Depends(get_directory),
):
    # Employees can only read their own profile
    if not identity.is_admin and identity.employee_id != employee_id:
        raise AccessDeniedError("You can only access your own profile")
    employee = directory.get(employee_id)
    if employee is None:
        raise NotFoundError("User not found")
    return ApiResponse.ok(EmployeeResponse.from_record(employee, directory.ledger.balances_for(employee_id)))

@router.put("/{employee_id}/leave-balance", response_model=ApiResponse[List[LeaveBalanceItem]])
def update_leave_balance(
    employee_id: int,
    balances: List[LeaveBalanceItem],
    admin: Identity = Depends(require_admin),
    directory: EmployeeDirectory = Depends(get_directory),
):
    stored = directory.ledger.replace_all(
        employee_id, [(item.category_id, item.remaining_days) for item in balances]
    ).unwrap()
    return ApiResponse.ok(
        [LeaveBalanceItem.model_validate(b) for b in stored],
        message="Leave balance updated successfully",
    )

@router.put("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
def update_employee(
    employee_id: int,
    data: UpdateEmployeeRequest,
    admin: Identity = Depends(require_admin),
    directory: EmployeeDirectory = Depends(get_directory),
):
    employee = directory.update(
        employee_id,
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        department=data.department,
        designation=data.designation,
        contact_no=data.contact_no,
        balances=data.balance_pairs(),
    ).unwrap()
    return ApiResponse.ok(
        EmployeeResponse.from_record(employee, directory.ledger.balances_for(employee_id)),
        message="User updated successfully",
    )

@router.delete("/{employee_id}", response_model=ApiResponse)
def delete_employee(
    employee_id: int,
    admin: Identity = Depends(require_admin),
    directory: EmployeeDirectory = Depends(get_directory),
):
    directory.delete(employee_id).unwrap()
    return ApiResponse.ok(message="User deleted successfully")
