import logging
from fastapi import APIRouter, Depends, Request, status

from leave_management.core.config import settings
from leave_management.core.limiter import limiter
from leave_management.core.schemas import ApiResponse
from leave_management.core.security import create_access_token
from leave_management.routers.auth_deps import Identity, get_current_identity, get_directory, require_admin
from leave_management.schemas.auth import LoginRequest, LoginResponse
from leave_management.schemas.employee import EmployeeResponse, RegisterEmployeeRequest
from leave_management.services.employee_directory import EmployeeDirectory

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

@router.post("/login", response_model=ApiResponse[LoginResponse])
@limiter.limit(settings.login_rate_limit)
def login(request: Request, login_data: LoginRequest, directory: EmployeeDirectory = Depends(get_directory)):
    employee = directory.authenticate(login_data.email, login_data.password).unwrap()

    token = create_access_token(data={
        "sub": str(employee.id),
        "role": employee.role.value,
    })
    logger.info("Login succeeded", extra={"employee_id": employee.id})
    return ApiResponse.ok(LoginResponse(
        user_id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        email=employee.email,
        role=employee.role.value,
        token=token,
    ))

@router.post("/register", response_model=ApiResponse[EmployeeResponse], status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterEmployeeRequest,
    directory: EmployeeDirectory = Depends(get_directory),
    admin: Identity = Depends(require_admin),
):
    """Admin-only: create an employee account together with its opening balances."""
    employee = directory.register(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        password=data.password,
        department=data.department,
        designation=data.designation,
        contact_no=data.contact_no,
        balances=data.balance_pairs(),
    ).unwrap()
    balances = directory.ledger.balances_for(employee.id)
    return ApiResponse.ok(EmployeeResponse.from_record(employee, balances), message="User registered successfully")

@router.get("/me", response_model=ApiResponse[EmployeeResponse])
def get_me(
    identity: Identity = Depends(get_current_identity),
    directory: EmployeeDirectory = Depends(get_directory),
):
    employee = directory.get(identity.employee_id)
    return ApiResponse.ok(EmployeeResponse.from_record(employee, directory.ledger.balances_for(employee.id)))
