"""
Identity and service dependencies for FastAPI endpoints.

The leave core trusts whatever identity these dependencies resolve; token
validation stops here.
"""
import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from leave_management.core import security
from leave_management.database import get_db
from leave_management.domain import EmployeeRole
from leave_management.repositories import LeaveRepository, SqlAlchemyLeaveRepository
from leave_management.services.employee_directory import EmployeeDirectory
from leave_management.services.leave_lifecycle import LeaveLifecycleEngine

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


@dataclass(frozen=True)
class Identity:
    employee_id: int
    role: EmployeeRole

    @property
    def is_admin(self) -> bool:
        return self.role == EmployeeRole.ADMIN


def get_repository(db: Session = Depends(get_db)) -> LeaveRepository:
    return SqlAlchemyLeaveRepository(db)


def get_lifecycle_engine(repository: LeaveRepository = Depends(get_repository)) -> LeaveLifecycleEngine:
    return LeaveLifecycleEngine(repository)


def get_directory(repository: LeaveRepository = Depends(get_repository)) -> EmployeeDirectory:
    return EmployeeDirectory(repository)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_identity(
    token: str = Depends(oauth2_scheme),
    repository: LeaveRepository = Depends(get_repository),
) -> Identity:
    """
    Extracts the caller from the bearer token and confirms the account
    still exists.
    """
    payload = security.decode_access_token(token)

    if payload is None:
        logger.warning("Authentication failed: Invalid token")
        raise _unauthorized("Could not validate credentials")

    if payload.get("error") == "TOKEN_EXPIRED":
        logger.info("Authentication failed: Token expired")
        raise _unauthorized("TOKEN_EXPIRED")

    if payload.get("type") != "access":
        logger.warning("Authentication failed: Invalid token type")
        raise _unauthorized("Invalid token type")

    try:
        employee_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        logger.warning("Authentication failed: Missing subject in token")
        raise _unauthorized("Missing subject in token")

    employee = repository.get_employee(employee_id)
    if employee is None:
        logger.warning(f"Authentication failed: Employee {employee_id} not found in database")
        raise _unauthorized("User not found")

    # Role comes from the database so a demotion takes effect immediately
    return Identity(employee_id=employee.id, role=employee.role)


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Access denied. Required roles: {[EmployeeRole.ADMIN.value]}"
        )
    return identity
