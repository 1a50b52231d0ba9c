from .enums import EmployeeRole, LeaveStatus
from .records import (
    BalanceRecord,
    EmployeeRecord,
    LeaveCategoryRecord,
    LeaveRequestRecord,
    duration_days,
)

__all__ = [
    "EmployeeRole",
    "LeaveStatus",
    "BalanceRecord",
    "EmployeeRecord",
    "LeaveCategoryRecord",
    "LeaveRequestRecord",
    "duration_days",
]
