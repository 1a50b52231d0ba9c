# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import employee, leave_category, leave_balance, leave_request

# Explicit class exports for cleaner imports
from .employee import Employee
from .leave_category import LeaveCategory
from .leave_balance import LeaveBalance
from .leave_request import LeaveRequest

__all__ = [
    "Employee",
    "LeaveCategory",
    "LeaveBalance",
    "LeaveRequest",
]
