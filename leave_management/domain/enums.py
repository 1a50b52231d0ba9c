import enum


class EmployeeRole(str, enum.Enum):
    ADMIN = "Admin"
    EMPLOYEE = "Employee"


class LeaveStatus(str, enum.Enum):
    """
    Request lifecycle: PENDING -> APPROVED | REJECTED | CANCELLED.
    Every state other than PENDING is terminal.
    """
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING
