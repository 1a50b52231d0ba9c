from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional, Tuple

from leave_management.domain import BalanceRecord, EmployeeRecord
from leave_management.schemas.leave import LeaveBalanceItem


class EmployeeProfile(BaseModel):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    department: str = Field(min_length=1, max_length=100)
    designation: str = Field(min_length=1, max_length=100)
    contact_no: str = Field(min_length=1, max_length=15)
    leave_balances: List[LeaveBalanceItem] = []

    def balance_pairs(self) -> List[Tuple[int, int]]:
        return [(item.category_id, item.remaining_days) for item in self.leave_balances]


class RegisterEmployeeRequest(EmployeeProfile):
    password: str = Field(min_length=6, max_length=100)


class UpdateEmployeeRequest(EmployeeProfile):
    pass


class EmployeeResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    department: Optional[str] = None
    designation: Optional[str] = None
    contact_no: Optional[str] = None
    role: str
    leave_balances: List[LeaveBalanceItem] = []

    @classmethod
    def from_record(cls, record: EmployeeRecord, balances: List[BalanceRecord] = ()) -> "EmployeeResponse":
        return cls(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            full_name=record.full_name,
            email=record.email,
            department=record.department,
            designation=record.designation,
            contact_no=record.contact_no,
            role=record.role.value,
            leave_balances=[LeaveBalanceItem.model_validate(b) for b in balances],
        )
