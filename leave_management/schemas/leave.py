from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import Literal, Optional

from leave_management.domain import LeaveCategoryRecord, LeaveRequestRecord


class ApplyLeaveRequest(BaseModel):
    category_id: int
    start_date: date
    end_date: date
    reason: str = Field(min_length=1, max_length=1000)


class UpdateLeaveStatusRequest(BaseModel):
    leave_id: int
    status: Literal["Approved", "Rejected"]


class LeaveRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    employee_name: Optional[str] = None
    category_id: int
    category_name: Optional[str] = None
    start_date: date
    end_date: date
    submitted_at: datetime
    reason: str
    status: str
    duration_days: int

    @classmethod
    def from_record(cls, record: LeaveRequestRecord) -> "LeaveRequestResponse":
        return cls(
            id=record.id,
            employee_id=record.employee_id,
            employee_name=record.employee_name,
            category_id=record.category_id,
            category_name=record.category_name,
            start_date=record.start_date,
            end_date=record.end_date,
            submitted_at=record.submitted_at,
            reason=record.reason,
            status=record.status.value,
            duration_days=record.duration_days,
        )


class LeaveCategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None

    @classmethod
    def from_record(cls, record: LeaveCategoryRecord) -> "LeaveCategoryResponse":
        return cls.model_validate(record)


class LeaveBalanceItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category_id: int
    category_name: Optional[str] = None
    remaining_days: int = Field(ge=0)
