from sqlalchemy import Column, Integer, String, Date, Enum, ForeignKey, DateTime
from sqlalchemy.sql import func
from leave_management.database import Base
from leave_management.domain.enums import LeaveStatus

class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), index=True, nullable=False)
    category_id = Column(Integer, ForeignKey("leave_categories.id"), index=True, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reason = Column(String(1000), nullable=False)
    status = Column(Enum(LeaveStatus), default=LeaveStatus.PENDING, nullable=False, index=True)
    # Bumped on every status write; guards against concurrent transitions
    version = Column(Integer, nullable=False, default=1)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
