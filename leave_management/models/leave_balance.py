from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, UniqueConstraint
from leave_management.database import Base

class LeaveBalance(Base):
    __tablename__ = "leave_balances"
    __table_args__ = (
        UniqueConstraint("employee_id", "category_id", name="uq_leave_balance_employee_category"),
        CheckConstraint("remaining_days >= 0", name="ck_leave_balance_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), index=True, nullable=False)
    category_id = Column(Integer, ForeignKey("leave_categories.id"), index=True, nullable=False)
    remaining_days = Column(Integer, nullable=False, default=0)
