from sqlalchemy import Column, Integer, String, Date
from leave_management.database import Base

class LeaveCategory(Base):
    __tablename__ = "leave_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)  # e.g. "Casual Leave", "Sick Leave"
    description = Column(String(500), nullable=True)
    valid_from = Column(Date, nullable=True)
    valid_to = Column(Date, nullable=True)
