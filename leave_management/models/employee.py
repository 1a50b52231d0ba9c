"""
Employee account. Role decides authorization at the HTTP boundary only.
"""
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.sql import func
from leave_management.database import Base
from leave_management.domain.enums import EmployeeRole


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    department = Column(String(100), nullable=True)
    designation = Column(String(100), nullable=True)
    contact_no = Column(String(15), nullable=True)
    hashed_password = Column(String(255), nullable=False)

    role = Column(Enum(EmployeeRole), default=EmployeeRole.EMPLOYEE, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Employee {self.email} ({self.role.value})>"
