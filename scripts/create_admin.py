import sys
import os
import logging

# Ensure we can import leave_management modules
sys.path.append(os.getcwd())

from leave_management.core.config import settings
from leave_management.database import SessionLocal, init_db
from leave_management.domain import EmployeeRole
from leave_management.repositories import SqlAlchemyLeaveRepository
from leave_management.services.employee_directory import EmployeeDirectory

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

def create_admin_user():
    email = settings.bootstrap_admin_email or "admin@example.com"
    password = settings.bootstrap_admin_password or "Admin123!"

    init_db()
    db = SessionLocal()
    try:
        repository = SqlAlchemyLeaveRepository(db)
        if repository.get_employee_by_email(email) is not None:
            logger.warning(f"Admin user '{email}' already exists.")
            return

        result = EmployeeDirectory(repository).register(
            first_name="System",
            last_name="Administrator",
            email=email,
            password=password,
            department="HR",
            designation="Administrator",
            role=EmployeeRole.ADMIN,
        )
        if not result.ok:
            logger.error(f"Error creating admin user: {result.error.message}")
            return

        logger.info("Admin user created successfully. You can now login.")
        logger.info(f"Email: {email}")
    finally:
        db.close()

if __name__ == "__main__":
    create_admin_user()
