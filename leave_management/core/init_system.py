import logging
from datetime import date
from leave_management.core.config import settings
from leave_management.database import SessionLocal
from leave_management.domain import EmployeeRole
from leave_management.repositories import SqlAlchemyLeaveRepository
from leave_management.services.employee_directory import EmployeeDirectory

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = (
    ("Casual Leave", "Casual leave for personal work"),
    ("Sick Leave", "Medical leave"),
    ("Leave Without Pay", "Unpaid leave"),
)

def seed_reference_data(repository: SqlAlchemyLeaveRepository, year: int = None) -> None:
    """Create the default leave categories when the table is empty."""
    year = year or date.today().year
    with repository.transaction():
        if repository.list_categories():
            return
        for name, description in DEFAULT_CATEGORIES:
            repository.add_category(
                name,
                description=description,
                valid_from=date(year, 1, 1),
                valid_to=date(year, 12, 31),
            )
    logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default leave categories")

def seed_admin(repository: SqlAlchemyLeaveRepository, email: str, password: str) -> None:
    if repository.get_employee_by_email(email) is not None:
        logger.info(f"Bootstrap admin {email} already exists")
        return
    EmployeeDirectory(repository).register(
        first_name="System",
        last_name="Administrator",
        email=email,
        password=password,
        role=EmployeeRole.ADMIN,
    ).unwrap()
    logger.info(f"Created bootstrap admin {email}")

def init_system_data():
    """
    Seeds leave categories and, when BOOTSTRAP_ADMIN_EMAIL/PASSWORD are set,
    an administrator account.
    """
    db = SessionLocal()
    try:
        repository = SqlAlchemyLeaveRepository(db)
        seed_reference_data(repository)
        if settings.bootstrap_admin_email and settings.bootstrap_admin_password:
            seed_admin(repository, settings.bootstrap_admin_email, settings.bootstrap_admin_password)
    finally:
        db.close()
