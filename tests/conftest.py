import pytest
import os
from datetime import date, datetime, timedelta, timezone
from sqlalchemy.orm import sessionmaker

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from leave_management.database import Base, build_engine, get_db, init_db
from leave_management.main import app
from leave_management.core.init_system import seed_reference_data
from leave_management.core.security import create_access_token
from leave_management.domain import EmployeeRole
from leave_management.repositories import SqlAlchemyLeaveRepository
from leave_management.services.balance_ledger import BalanceLedger
from leave_management.services.employee_directory import EmployeeDirectory
from leave_management.services.leave_lifecycle import LeaveLifecycleEngine
from fastapi.testclient import TestClient

# Frozen "today" for service-level tests
TODAY = date(2030, 6, 10)

CASUAL, SICK, UNPAID = 1, 2, 3

@pytest.fixture(scope="function")
def engine():
    """A fresh in-memory database per test."""
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()

@pytest.fixture(scope="function")
def repository(db_session):
    repository = SqlAlchemyLeaveRepository(db_session)
    seed_reference_data(repository, year=TODAY.year)
    return repository

@pytest.fixture(scope="function")
def ledger(repository):
    return BalanceLedger(repository)

@pytest.fixture(scope="function")
def directory(repository, ledger):
    return EmployeeDirectory(repository, ledger)

@pytest.fixture(scope="function")
def lifecycle(repository, ledger):
    return LeaveLifecycleEngine(
        repository,
        ledger,
        today=lambda: TODAY,
        now=lambda: datetime(2030, 6, 10, 9, 0, tzinfo=timezone.utc),
        cancellation_window_days=3,
    )

@pytest.fixture(scope="function")
def make_employee(directory):
    """Factory registering an employee with the given {category_id: days} balances."""
    counter = {"n": 0}

    def _make_employee(balances=None, role=EmployeeRole.EMPLOYEE, password="Password123!"):
        counter["n"] += 1
        n = counter["n"]
        return directory.register(
            first_name=f"Emp{n}",
            last_name="Tester",
            email=f"employee{n}@example.com",
            password=password,
            department="Engineering",
            designation="Developer",
            contact_no="5550100",
            balances=list((balances or {}).items()),
            role=role,
        ).unwrap()
    return _make_employee

@pytest.fixture(scope="function")
def employee(make_employee):
    """Employee with 5 days of casual leave and 10 days of sick leave."""
    return make_employee({CASUAL: 5, SICK: 10})

@pytest.fixture(scope="function")
def admin(make_employee):
    return make_employee(role=EmployeeRole.ADMIN, password="AdminPassword123!")

@pytest.fixture(scope="function")
def days_from_today():
    """Relative dates against TODAY."""
    return lambda n: TODAY + timedelta(days=n)

@pytest.fixture(scope="function")
def auth_headers():
    """Bearer headers for an employee record, the way the login endpoint signs them."""
    def _auth_headers(record):
        token = create_access_token(data={"sub": str(record.id), "role": record.role.value})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers

@pytest.fixture(scope="function")
def client(db_session, repository):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
