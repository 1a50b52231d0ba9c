from .base import LeaveRepository
from .sqlalchemy_repository import SqlAlchemyLeaveRepository

__all__ = ["LeaveRepository", "SqlAlchemyLeaveRepository"]
