"""
Typed outcome of a core operation.

Lifecycle, ledger and directory operations return a ``Result`` instead of
raising business-rule errors at their callers. The presentation layer calls
``unwrap()`` to hand a failure to the ``AppException`` handler.
"""
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

from leave_management.core.exceptions import AppException

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[AppException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: AppException) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


def returns_result(func: Callable[..., T]) -> Callable[..., Result[T]]:
    """Wrap an operation so AppException subclasses come back as failed Results.

    Anything that is not an AppException (database outages, programming
    errors) still propagates.
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> Result[T]:
        try:
            return Result.success(func(*args, **kwargs))
        except AppException as exc:
            return Result.failure(exc)
    return wrapper
