from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppException):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.error_code == other.error_code
            and self.details == other.details
        )

    def __hash__(self) -> int:
        return hash((type(self), self.error_code))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, details={self.details!r})"


# --- Leave domain errors ---

class LeaveValidationError(AppException):
    """Caller input is malformed. `reason` is one of the class constants."""

    PAST_START_DATE = "PastStartDate"
    INVERTED_RANGE = "InvertedRange"
    MISSING_REASON = "MissingReason"
    NEGATIVE_ENTITLEMENT = "NegativeEntitlement"

    def __init__(self, reason: str, message: str):
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details={"reason": reason}
        )
        self.reason = reason


class BalanceNotFound(AppException):
    def __init__(self, employee_id: int, category_id: int):
        super().__init__(
            message="Leave balance not found for this leave type",
            status_code=400,
            error_code="BALANCE_NOT_FOUND",
            details={"employee_id": employee_id, "category_id": category_id}
        )


class InsufficientBalance(AppException):
    def __init__(self, available: int, requested: int):
        super().__init__(
            message=f"Insufficient leave balance. Available: {available}, Requested: {requested}",
            status_code=400,
            error_code="INSUFFICIENT_BALANCE",
            details={"available": available, "requested": requested}
        )
        self.available = available
        self.requested = requested


class NotFoundError(AppException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message=message, status_code=404, error_code="NOT_FOUND")


class InvalidTransition(AppException):
    def __init__(self, current_status: str, target_status: str):
        super().__init__(
            message=f"Cannot move a {current_status} leave request to {target_status}; only pending requests can change",
            status_code=409,
            error_code="INVALID_TRANSITION",
            details={"current_status": current_status, "target_status": target_status}
        )


class CancellationWindowClosed(AppException):
    def __init__(self, window_days: int):
        super().__init__(
            message=f"Leave cannot be cancelled within {window_days} days of start date",
            status_code=400,
            error_code="CANCELLATION_WINDOW_CLOSED",
            details={"window_days": window_days}
        )


class ConcurrentModification(AppException):
    def __init__(self, request_id: int):
        super().__init__(
            message="The leave request was modified concurrently, please retry",
            status_code=409,
            error_code="CONCURRENT_MODIFICATION",
            details={"request_id": request_id}
        )


# --- Directory / boundary errors ---

class ConflictError(AppException):
    def __init__(self, message: str, error_code: str = "CONFLICT"):
        super().__init__(message=message, status_code=409, error_code=error_code)


class AuthenticationError(AppException):
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTH_FAILED"
        )

class AccessDeniedError(AppException):
    """Custom permission error. Named AccessDeniedError to avoid shadowing Python's built-in PermissionError."""
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            status_code=403,
            error_code="PERMISSION_DENIED"
        )
