"""
Checks a prospective leave request before it reaches the ledger.

Pure functions: no clock, no database. Callers pass "today" explicitly.
"""
from datetime import date
from typing import Optional

from leave_management.core.exceptions import LeaveValidationError


def validate_dates(start_date: date, end_date: date, today: date) -> Optional[LeaveValidationError]:
    """Return the first rule the date range breaks, or None."""
    if start_date < today:
        return LeaveValidationError(
            LeaveValidationError.PAST_START_DATE,
            "Start date cannot be in the past",
        )
    if end_date < start_date:
        return LeaveValidationError(
            LeaveValidationError.INVERTED_RANGE,
            "End date cannot be before start date",
        )
    return None


def validate_reason(reason: Optional[str]) -> Optional[LeaveValidationError]:
    if reason is None or not reason.strip():
        return LeaveValidationError(
            LeaveValidationError.MISSING_REASON,
            "A reason for the leave is required",
        )
    return None


def validate_request(
    start_date: date,
    end_date: date,
    reason: Optional[str],
    today: date,
) -> Optional[LeaveValidationError]:
    return validate_dates(start_date, end_date, today) or validate_reason(reason)
