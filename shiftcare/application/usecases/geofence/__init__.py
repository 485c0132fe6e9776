"""Geofence check-in use cases."""

from .check_in_results import (
    CheckInAttemptsResult,
    CheckInError,
    CheckInErrorCode,
    CheckInResult,
    CheckOutResult,
)
from .check_in_to_shift import CheckInToShiftInput, CheckInToShiftUseCase
from .check_out_of_shift import CheckOutOfShiftInput, CheckOutOfShiftUseCase
from .list_check_in_attempts import (
    ListCheckInAttemptsInput,
    ListCheckInAttemptsUseCase,
)

__all__ = [
    "CheckInToShiftUseCase",
    "CheckInToShiftInput",
    "CheckOutOfShiftUseCase",
    "CheckOutOfShiftInput",
    "ListCheckInAttemptsUseCase",
    "ListCheckInAttemptsInput",
    "CheckInAttemptsResult",
    "CheckInError",
    "CheckInErrorCode",
    "CheckInResult",
    "CheckOutResult",
]
