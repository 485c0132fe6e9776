"""
===============================================================================
SHIFT ACCESS HELPERS
===============================================================================

Business Goal:
    Resolver el turno para un staff: existe y el staff es el asignado.
    Retorna (ScheduledShift | None, CheckInError | None).

Collaborators:
    - ShiftScheduler
    - check_in_results
===============================================================================
"""

from __future__ import annotations

from typing import Tuple
from uuid import UUID

from ....domain.entities import ScheduledShift
from ....domain.services import ShiftScheduler
from .check_in_results import CheckInError, CheckInErrorCode, check_in_error


def resolve_assigned_shift(
    scheduler: ShiftScheduler,
    *,
    shift_id: UUID | None,
    staff_user_id: UUID | None,
) -> Tuple[ScheduledShift | None, CheckInError | None]:
    if shift_id is None or staff_user_id is None:
        return None, check_in_error(
            CheckInErrorCode.VALIDATION_ERROR, "shift_id and staff_user_id are required."
        )

    shift = scheduler.get_shift(shift_id)
    if shift is None:
        return None, check_in_error(CheckInErrorCode.NOT_FOUND, "Shift not found.")

    if shift.assigned_staff_user_id != staff_user_id:
        return None, check_in_error(
            CheckInErrorCode.FORBIDDEN,
            "Only the staff assigned to this shift can check in or out.",
        )
    return shift, None
