"""
===============================================================================
USE CASE: Check Out Of Shift
===============================================================================

Business Goal:
    Cerrar la asistencia del turno y calcular horas trabajadas y pago.

Rules:
    - Requiere un check-in verificado y aún sin check-out
      (ILLEGAL_STATE_TRANSITION en caso contrario).
    - total_hours y total_pay en Decimal a 2 decimales; el pago se calcula
      sobre las horas ya redondeadas (hours × hourly_rate).
    - Write compare-and-set sin reintento: un conflicto es CONFLICT.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID

from ....audit import emit_audit_event
from ....crosscutting.exceptions import ConflictError
from ....crosscutting.logger import logger
from ....domain.audit import ACTION_CHECK_OUT
from ....domain.geofence import compute_shift_totals
from ....domain.repositories import AuditEventRepository, CheckInRepository
from ....domain.services import ShiftScheduler
from ...clock import Clock, as_utc, system_clock
from .check_in_results import CheckInErrorCode, CheckOutResult, check_in_error
from .shift_access import resolve_assigned_shift


@dataclass(frozen=True)
class CheckOutOfShiftInput:
    shift_id: UUID | None
    staff_user_id: UUID | None
    checked_out_at: datetime | None = None


class CheckOutOfShiftUseCase:
    def __init__(
        self,
        scheduler: ShiftScheduler,
        check_ins: CheckInRepository,
        *,
        audit_repository: AuditEventRepository | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._scheduler = scheduler
        self._check_ins = check_ins
        self._audit = audit_repository
        self._clock = clock

    def execute(self, input_data: CheckOutOfShiftInput) -> CheckOutResult:
        shift, error = resolve_assigned_shift(
            self._scheduler,
            shift_id=input_data.shift_id,
            staff_user_id=input_data.staff_user_id,
        )
        if error is not None:
            return CheckOutResult(error=error)

        existing = self._check_ins.get_check_in(shift.id, input_data.staff_user_id)
        if existing is None or not existing.verified:
            return CheckOutResult(
                error=check_in_error(
                    CheckInErrorCode.ILLEGAL_STATE_TRANSITION,
                    "Cannot check out before a verified check-in.",
                )
            )
        if existing.is_checked_out:
            return CheckOutResult(
                error=check_in_error(
                    CheckInErrorCode.ILLEGAL_STATE_TRANSITION,
                    "Shift is already checked out.",
                )
            )

        checked_out_at = as_utc(input_data.checked_out_at or self._clock())
        total_hours, total_pay = compute_shift_totals(
            as_utc(existing.timestamp), checked_out_at, shift.hourly_rate
        )

        try:
            saved = self._check_ins.save_check_in(
                replace(
                    existing,
                    checked_out_at=checked_out_at,
                    total_hours=total_hours,
                    total_pay=total_pay,
                ),
                existing.version,
            )
        except ConflictError as exc:
            logger.warning(
                "Check-out write lost a concurrent race",
                extra={"shift_id": str(shift.id), "error_id": exc.error_id},
            )
            return CheckOutResult(
                error=check_in_error(
                    CheckInErrorCode.CONFLICT,
                    "Check-in was modified concurrently. Retry.",
                )
            )

        emit_audit_event(
            self._audit,
            action=ACTION_CHECK_OUT,
            actor_user_id=input_data.staff_user_id,
            target_id=shift.id,
            metadata={
                "staff_user_id": input_data.staff_user_id,
                "total_hours": total_hours,
                "hourly_rate": shift.hourly_rate,
                "total_pay": total_pay,
            },
            occurred_at=checked_out_at,
        )
        logger.info(
            "Shift checked out",
            extra={"shift_id": str(shift.id), "total_hours": str(total_hours)},
        )
        return CheckOutResult(check_in=saved)
