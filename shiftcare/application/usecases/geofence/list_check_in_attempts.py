"""
===============================================================================
USE CASE: List Check-In Attempts
===============================================================================

Business Goal:
    Exponer el historial append-only de intentos de check-in de un turno
    (más nuevo primero) para resolución de disputas.

Rules:
    - Fuente: eventos de auditoría `shift.check_in.attempt` del turno.
    - Filtro opcional por staff_user_id: se resuelve en el repositorio vía el
      actor del evento (`user:<id>`), así el límite aplica sobre ese staff.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....audit import actor_for_user
from ....domain.audit import ACTION_CHECK_IN_ATTEMPT, AuditEvent
from ....domain.entities import CheckInAttempt
from ....domain.repositories import AuditEventRepository
from .check_in_results import CheckInAttemptsResult, CheckInErrorCode, check_in_error

_MAX_LIMIT = 500


@dataclass(frozen=True)
class ListCheckInAttemptsInput:
    shift_id: UUID | None
    staff_user_id: UUID | None = None
    limit: int = 100


class ListCheckInAttemptsUseCase:
    def __init__(self, audit_repository: AuditEventRepository) -> None:
        self._audit = audit_repository

    def execute(self, input_data: ListCheckInAttemptsInput) -> CheckInAttemptsResult:
        if input_data.shift_id is None:
            return CheckInAttemptsResult(
                error=check_in_error(
                    CheckInErrorCode.VALIDATION_ERROR, "shift_id is required."
                )
            )

        limit = max(1, min(input_data.limit, _MAX_LIMIT))
        actor_id = (
            actor_for_user(input_data.staff_user_id)
            if input_data.staff_user_id is not None
            else None
        )
        events = self._audit.list_events(
            target_id=input_data.shift_id,
            actor_id=actor_id,
            action_prefix=ACTION_CHECK_IN_ATTEMPT,
            limit=limit,
        )
        return CheckInAttemptsResult(
            attempts=[_to_attempt(input_data.shift_id, event) for event in events]
        )


def _to_attempt(shift_id: UUID, event: AuditEvent) -> CheckInAttempt:
    metadata = dict(event.metadata)
    staff_raw = metadata.get("staff_user_id")
    return CheckInAttempt(
        shift_id=shift_id,
        staff_user_id=UUID(staff_raw) if staff_raw else None,
        occurred_at=event.created_at,
        verified=bool(metadata.get("verified")),
        reason=metadata.get("reason") or metadata.get("error_code") or "",
        metadata=metadata,
    )
