"""
===============================================================================
USE CASE: Check In To Shift (Geofence)
===============================================================================

Name:
    Check In To Shift Use Case

Business Goal:
    Decidir si la ubicación reportada por el dispositivo satisface el geofence
    del turno, mantener el estado "latest" por (shift_id, staff_user_id) y
    dejar rastro append-only de CADA intento para resolver disputas.

Why (Context / Intención):
    - Sin ubicación no es falla automática: puede confirmarlo un manager del
      mismo provider (camino alternativo, device-less).
    - Un check-in verificado es sticky: intentos posteriores fallidos no lo
      degradan, y repetir el mismo intento no escribe de nuevo.
    - Dos check-ins simultáneos: compare-and-set por versión; el perdedor
      relee y reintenta una vez (tenacity). Si vuelve a perder => CONFLICT.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CheckInToShiftUseCase

Responsibilities:
    - Validar coordenadas (ambas o ninguna, rangos WGS84).
    - Resolver turno asignado y geofence.
    - Autorizar al confirmador (ActorContext del mismo provider).
    - Decidir (domain.geofence.verify_check_in) y persistir el latest.
    - Auditar el intento (siempre) y registrar métrica.

Collaborators:
    - ShiftScheduler, CheckInRepository, IdentityStore, AuditEventRepository
    - actor_context.resolve_actor_context
    - crosscutting.retry.run_with_conflict_retry

Error Mapping:
    - VALIDATION_ERROR, NOT_FOUND, FORBIDDEN, UNAUTHORIZED_CONTEXT,
      ILLEGAL_STATE_TRANSITION (turno ya con check-out), CONFLICT
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Tuple
from uuid import UUID

from ....audit import actor_for_user, emit_audit_event
from ....crosscutting.exceptions import ConflictError
from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_check_in, record_check_in_conflict_retry
from ....crosscutting.retry import run_with_conflict_retry
from ....domain.audit import ACTION_CHECK_IN_ATTEMPT
from ....domain.entities import GeofenceCheckIn
from ....domain.geofence import should_replace_latest, verify_check_in
from ....domain.repositories import (
    AuditEventRepository,
    CheckInRepository,
    IdentityStore,
)
from ....domain.services import ShiftScheduler
from ....domain.value_objects import GeoPoint
from ...clock import Clock, as_utc, system_clock
from ..actor_context import resolve_actor_context
from .check_in_results import (
    CheckInError,
    CheckInErrorCode,
    CheckInResult,
    check_in_error,
)
from .shift_access import resolve_assigned_shift


@dataclass(frozen=True)
class CheckInToShiftInput:
    """
    DTO de entrada.

    Notas:
      - latitude/longitude: ambos o ninguno (None = el dispositivo no pudo).
      - confirmed_by_user_id: manager que confirma sin ubicación (opcional).
      - timestamp: instante del intento; default = ahora. Naive => UTC.
    """

    shift_id: UUID | None
    staff_user_id: UUID | None
    latitude: Any = None
    longitude: Any = None
    confirmed_by_user_id: UUID | None = None
    timestamp: datetime | None = None


class CheckInToShiftUseCase:
    def __init__(
        self,
        scheduler: ShiftScheduler,
        check_ins: CheckInRepository,
        identity_store: IdentityStore,
        *,
        audit_repository: AuditEventRepository | None = None,
        conflict_retries: int = 1,
        clock: Clock = system_clock,
    ) -> None:
        self._scheduler = scheduler
        self._check_ins = check_ins
        self._identity = identity_store
        self._audit = audit_repository
        self._retries = conflict_retries
        self._clock = clock

    def execute(self, input_data: CheckInToShiftInput) -> CheckInResult:
        # Timestamps naive del dispositivo se interpretan como UTC.
        timestamp = as_utc(input_data.timestamp or self._clock())
        result = self._check_in(input_data, timestamp)
        self._audit_attempt(input_data, timestamp, result)
        record_check_in(_outcome(result))
        return result

    # =========================================================================
    # Flujo principal
    # =========================================================================
    def _check_in(
        self, input_data: CheckInToShiftInput, timestamp: datetime
    ) -> CheckInResult:
        # 1) Coordenadas (forma/rango) antes de cualquier IO.
        reported, error = _parse_location(input_data.latitude, input_data.longitude)
        if error is not None:
            return CheckInResult(error=error)

        # 2) Turno asignado + geofence.
        shift, error = resolve_assigned_shift(
            self._scheduler,
            shift_id=input_data.shift_id,
            staff_user_id=input_data.staff_user_id,
        )
        if error is not None:
            return CheckInResult(error=error)
        if shift.geofence is None:
            return CheckInResult(
                error=check_in_error(
                    CheckInErrorCode.VALIDATION_ERROR,
                    "Shift location is not available. Cannot check geofence.",
                )
            )

        # 3) Camino alternativo: confirmación de manager del mismo provider.
        alternate_verified: bool | None = None
        if reported is None and input_data.confirmed_by_user_id is not None:
            context, context_error = resolve_actor_context(
                identity_store=self._identity,
                user_id=input_data.confirmed_by_user_id,
            )
            if context_error is not None or (
                context.service_provider_id != shift.service_provider_id
            ):
                return CheckInResult(
                    error=check_in_error(
                        CheckInErrorCode.UNAUTHORIZED_CONTEXT,
                        "Confirmer is not linked to this shift's service provider.",
                    )
                )
            alternate_verified = True

        # 4) Decisión pura.
        attempt = verify_check_in(
            shift.geofence,
            reported,
            shift_id=shift.id,
            staff_user_id=input_data.staff_user_id,
            timestamp=timestamp,
            alternate_verified=alternate_verified,
        )

        # 5) Persistir latest (compare-and-set + 1 reintento con relectura).
        try:
            latest, recorded, error = run_with_conflict_retry(
                lambda: self._apply(attempt),
                retries=self._retries,
                on_retry=record_check_in_conflict_retry,
            )
        except ConflictError as exc:
            logger.warning(
                "Check-in write lost a concurrent race",
                extra={"shift_id": str(shift.id), "error_id": exc.error_id},
            )
            return CheckInResult(
                attempt=attempt,
                error=check_in_error(
                    CheckInErrorCode.CONFLICT,
                    "Check-in was modified concurrently. Retry.",
                ),
            )

        return CheckInResult(
            check_in=latest, attempt=attempt, recorded=recorded, error=error
        )

    def _apply(
        self, attempt: GeofenceCheckIn
    ) -> Tuple[GeofenceCheckIn | None, bool, CheckInError | None]:
        """Un intento de write: relee el latest en cada ejecución."""
        existing = self._check_ins.get_check_in(attempt.shift_id, attempt.staff_user_id)
        if existing is not None and existing.is_checked_out:
            return (
                existing,
                False,
                check_in_error(
                    CheckInErrorCode.ILLEGAL_STATE_TRANSITION,
                    "Shift is already checked out.",
                ),
            )

        if not should_replace_latest(existing, attempt):
            return existing, False, None

        expected_version = existing.version if existing is not None else 0
        saved = self._check_ins.save_check_in(
            replace(attempt, version=expected_version), expected_version
        )
        return saved, True, None

    # =========================================================================
    # Auditoría (cada llamada, exitosa o no)
    # =========================================================================
    def _audit_attempt(
        self,
        input_data: CheckInToShiftInput,
        timestamp: datetime,
        result: CheckInResult,
    ) -> None:
        attempt = result.attempt
        metadata: dict[str, Any] = {
            "staff_user_id": input_data.staff_user_id,
            "latitude": input_data.latitude,
            "longitude": input_data.longitude,
            "confirmed_by_user_id": input_data.confirmed_by_user_id,
            "verified": bool(attempt and attempt.verified and result.error is None),
            "reason": attempt.reason if attempt else None,
            "distance_meters": attempt.distance_meters if attempt else None,
            "verification_method": attempt.verification_method.value if attempt else None,
            "recorded": result.recorded,
            "outcome": _outcome(result),
        }
        if result.error is not None:
            metadata["error_code"] = result.error.code.value

        emit_audit_event(
            self._audit,
            action=ACTION_CHECK_IN_ATTEMPT,
            actor=actor_for_user(input_data.staff_user_id),
            target_id=input_data.shift_id,
            metadata=metadata,
            occurred_at=timestamp,
        )


def _outcome(result: CheckInResult) -> str:
    if result.error is not None:
        return result.error.code.value
    return "verified" if result.attempt and result.attempt.verified else "unverified"


def _parse_coordinate(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError("coordinates must be numbers")
    if isinstance(raw, str):
        return float(raw.strip())
    return raw


def _parse_location(
    latitude: Any, longitude: Any
) -> Tuple[GeoPoint | None, CheckInError | None]:
    """Ambas o ninguna; rangos validados por GeoPoint."""
    if latitude is None and longitude is None:
        return None, None
    if latitude is None or longitude is None:
        return None, check_in_error(
            CheckInErrorCode.VALIDATION_ERROR,
            "latitude and longitude must be provided together.",
        )
    try:
        return GeoPoint(_parse_coordinate(latitude), _parse_coordinate(longitude)), None
    except ValueError as exc:
        return None, check_in_error(CheckInErrorCode.VALIDATION_ERROR, str(exc))
