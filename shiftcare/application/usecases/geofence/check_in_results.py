"""
===============================================================================
CHECK-IN USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Geofence Check-In Results

Business Goal:
    Contrato de resultado/errores para check-in, check-out y consulta del
    historial de intentos.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Responsibilities:
    - CheckInErrorCode + CheckInError.
    - CheckInResult: estado latest + decisión de ESTE intento + si se escribió.
    - CheckOutResult, CheckInAttemptsResult.

Collaborators:
    - domain.entities.GeofenceCheckIn, CheckInAttempt
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import CheckInAttempt, GeofenceCheckIn


class CheckInErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: coordenadas fuera de rango/incompletas, turno sin geofence.
      - NOT_FOUND: turno inexistente.
      - FORBIDDEN: el staff no está asignado al turno.
      - UNAUTHORIZED_CONTEXT: confirmador sin contexto o de otro provider.
      - ILLEGAL_STATE_TRANSITION: check-in tras check-out / check-out sin check-in.
      - CONFLICT: escritura concurrente perdida tras el reintento.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHORIZED_CONTEXT = "UNAUTHORIZED_CONTEXT"
    ILLEGAL_STATE_TRANSITION = "ILLEGAL_STATE_TRANSITION"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class CheckInError:
    code: CheckInErrorCode
    message: str


@dataclass
class CheckInResult:
    """
    Contrato:
      - attempt: decisión de esta llamada (siempre presente si llegó al verificador)
      - check_in: estado latest persistido (puede ser un verificado anterior)
      - recorded: True si esta llamada escribió el estado latest
    """

    check_in: GeofenceCheckIn | None = None
    attempt: GeofenceCheckIn | None = None
    recorded: bool = False
    error: CheckInError | None = None


@dataclass
class CheckOutResult:
    check_in: GeofenceCheckIn | None = None
    error: CheckInError | None = None


@dataclass
class CheckInAttemptsResult:
    attempts: List[CheckInAttempt] = field(default_factory=list)
    error: CheckInError | None = None


def check_in_error(code: CheckInErrorCode, message: str) -> CheckInError:
    return CheckInError(code=code, message=message)
