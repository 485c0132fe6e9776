"""
===============================================================================
MÓDULO: Excepciones internas (adapters -> casos de uso)
===============================================================================

Los adapters (repositorios, store de challenges) levantan estas excepciones;
los casos de uso las traducen a resultados tipados (`*Error.code`) y nunca las
dejan escapar hacia el caller.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ShiftcareError, ConflictError, ChallengeStoreError

Responsabilidades:
  - error_code estable por tipo
  - error_id para correlacionar el log con el resultado devuelto
  - Conservar la causa (original_error) sin exponerla en el mensaje

Colaboradores:
  - infrastructure/repositories/in_memory/*: ConflictError (versión optimista)
  - infrastructure/challenges/redis_store.py: ChallengeStoreError
  - crosscutting/retry.py: reintenta ConflictError
===============================================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import uuid4


class ShiftcareError(Exception):
    """Base de errores internos: message + error_code + error_id."""

    error_code: str = "SHIFTCARE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        original_error: Optional[BaseException] = None,
        error_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.error_id = error_id or uuid4().hex

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConflictError(ShiftcareError):
    """
    Compare-and-set perdido: otro writer guardó antes (versión distinta) o la
    clave única ya existe.

    Atributos opcionales para el log:
      - entity: "staff_account", "geofence_check_in", ...
      - expected_version / actual_version
    """

    error_code = "CONFLICT"

    def __init__(
        self,
        message: str,
        *,
        entity: Optional[str] = None,
        expected_version: Optional[int] = None,
        actual_version: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.entity = entity
        self.expected_version = expected_version
        self.actual_version = actual_version


class ChallengeStoreError(ShiftcareError):
    """El store de challenges no respondió (Redis caído, timeout)."""

    error_code = "CHALLENGE_STORE_ERROR"
