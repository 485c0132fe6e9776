"""shiftcare.crosscutting.retry

Name: Conflict Retry Helper

Qué es
------
Utilidad cross-cutting de **resiliencia** para escrituras con control de
concurrencia optimista. Implementa:
  - Reintento SOLO ante `ConflictError` (versión desactualizada)
  - Sin espera entre intentos: el reintento relee estado fresco, no espera a
    que “se recupere” un servicio externo
  - Logging estructurado de intentos de retry

CRC (Component Card)
--------------------
Component: conflict retry helper
Responsibilities:
  - Ejecutar una operación hasta `retries + 1` veces mientras falle por conflicto
  - Loguear cada reintento con contexto útil
  - Propagar la última excepción (reraise) cuando se agotan los intentos
Collaborators:
  - tenacity (motor de retry)
  - crosscutting.exceptions.ConflictError
  - crosscutting.logger
Constraints:
  - La operación reintentada DEBE releer estado (idempotente por intento)
  - Errores distintos de ConflictError fallan inmediatamente
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)

from .exceptions import ConflictError
from .logger import logger

T = TypeVar("T")


def _log_retry(retry_state: RetryCallState) -> None:
    """R: Loguea cada reintento (before_sleep)."""
    exc: Optional[BaseException] = None
    if getattr(retry_state, "outcome", None) is not None:
        exc = retry_state.outcome.exception()

    logger.warning(
        "Retrying write after version conflict",
        extra={
            "attempt": retry_state.attempt_number,
            "error": str(exc) if exc else None,
            "error_type": type(exc).__name__ if exc else None,
        },
    )


def run_with_conflict_retry(
    operation: Callable[[], T],
    *,
    retries: int = 1,
    on_retry: Callable[[], None] | None = None,
) -> T:
    """R: Ejecuta `operation` reintentando ante ConflictError.

    Args:
        operation: callable sin argumentos; debe releer estado en cada intento.
        retries: cantidad de reintentos (0 = un único intento).
        on_retry: hook opcional (métricas) invocado antes de cada reintento.

    Raises:
        ConflictError: si todos los intentos pierden la carrera.
    """

    def _before_sleep(retry_state: RetryCallState) -> None:
        _log_retry(retry_state)
        if on_retry is not None:
            on_retry()

    retrying = Retrying(
        stop=stop_after_attempt(max(0, retries) + 1),
        wait=wait_none(),
        retry=retry_if_exception_type(ConflictError),
        before_sleep=_before_sleep,
        reraise=True,
    )
    return retrying(operation)
