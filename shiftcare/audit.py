"""
===============================================================================
TARJETA CRC — shiftcare/audit.py (Emisión de auditoría)
===============================================================================

Responsabilidades:
  - Armar AuditEvent (actor "user:{id}" | "system", action, target, metadata).
  - Limpiar metadata: sin secretos, solo tipos JSON.
  - Persistir best-effort: un fallo del sink se loguea y el flujo sigue.

Colaboradores:
  - shiftcare.domain.audit (AuditEvent + acciones)
  - shiftcare.domain.repositories.AuditEventRepository
  - shiftcare.crosscutting.logger

Notas:
  - El trail de check-in es además la fuente del historial de intentos
    (ListCheckInAttempts), por eso los UUID se guardan como str estable.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping
from uuid import UUID, uuid4

from .crosscutting.logger import logger
from .domain.audit import AuditEvent
from .domain.repositories import AuditEventRepository

SYSTEM_ACTOR = "system"

# Nunca llegan al trail (ni anidadas).
_DROPPED_KEYS: frozenset[str] = frozenset(
    {"password", "password_hash", "code", "verification_code"}
)


def actor_for_user(user_id: UUID | None) -> str:
    return SYSTEM_ACTOR if user_id is None else f"user:{user_id}"


def _clean(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Mapping):
        return {
            str(k): _clean(v)
            for k, v in value.items()
            if str(k).lower() not in _DROPPED_KEYS
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_clean(item) for item in value]
    # UUID, Decimal, date/datetime
    return str(value)


def build_audit_event(
    *,
    action: str,
    actor: str,
    target_id: UUID | None = None,
    metadata: Mapping[str, Any] | None = None,
    occurred_at: datetime | None = None,
) -> AuditEvent:
    return AuditEvent(
        id=uuid4(),
        actor=actor,
        action=action,
        target_id=target_id,
        metadata=_clean(dict(metadata or {})),
        created_at=occurred_at or datetime.now(timezone.utc),
    )


def emit_audit_event(
    repository: AuditEventRepository | None,
    *,
    action: str,
    actor_user_id: UUID | None = None,
    actor: str | None = None,
    target_id: UUID | None = None,
    metadata: Mapping[str, Any] | None = None,
    occurred_at: datetime | None = None,
) -> None:
    """
    Registra un evento. `actor` explícito gana sobre `actor_user_id`.

    Sin repositorio configurado => no-op.
    """
    if repository is None:
        return

    event = build_audit_event(
        action=action,
        actor=actor or actor_for_user(actor_user_id),
        target_id=target_id,
        metadata=metadata,
        occurred_at=occurred_at,
    )
    try:
        repository.record_event(event)
    except Exception as exc:
        logger.warning(
            "Falló la escritura del evento de auditoría",
            extra={
                "action": action,
                "actor": event.actor,
                "error_type": type(exc).__name__,
                "error": str(exc),
            },
        )
