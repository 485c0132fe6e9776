"""
===============================================================================
TARJETA CRC — domain/audit.py
===============================================================================

Módulo:
    Modelos de Auditoría (Dominio)

Responsabilidades:
    - Definir AuditEvent y las acciones conocidas del core.
    - Mantener el contrato de auditoría independiente de infraestructura.

Colaboradores:
    - domain.repositories.AuditEventRepository: persiste y lista eventos.
    - shiftcare/audit.py: emite eventos (best-effort).

Notas:
    - Append-only (no se edita ni se borra).
    - metadata es flexible (dict) pero NUNCA lleva passwords ni códigos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final
from uuid import UUID

ACTION_EMAIL_REGISTERED: Final[str] = "onboarding.email.registered"
ACTION_CODE_RESENT: Final[str] = "onboarding.email.code_resent"
ACTION_EMAIL_VERIFIED: Final[str] = "onboarding.email.verified"
ACTION_ACCOUNT_TYPE_SELECTED: Final[str] = "onboarding.account_type.selected"
ACTION_STAFF_PROFILE_COMPLETED: Final[str] = "onboarding.staff_profile.completed"
ACTION_PROVIDER_PROFILE_COMPLETED: Final[str] = (
    "onboarding.service_provider_profile.completed"
)
ACTION_CERTIFICATES_SUBMITTED: Final[str] = "compliance.certificates.submitted"
ACTION_CERTIFICATE_REVIEWED: Final[str] = "compliance.certificate.reviewed"
ACTION_DBS_SUBMITTED: Final[str] = "compliance.dbs.submitted"
ACTION_CHECK_IN_ATTEMPT: Final[str] = "shift.check_in.attempt"
ACTION_CHECK_OUT: Final[str] = "shift.check_out"


@dataclass(slots=True)
class AuditEvent:
    """Evento de auditoría del sistema."""

    id: UUID
    actor: str
    action: str
    target_id: UUID | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
