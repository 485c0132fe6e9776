"""
===============================================================================
USE CASE: Submit Certificates
===============================================================================

Name:
    Submit Certificates Use Case

Business Goal:
    Registrar (upsert) certificados de training del staff, uno o varios por
    llamada, con clave natural (user_id, certificate_type).

Why (Context / Intención):
    - Re-enviar un tipo sobrescribe la expiración anterior (no duplica filas)
      y vuelve el estado de revisión a "pending".
    - Bulk: mapping tipo -> expiración, o el mismo mapping como string JSON
      (formularios multipart).
    - Todo el batch se valida antes de escribir: o entra completo o nada.

Error Mapping:
    - VALIDATION_ERROR: sin entradas, JSON inválido, expiración mal formada
    - NOT_FOUND: cuenta inexistente
    - ILLEGAL_STATE_TRANSITION: perfil de staff no completo
    - INVALID_ENUM_VALUE: tipo de certificado desconocido
===============================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Tuple
from uuid import UUID

from ....audit import emit_audit_event
from ....crosscutting.metrics import record_onboarding_event
from ....domain.audit import ACTION_CERTIFICATES_SUBMITTED
from ....domain.entities import StaffCertificate
from ....domain.repositories import (
    AuditEventRepository,
    CertificateRepository,
    StaffAccountRepository,
)
from ....domain.value_objects import (
    CertificateStatus,
    CertificateType,
    InvalidEnumValueError,
    parse_date,
    parse_enum,
)
from ...clock import Clock, system_clock
from .compliance_access import resolve_account_for_compliance
from .compliance_results import (
    CertificatesResult,
    ComplianceError,
    ComplianceErrorCode,
    compliance_error,
    outcome_of,
)

_OPERATION = "submit_certificates"


@dataclass(frozen=True)
class SubmitCertificatesInput:
    """
    DTO de entrada.

    Formas aceptadas:
      - bulk: certificates = {"first_aid": "2026-12-31", "coshh": None}
              o el mismo objeto como string JSON
      - single: certificate_type + expiry_date (opcional)
    """

    user_id: UUID | None
    certificates: Any = None
    certificate_type: Any = None
    expiry_date: Any = None


class SubmitCertificatesUseCase:
    def __init__(
        self,
        accounts: StaffAccountRepository,
        certificates: CertificateRepository,
        *,
        audit_repository: AuditEventRepository | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._accounts = accounts
        self._certificates = certificates
        self._audit = audit_repository
        self._clock = clock

    def execute(self, input_data: SubmitCertificatesInput) -> CertificatesResult:
        result = self._submit(input_data)
        record_onboarding_event(_OPERATION, outcome_of(result.error))
        return result

    def _submit(self, input_data: SubmitCertificatesInput) -> CertificatesResult:
        account, error = resolve_account_for_compliance(
            self._accounts, input_data.user_id
        )
        if error is not None:
            return CertificatesResult(error=error)

        entries, error = _collect_entries(input_data)
        if error is not None:
            return CertificatesResult(error=error)

        parsed, error = _parse_entries(entries)
        if error is not None:
            return CertificatesResult(error=error)

        now = self._clock()
        saved = self._certificates.upsert_certificates(
            [
                StaffCertificate(
                    user_id=account.user_id,
                    certificate_type=certificate_type,
                    expiry_date=expiry,
                    verified_status=CertificateStatus.PENDING,
                    updated_at=now,
                )
                for certificate_type, expiry in parsed.items()
            ]
        )

        emit_audit_event(
            self._audit,
            action=ACTION_CERTIFICATES_SUBMITTED,
            actor_user_id=account.user_id,
            target_id=account.user_id,
            metadata={"certificate_types": sorted(t.value for t in parsed)},
            occurred_at=now,
        )
        return CertificatesResult(certificates=saved)


def _collect_entries(
    input_data: SubmitCertificatesInput,
) -> Tuple[Dict[Any, Any], ComplianceError | None]:
    """Normaliza single/bulk a un dict crudo tipo -> expiración."""
    raw = input_data.certificates
    if raw is None:
        if input_data.certificate_type is None:
            return {}, compliance_error(
                ComplianceErrorCode.VALIDATION_ERROR,
                "At least one certificate is required.",
            )
        return {input_data.certificate_type: input_data.expiry_date}, None

    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError:
            return {}, compliance_error(
                ComplianceErrorCode.VALIDATION_ERROR,
                "certificates must be a JSON object mapping type to expiry date.",
            )

    if not isinstance(raw, dict):
        return {}, compliance_error(
            ComplianceErrorCode.VALIDATION_ERROR,
            "certificates must map certificate type to expiry date.",
        )
    if not raw:
        return {}, compliance_error(
            ComplianceErrorCode.VALIDATION_ERROR,
            "At least one certificate is required.",
        )
    return dict(raw), None


def _parse_entries(
    entries: Dict[Any, Any],
) -> Tuple[Dict[CertificateType, date | None], ComplianceError | None]:
    parsed: Dict[CertificateType, date | None] = {}
    invalid_types: List[str] = []

    for raw_type, raw_expiry in entries.items():
        try:
            certificate_type = parse_enum(CertificateType, raw_type)
        except InvalidEnumValueError:
            invalid_types.append(str(raw_type))
            continue

        if raw_expiry is None or (isinstance(raw_expiry, str) and not raw_expiry.strip()):
            parsed[certificate_type] = None
            continue
        try:
            parsed[certificate_type] = parse_date(
                raw_expiry, field_name=f"expiry_date for {certificate_type.value}"
            )
        except ValueError as exc:
            return {}, compliance_error(ComplianceErrorCode.VALIDATION_ERROR, str(exc))

    if invalid_types:
        allowed = ", ".join(t.value for t in CertificateType)
        return {}, compliance_error(
            ComplianceErrorCode.INVALID_ENUM_VALUE,
            f"Invalid certificate type(s): {', '.join(invalid_types)}. Allowed: {allowed}",
        )
    return parsed, None
