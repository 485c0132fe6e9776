"""
===============================================================================
USE CASE: Review Certificate
===============================================================================

Business Goal:
    Un admin marca un certificado como pending | verified | rejected.

Rules:
    - El revisor debe tener cuenta de tipo admin (FORBIDDEN si no).
    - Estado fuera del catálogo => INVALID_ENUM_VALUE.
    - Certificado inexistente => NOT_FOUND.
    - Un re-envío posterior del staff vuelve el certificado a pending.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any
from uuid import UUID

from ....audit import emit_audit_event
from ....crosscutting.metrics import record_onboarding_event
from ....domain.audit import ACTION_CERTIFICATE_REVIEWED
from ....domain.repositories import (
    AuditEventRepository,
    CertificateRepository,
    StaffAccountRepository,
)
from ....domain.value_objects import (
    AccountType,
    CertificateStatus,
    CertificateType,
    InvalidEnumValueError,
    parse_enum,
)
from ...clock import Clock, system_clock
from .compliance_results import (
    CertificateResult,
    ComplianceErrorCode,
    compliance_error,
    outcome_of,
)

_OPERATION = "review_certificate"


@dataclass(frozen=True)
class ReviewCertificateInput:
    user_id: UUID | None
    certificate_type: Any
    status: Any
    reviewer_user_id: UUID | None


class ReviewCertificateUseCase:
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

    def execute(self, input_data: ReviewCertificateInput) -> CertificateResult:
        result = self._review(input_data)
        record_onboarding_event(_OPERATION, outcome_of(result.error))
        return result

    def _review(self, input_data: ReviewCertificateInput) -> CertificateResult:
        if input_data.user_id is None or input_data.reviewer_user_id is None:
            return CertificateResult(
                error=compliance_error(
                    ComplianceErrorCode.VALIDATION_ERROR,
                    "user_id and reviewer_user_id are required.",
                )
            )

        reviewer = self._accounts.get_account(input_data.reviewer_user_id)
        if reviewer is None or reviewer.account_type != AccountType.ADMIN:
            return CertificateResult(
                error=compliance_error(
                    ComplianceErrorCode.FORBIDDEN, "Only admins can review certificates."
                )
            )

        try:
            certificate_type = parse_enum(CertificateType, input_data.certificate_type)
            status = parse_enum(CertificateStatus, input_data.status)
        except InvalidEnumValueError as exc:
            return CertificateResult(
                error=compliance_error(ComplianceErrorCode.INVALID_ENUM_VALUE, str(exc))
            )

        current = self._certificates.get_certificate(input_data.user_id, certificate_type)
        if current is None:
            return CertificateResult(
                error=compliance_error(
                    ComplianceErrorCode.NOT_FOUND, "Certificate not found."
                )
            )

        now = self._clock()
        updated = replace(
            current,
            verified_status=status,
            reviewed_by_user_id=input_data.reviewer_user_id,
            updated_at=now,
        )
        saved = self._certificates.upsert_certificates([updated])[0]

        emit_audit_event(
            self._audit,
            action=ACTION_CERTIFICATE_REVIEWED,
            actor_user_id=input_data.reviewer_user_id,
            target_id=input_data.user_id,
            metadata={
                "certificate_type": certificate_type.value,
                "status": status.value,
            },
            occurred_at=now,
        )
        return CertificateResult(certificate=saved)
