"""
===============================================================================
USE CASE: Submit DBS Info
===============================================================================

Business Goal:
    Registrar (upsert) los datos del certificado DBS del staff (uno por usuario).

Rules:
    - Misma precondición que certificados: perfil de staff completo.
    - certificate_number, surname, fechas: obligatorios (VALIDATION_ERROR).
    - is_registered_on_update_service usa coerce_flag: NUNCA es error; lo no
      reconocido queda en False.

Error Mapping:
    - VALIDATION_ERROR / NOT_FOUND / ILLEGAL_STATE_TRANSITION
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from ....audit import emit_audit_event
from ....crosscutting.metrics import record_onboarding_event
from ....domain.audit import ACTION_DBS_SUBMITTED
from ....domain.entities import DbsInfo
from ....domain.repositories import (
    AuditEventRepository,
    DbsInfoRepository,
    StaffAccountRepository,
)
from ....domain.value_objects import coerce_flag, parse_date
from ...clock import Clock, system_clock
from .compliance_access import resolve_account_for_compliance
from .compliance_results import (
    ComplianceErrorCode,
    DbsInfoResult,
    compliance_error,
    outcome_of,
)

_OPERATION = "submit_dbs_info"


@dataclass(frozen=True)
class SubmitDbsInfoInput:
    user_id: UUID | None
    certificate_number: str
    surname_on_certificate: str
    dob_on_certificate: Any
    certificate_print_date: Any
    is_registered_on_update_service: Any = None


class SubmitDbsInfoUseCase:
    def __init__(
        self,
        accounts: StaffAccountRepository,
        dbs_records: DbsInfoRepository,
        *,
        audit_repository: AuditEventRepository | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._accounts = accounts
        self._dbs = dbs_records
        self._audit = audit_repository
        self._clock = clock

    def execute(self, input_data: SubmitDbsInfoInput) -> DbsInfoResult:
        result = self._submit(input_data)
        record_onboarding_event(_OPERATION, outcome_of(result.error))
        return result

    def _submit(self, input_data: SubmitDbsInfoInput) -> DbsInfoResult:
        account, error = resolve_account_for_compliance(
            self._accounts, input_data.user_id
        )
        if error is not None:
            return DbsInfoResult(error=error)

        certificate_number = (input_data.certificate_number or "").strip()
        surname = (input_data.surname_on_certificate or "").strip()
        if not certificate_number or not surname:
            return self._validation_error(
                "certificate_number and surname_on_certificate are required."
            )

        try:
            dob = parse_date(input_data.dob_on_certificate, field_name="dob_on_certificate")
            print_date = parse_date(
                input_data.certificate_print_date, field_name="certificate_print_date"
            )
        except ValueError as exc:
            return self._validation_error(str(exc))

        now = self._clock()
        saved = self._dbs.upsert_dbs_info(
            DbsInfo(
                user_id=account.user_id,
                certificate_number=certificate_number,
                surname_on_certificate=surname,
                dob_on_certificate=dob,
                certificate_print_date=print_date,
                is_registered_on_update_service=coerce_flag(
                    input_data.is_registered_on_update_service
                ),
                updated_at=now,
            )
        )

        emit_audit_event(
            self._audit,
            action=ACTION_DBS_SUBMITTED,
            actor_user_id=account.user_id,
            target_id=account.user_id,
            metadata={
                "is_registered_on_update_service": saved.is_registered_on_update_service
            },
            occurred_at=now,
        )
        return DbsInfoResult(dbs_info=saved)

    @staticmethod
    def _validation_error(message: str) -> DbsInfoResult:
        return DbsInfoResult(
            error=compliance_error(ComplianceErrorCode.VALIDATION_ERROR, message)
        )
