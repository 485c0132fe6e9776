"""
===============================================================================
USE CASE: Select Account Type
===============================================================================

Business Goal:
    Selector one-time de rama de onboarding: staff | service_provider | admin.

Rules:
    - Catálogo cerrado (INVALID_ENUM_VALUE fuera de él).
    - Solo desde EMAIL_VERIFIED.
    - "admin" no es auto-registrable salvo `allow_admin_self_registration`.

Error Mapping:
    - INVALID_ENUM_VALUE: tipo desconocido
    - VALIDATION_ERROR: admin no habilitado para auto-registro
    - NOT_FOUND: cuenta inexistente
    - ILLEGAL_STATE_TRANSITION: paso fuera de orden (incluye re-selección)
    - CONFLICT: write concurrente perdido
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from ....audit import emit_audit_event
from ....crosscutting.metrics import record_onboarding_event
from ....domain.audit import ACTION_ACCOUNT_TYPE_SELECTED
from ....domain.onboarding_policy import can_advance
from ....domain.repositories import AuditEventRepository, StaffAccountRepository
from ....domain.value_objects import (
    AccountType,
    InvalidEnumValueError,
    OnboardingStep,
    parse_enum,
)
from ...clock import Clock, system_clock
from .account_access import load_account, save_transition
from .onboarding_results import (
    OnboardingErrorCode,
    OnboardingResult,
    onboarding_error,
    outcome_of,
)

_OPERATION = "select_account_type"


@dataclass(frozen=True)
class SelectAccountTypeInput:
    user_id: UUID | None
    account_type: Any


class SelectAccountTypeUseCase:
    def __init__(
        self,
        accounts: StaffAccountRepository,
        *,
        allow_admin_self_registration: bool = False,
        audit_repository: AuditEventRepository | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._accounts = accounts
        self._allow_admin = allow_admin_self_registration
        self._audit = audit_repository
        self._clock = clock

    def execute(self, input_data: SelectAccountTypeInput) -> OnboardingResult:
        result = self._select(input_data)
        record_onboarding_event(_OPERATION, outcome_of(result.error))
        return result

    def _select(self, input_data: SelectAccountTypeInput) -> OnboardingResult:
        try:
            account_type = parse_enum(AccountType, input_data.account_type)
        except InvalidEnumValueError as exc:
            return OnboardingResult(
                error=onboarding_error(OnboardingErrorCode.INVALID_ENUM_VALUE, str(exc))
            )

        if account_type == AccountType.ADMIN and not self._allow_admin:
            return OnboardingResult(
                error=onboarding_error(
                    OnboardingErrorCode.VALIDATION_ERROR,
                    "Admin accounts cannot be self-registered.",
                )
            )

        account, error = load_account(self._accounts, input_data.user_id)
        if error is not None:
            return OnboardingResult(error=error)

        if not can_advance(
            account.onboarding_step, OnboardingStep.ACCOUNT_TYPE_SELECTED
        ):
            return OnboardingResult(
                error=onboarding_error(
                    OnboardingErrorCode.ILLEGAL_STATE_TRANSITION,
                    "Account type can only be selected once, after email verification.",
                )
            )

        now = self._clock()
        expected_version = account.version
        account.select_account_type(account_type, at=now)
        saved, error = save_transition(
            self._accounts,
            account,
            expected_version=expected_version,
            operation=_OPERATION,
        )
        if error is not None:
            return OnboardingResult(error=error)

        emit_audit_event(
            self._audit,
            action=ACTION_ACCOUNT_TYPE_SELECTED,
            actor_user_id=saved.user_id,
            target_id=saved.user_id,
            metadata={"account_type": account_type.value},
            occurred_at=now,
        )
        return OnboardingResult(account=saved)
