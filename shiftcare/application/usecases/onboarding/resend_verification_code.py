"""
===============================================================================
USE CASE: Resend Verification Code
===============================================================================

Business Goal:
    Regenerar el código de verificación y reiniciar su ventana de expiración,
    sin cambiar el estado del onboarding.

Rules:
    - Solo en REGISTERED (un email ya verificado no se re-verifica).
    - El email debe coincidir con la cuenta (evita re-dirigir el código).
    - El challenge nuevo reemplaza al anterior: el código viejo deja de valer.

Error Mapping:
    - VALIDATION_ERROR: user_id ausente o email no coincide
    - NOT_FOUND: cuenta inexistente
    - ILLEGAL_STATE_TRANSITION: cuenta ya verificada
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....audit import emit_audit_event
from ....crosscutting.metrics import record_onboarding_event
from ....domain.audit import ACTION_CODE_RESENT
from ....domain.repositories import (
    AuditEventRepository,
    ChallengeStore,
    StaffAccountRepository,
)
from ....domain.services import VerificationCodeGenerator
from ....domain.value_objects import OnboardingStep, normalize_email
from ...clock import Clock, system_clock
from .account_access import issue_challenge, load_account
from .onboarding_results import (
    OnboardingErrorCode,
    RegistrationResult,
    onboarding_error,
    outcome_of,
)

_OPERATION = "resend_verification_code"


@dataclass(frozen=True)
class ResendVerificationCodeInput:
    user_id: UUID | None
    email: str


class ResendVerificationCodeUseCase:
    def __init__(
        self,
        accounts: StaffAccountRepository,
        challenges: ChallengeStore,
        code_generator: VerificationCodeGenerator,
        *,
        code_ttl_minutes: int = 10,
        audit_repository: AuditEventRepository | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._accounts = accounts
        self._challenges = challenges
        self._codes = code_generator
        self._ttl_minutes = code_ttl_minutes
        self._audit = audit_repository
        self._clock = clock

    def execute(self, input_data: ResendVerificationCodeInput) -> RegistrationResult:
        result = self._resend(input_data)
        record_onboarding_event(_OPERATION, outcome_of(result.error))
        return result

    def _resend(self, input_data: ResendVerificationCodeInput) -> RegistrationResult:
        account, error = load_account(self._accounts, input_data.user_id)
        if error is not None:
            return RegistrationResult(error=error)

        if account.onboarding_step != OnboardingStep.REGISTERED:
            return RegistrationResult(
                error=onboarding_error(
                    OnboardingErrorCode.ILLEGAL_STATE_TRANSITION,
                    "Email is already verified.",
                )
            )

        if normalize_email(input_data.email) != account.email:
            return RegistrationResult(
                error=onboarding_error(
                    OnboardingErrorCode.VALIDATION_ERROR,
                    "Email does not match the registered account.",
                )
            )

        now = self._clock()
        challenge = issue_challenge(
            self._challenges,
            self._codes,
            account=account,
            now=now,
            ttl_minutes=self._ttl_minutes,
        )
        emit_audit_event(
            self._audit,
            action=ACTION_CODE_RESENT,
            actor_user_id=account.user_id,
            target_id=account.user_id,
            occurred_at=now,
        )
        return RegistrationResult(account=account, challenge=challenge)
