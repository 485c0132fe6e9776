"""
===============================================================================
USE CASE: Verify Email Code
===============================================================================

Name:
    Verify Email Code Use Case

Business Goal:
    Pasar la cuenta de REGISTERED a EMAIL_VERIFIED presentando (email, code).

Why (Context / Intención):
    - El challenge es de uso único: consume() es atómico en el store, así que
      un replay del mismo código falla aunque llegue en paralelo.
    - Email desconocido se reporta igual que un código inválido (no revela
      qué cuentas existen).
    - El código se consume ANTES del chequeo de estado: un replay sobre una
      cuenta ya verificada sigue siendo INVALID_OR_EXPIRED_CODE.
    - Si el write versionado pierde una carrera, el código ya quedó consumido:
      el CONFLICT le indica al caller que pida un código nuevo (resend).

Error Mapping:
    - INVALID_OR_EXPIRED_CODE: email desconocido, código incorrecto/vencido/usado
    - ILLEGAL_STATE_TRANSITION: la cuenta no está en REGISTERED
    - CONFLICT: write concurrente perdido (código consumido => resend)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....audit import emit_audit_event
from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_onboarding_event
from ....domain.audit import ACTION_EMAIL_VERIFIED
from ....domain.onboarding_policy import can_advance
from ....domain.repositories import (
    AuditEventRepository,
    ChallengeStore,
    StaffAccountRepository,
)
from ....domain.value_objects import OnboardingStep, normalize_email
from ...clock import Clock, system_clock
from .account_access import save_transition
from .onboarding_results import (
    OnboardingErrorCode,
    OnboardingResult,
    onboarding_error,
    outcome_of,
)

_OPERATION = "verify_email_code"


@dataclass(frozen=True)
class VerifyEmailCodeInput:
    email: str
    code: str


class VerifyEmailCodeUseCase:
    def __init__(
        self,
        accounts: StaffAccountRepository,
        challenges: ChallengeStore,
        *,
        audit_repository: AuditEventRepository | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._accounts = accounts
        self._challenges = challenges
        self._audit = audit_repository
        self._clock = clock

    def execute(self, input_data: VerifyEmailCodeInput) -> OnboardingResult:
        result = self._verify(input_data)
        record_onboarding_event(_OPERATION, outcome_of(result.error))
        return result

    def _verify(self, input_data: VerifyEmailCodeInput) -> OnboardingResult:
        email = normalize_email(input_data.email)
        code = (input_data.code or "").strip()
        account = self._accounts.get_account_by_email(email) if email else None
        if account is None or not code:
            return self._invalid_code()

        now = self._clock()
        if not self._challenges.consume(account.user_id, code, now):
            logger.info(
                "Email verification rejected",
                extra={"user_id": str(account.user_id)},
            )
            return self._invalid_code()

        if not can_advance(account.onboarding_step, OnboardingStep.EMAIL_VERIFIED):
            return OnboardingResult(
                error=onboarding_error(
                    OnboardingErrorCode.ILLEGAL_STATE_TRANSITION,
                    f"Cannot verify email from step '{account.onboarding_step.value}'.",
                )
            )

        expected_version = account.version
        account.mark_email_verified(at=now)
        saved, error = save_transition(
            self._accounts,
            account,
            expected_version=expected_version,
            operation=_OPERATION,
        )
        if error is not None:
            # consume() no es reversible: el código ya no sirve.
            return OnboardingResult(
                error=onboarding_error(
                    error.code,
                    "The account was modified concurrently. "
                    "Request a new verification code.",
                )
            )

        emit_audit_event(
            self._audit,
            action=ACTION_EMAIL_VERIFIED,
            actor_user_id=saved.user_id,
            target_id=saved.user_id,
            occurred_at=now,
        )
        return OnboardingResult(account=saved)

    @staticmethod
    def _invalid_code() -> OnboardingResult:
        return OnboardingResult(
            error=onboarding_error(
                OnboardingErrorCode.INVALID_OR_EXPIRED_CODE,
                "Invalid or expired verification code.",
            )
        )
