"""
===============================================================================
USE CASE: Register Email
===============================================================================

Name:
    Register Email Use Case

Business Goal:
    Crear la cuenta de onboarding en estado REGISTERED y emitir el primer
    challenge de verificación de email.

Why (Context / Intención):
    - El email es la identidad de entrada: se normaliza (trim + lower) para que
      "Ana@X.com" y "ana@x.com" sean la misma cuenta.
    - El challenge se devuelve al host para su entrega; este core no envía mails.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    RegisterEmailUseCase

Responsibilities:
    - Validar forma del email.
    - Verificar unicidad (email ya registrado => CONFLICT).
    - Crear StaffAccount y emitir challenge con TTL configurable.
    - Auditar (best-effort) y registrar métrica.

Collaborators:
    - StaffAccountRepository, ChallengeStore, VerificationCodeGenerator
    - AuditEventRepository (opcional)
    - account_access.issue_challenge

Error Mapping:
    - VALIDATION_ERROR: email vacío o con forma inválida
    - CONFLICT: email ya registrado (incluye carrera de alta simultánea)
    - ChallengeStoreError: se propaga al host, con la cuenta recién creada
      ya eliminada (sin efectos parciales).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

from ....audit import emit_audit_event
from ....crosscutting.exceptions import ChallengeStoreError, ConflictError
from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_onboarding_event
from ....domain.audit import ACTION_EMAIL_REGISTERED
from ....domain.entities import StaffAccount
from ....domain.repositories import (
    AuditEventRepository,
    ChallengeStore,
    StaffAccountRepository,
)
from ....domain.services import VerificationCodeGenerator
from ....domain.value_objects import is_valid_email, normalize_email
from ...clock import Clock, system_clock
from .account_access import issue_challenge
from .onboarding_results import (
    OnboardingErrorCode,
    RegistrationResult,
    onboarding_error,
    outcome_of,
)

_OPERATION = "register_email"


@dataclass(frozen=True)
class RegisterEmailInput:
    email: str


class RegisterEmailUseCase:
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

    def execute(self, input_data: RegisterEmailInput) -> RegistrationResult:
        result = self._register(input_data)
        record_onboarding_event(_OPERATION, outcome_of(result.error))
        return result

    def _register(self, input_data: RegisterEmailInput) -> RegistrationResult:
        email = normalize_email(input_data.email)
        if not email or not is_valid_email(email):
            return RegistrationResult(
                error=onboarding_error(
                    OnboardingErrorCode.VALIDATION_ERROR, "A valid email is required."
                )
            )

        if self._accounts.get_account_by_email(email) is not None:
            return self._already_registered()

        now = self._clock()
        account = StaffAccount(
            user_id=uuid4(), email=email, created_at=now, updated_at=now
        )
        try:
            account = self._accounts.create_account(account)
        except ConflictError:
            # Alta simultánea del mismo email: gana la primera.
            return self._already_registered()

        try:
            challenge = issue_challenge(
                self._challenges,
                self._codes,
                account=account,
                now=now,
                ttl_minutes=self._ttl_minutes,
            )
        except ChallengeStoreError:
            # Sin código el caller no recibe user_id: deshacer el alta para que
            # el mismo email pueda registrarse cuando el store vuelva.
            removed = self._accounts.delete_account(account.user_id, account.version)
            logger.warning(
                "Registration rolled back: challenge store unavailable",
                extra={"user_id": str(account.user_id), "rolled_back": removed},
            )
            raise

        emit_audit_event(
            self._audit,
            action=ACTION_EMAIL_REGISTERED,
            actor_user_id=account.user_id,
            target_id=account.user_id,
            occurred_at=now,
        )
        logger.info(
            "Onboarding account registered", extra={"user_id": str(account.user_id)}
        )
        return RegistrationResult(account=account, challenge=challenge)

    @staticmethod
    def _already_registered() -> RegistrationResult:
        return RegistrationResult(
            error=onboarding_error(
                OnboardingErrorCode.CONFLICT, "Email is already registered."
            )
        )
