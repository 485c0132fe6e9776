"""
===============================================================================
USE CASE: Complete Staff Profile
===============================================================================

Name:
    Complete Staff Profile Use Case

Business Goal:
    Transición final de la rama staff: ACCOUNT_TYPE_SELECTED -> PROFILE_COMPLETED,
    creando el StaffProfile y guardando solo el hash del password.

Why (Context / Intención):
    - El estado se chequea ANTES de validar inputs: un perfil fuera de orden
      es ILLEGAL_STATE_TRANSITION sin importar la forma del payload.
    - El write es un único compare-and-set por versión: de dos envíos
      simultáneos, exactamente uno gana y el otro recibe CONFLICT.
    - Completar es irreversible (no hay "uncomplete").

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CompleteStaffProfileUseCase

Responsibilities:
    - Validar estado/rama, luego campos obligatorios y password policy.
    - Normalizar roles (lista o string separado por comas).
    - Derivar hash (CredentialHasher) y persistir atómicamente.

Collaborators:
    - StaffAccountRepository, CredentialHasher
    - domain.onboarding_policy.can_complete_profile
    - domain.value_objects: parse_date, parse_role_tags, coerce_flag

Error Mapping:
    - NOT_FOUND: cuenta inexistente
    - ILLEGAL_STATE_TRANSITION: paso/rama incorrectos o perfil ya completo
    - VALIDATION_ERROR: nombre, fecha de nacimiento, right-to-work, password, términos
    - INVALID_ENUM_VALUE: rol desconocido
    - CONFLICT: write concurrente perdido
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from ....audit import emit_audit_event
from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_onboarding_event
from ....domain.audit import ACTION_STAFF_PROFILE_COMPLETED
from ....domain.entities import StaffProfile
from ....domain.onboarding_policy import can_complete_profile
from ....domain.repositories import AuditEventRepository, StaffAccountRepository
from ....domain.services import CredentialHasher
from ....domain.value_objects import (
    AccountType,
    InvalidEnumValueError,
    coerce_flag,
    parse_date,
    parse_role_tags,
)
from ...clock import Clock, system_clock
from .account_access import load_account, save_transition
from .onboarding_results import (
    OnboardingErrorCode,
    OnboardingResult,
    onboarding_error,
    outcome_of,
)

_OPERATION = "complete_staff_profile"


@dataclass(frozen=True)
class CompleteStaffProfileInput:
    """
    DTO de entrada.

    Notas:
      - date_of_birth: date o string ISO.
      - roles: lista, string separado por comas o None.
      - agreed_to_terms: bool o representación textual/numérica.
    """

    user_id: UUID | None
    first_name: str
    last_name: str
    date_of_birth: Any
    right_to_work_status: str
    password: str
    agreed_to_terms: Any
    roles: Any = None
    mobile: str | None = None
    cv_url: str | None = None
    experience: str | None = None


class CompleteStaffProfileUseCase:
    def __init__(
        self,
        accounts: StaffAccountRepository,
        hasher: CredentialHasher,
        *,
        password_min_length: int = 8,
        audit_repository: AuditEventRepository | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._accounts = accounts
        self._hasher = hasher
        self._password_min_length = password_min_length
        self._audit = audit_repository
        self._clock = clock

    def execute(self, input_data: CompleteStaffProfileInput) -> OnboardingResult:
        result = self._complete(input_data)
        record_onboarding_event(_OPERATION, outcome_of(result.error))
        return result

    def _complete(self, input_data: CompleteStaffProfileInput) -> OnboardingResult:
        # ---------------------------------------------------------------------
        # 1) Cargar agregado y validar estado/rama (antes que los inputs).
        # ---------------------------------------------------------------------
        account, error = load_account(self._accounts, input_data.user_id)
        if error is not None:
            return OnboardingResult(error=error)

        if not can_complete_profile(account, AccountType.STAFF):
            return OnboardingResult(
                error=onboarding_error(
                    OnboardingErrorCode.ILLEGAL_STATE_TRANSITION,
                    "Staff profile can only be completed after selecting the "
                    f"staff account type (current step: '{account.onboarding_step.value}').",
                )
            )

        # ---------------------------------------------------------------------
        # 2) Validar inputs.
        # ---------------------------------------------------------------------
        now = self._clock()
        first_name = (input_data.first_name or "").strip()
        last_name = (input_data.last_name or "").strip()
        if not first_name or not last_name:
            return self._validation_error("First and last name are required.")

        try:
            date_of_birth = parse_date(input_data.date_of_birth, field_name="date_of_birth")
        except ValueError as exc:
            return self._validation_error(str(exc))
        if date_of_birth >= now.date():
            return self._validation_error("date_of_birth must be in the past")

        right_to_work = (input_data.right_to_work_status or "").strip()
        if not right_to_work:
            return self._validation_error("Right-to-work status is required.")

        password = input_data.password
        if not isinstance(password, str) or len(password) < self._password_min_length:
            return self._validation_error(
                f"Password must be at least {self._password_min_length} characters."
            )

        if not coerce_flag(input_data.agreed_to_terms):
            return self._validation_error("Terms and conditions must be accepted.")

        try:
            roles = parse_role_tags(input_data.roles)
        except InvalidEnumValueError as exc:
            return OnboardingResult(
                error=onboarding_error(OnboardingErrorCode.INVALID_ENUM_VALUE, str(exc))
            )

        # ---------------------------------------------------------------------
        # 3) Construir perfil + hash y persistir (compare-and-set).
        # ---------------------------------------------------------------------
        profile = StaffProfile(
            user_id=account.user_id,
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            right_to_work_status=right_to_work,
            agreed_to_terms=True,
            roles=roles,
            mobile=_clean_optional(input_data.mobile),
            cv_url=_clean_optional(input_data.cv_url),
            experience=_clean_optional(input_data.experience),
        )

        expected_version = account.version
        account.complete_profile(
            password_hash=self._hasher.hash(password),
            profile=profile,
            at=now,
        )
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
            action=ACTION_STAFF_PROFILE_COMPLETED,
            actor_user_id=saved.user_id,
            target_id=saved.user_id,
            metadata={"roles": sorted(role.value for role in roles)},
            occurred_at=now,
        )
        logger.info("Staff profile completed", extra={"user_id": str(saved.user_id)})
        return OnboardingResult(account=saved)

    @staticmethod
    def _validation_error(message: str) -> OnboardingResult:
        return OnboardingResult(
            error=onboarding_error(OnboardingErrorCode.VALIDATION_ERROR, message)
        )


def _clean_optional(value: str | None) -> str | None:
    cleaned = (value or "").strip()
    return cleaned or None
