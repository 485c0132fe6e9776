"""
===============================================================================
TARJETA CRC — domain/onboarding_policy.py
===============================================================================

Módulo:
    Política del Onboarding (máquina de estados del StaffAccount)

Responsabilidades:
    - Definir reglas puras de transición (sin DB, sin Redis).
    - Separar "policy" de "repos" (repos traen datos, policy decide).
    - Calcular el próximo paso esperado para el cliente.

Colaboradores:
    - domain.entities.StaffAccount
    - domain.value_objects.OnboardingStep, AccountType
    - application/usecases/onboarding + compliance

Reglas (intención):
    - Solo se avanza al paso inmediatamente siguiente.
    - PROFILE_COMPLETED es terminal (no hay "uncomplete").
    - El perfil a completar depende de la rama (account_type).
    - Certificados/DBS solo con perfil de staff completo.
===============================================================================
"""

from __future__ import annotations

from typing import Final

from .entities import StaffAccount
from .value_objects import AccountType, OnboardingStep

_ORDER: Final[tuple[OnboardingStep, ...]] = (
    OnboardingStep.REGISTERED,
    OnboardingStep.EMAIL_VERIFIED,
    OnboardingStep.ACCOUNT_TYPE_SELECTED,
    OnboardingStep.PROFILE_COMPLETED,
)

# Identificadores estables de "next step" (contrato hacia el cliente).
NEXT_VERIFY_EMAIL: Final[str] = "verify_email"
NEXT_SELECT_ACCOUNT_TYPE: Final[str] = "select_account_type"
NEXT_COMPLETE_STAFF_PROFILE: Final[str] = "complete_staff_profile"
NEXT_COMPLETE_PROVIDER_PROFILE: Final[str] = "complete_service_provider_profile"
NEXT_COMPLETE_ADMIN_PROFILE: Final[str] = "complete_admin_profile"
NEXT_SUBMIT_COMPLIANCE: Final[str] = "submit_compliance"
NEXT_NONE: Final[str] = "none"


def can_advance(current: OnboardingStep, target: OnboardingStep) -> bool:
    """True si target es exactamente el paso siguiente a current."""
    index = _ORDER.index(current)
    return index + 1 < len(_ORDER) and _ORDER[index + 1] == target


def can_complete_profile(account: StaffAccount, branch: AccountType) -> bool:
    """La rama elegida debe coincidir y el paso debe ser ACCOUNT_TYPE_SELECTED."""
    return (
        can_advance(account.onboarding_step, OnboardingStep.PROFILE_COMPLETED)
        and account.account_type == branch
    )


def can_submit_compliance(account: StaffAccount) -> bool:
    return (
        account.onboarding_step == OnboardingStep.PROFILE_COMPLETED
        and account.account_type == AccountType.STAFF
    )


def next_step_for(account: StaffAccount) -> str:
    """Paso siguiente esperado (para GetRegistrationStatus)."""
    step = account.onboarding_step
    if step == OnboardingStep.REGISTERED:
        return NEXT_VERIFY_EMAIL
    if step == OnboardingStep.EMAIL_VERIFIED:
        return NEXT_SELECT_ACCOUNT_TYPE
    if step == OnboardingStep.ACCOUNT_TYPE_SELECTED:
        if account.account_type == AccountType.SERVICE_PROVIDER:
            return NEXT_COMPLETE_PROVIDER_PROFILE
        if account.account_type == AccountType.ADMIN:
            return NEXT_COMPLETE_ADMIN_PROFILE
        return NEXT_COMPLETE_STAFF_PROFILE
    if account.account_type == AccountType.STAFF:
        return NEXT_SUBMIT_COMPLIANCE
    return NEXT_NONE
