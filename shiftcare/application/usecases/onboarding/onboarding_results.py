"""
===============================================================================
ONBOARDING USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Onboarding Use Case Results

Business Goal:
    Modelos compartidos de resultado y error para la máquina de estados del
    onboarding (registro, verificación, tipo de cuenta, perfil).

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      “hacia afuera”: el host mapea `error.code` a su transporte.
    - Un set acotado de códigos evita mensajes/códigos inconsistentes.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    onboarding_results models (module)

Responsibilities:
    - OnboardingErrorCode + OnboardingError (code + message).
    - Resultados:
        * RegistrationResult (cuenta + challenge a entregar)
        * OnboardingResult (cuenta tras una transición)
        * ServiceProviderProfileResult (cuenta + perfil + contexto owner)
        * RegistrationStatusResult (snapshot de progreso)
    - outcome_of(): etiqueta de baja cardinalidad para métricas.

Collaborators:
    - domain.entities: StaffAccount, EmailVerificationChallenge, ...
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from ....domain.entities import (
    EmailVerificationChallenge,
    ServiceProviderProfile,
    StaffAccount,
)
from ....domain.value_objects import AccountType, OnboardingStep


class OnboardingErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs inválidos o incompletos.
      - NOT_FOUND: cuenta inexistente.
      - CONFLICT: email ya registrado o escritura concurrente perdida.
      - INVALID_OR_EXPIRED_CODE: código incorrecto, vencido o ya usado.
      - ILLEGAL_STATE_TRANSITION: paso fuera de orden.
      - INVALID_ENUM_VALUE: valor fuera de catálogo (tipo de cuenta, roles).
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INVALID_OR_EXPIRED_CODE = "INVALID_OR_EXPIRED_CODE"
    ILLEGAL_STATE_TRANSITION = "ILLEGAL_STATE_TRANSITION"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"


@dataclass(frozen=True)
class OnboardingError:
    code: OnboardingErrorCode
    message: str


@dataclass
class RegistrationResult:
    """
    Resultado de RegisterEmail / ResendVerificationCode.

    Nota:
      - challenge se devuelve al host para su entrega (email); no se loguea.
    """

    account: StaffAccount | None = None
    challenge: EmailVerificationChallenge | None = None
    error: OnboardingError | None = None


@dataclass
class OnboardingResult:
    account: StaffAccount | None = None
    error: OnboardingError | None = None


@dataclass
class ServiceProviderProfileResult:
    account: StaffAccount | None = None
    profile: ServiceProviderProfile | None = None
    error: OnboardingError | None = None


@dataclass(frozen=True)
class RegistrationStatus:
    """Snapshot de progreso para el cliente."""

    user_id: UUID
    email: str
    onboarding_step: OnboardingStep
    account_type: AccountType | None
    email_verified: bool
    profile_created: bool
    next_step: str


@dataclass
class RegistrationStatusResult:
    status: RegistrationStatus | None = None
    error: OnboardingError | None = None


def onboarding_error(code: OnboardingErrorCode, message: str) -> OnboardingError:
    return OnboardingError(code=code, message=message)


def outcome_of(error: OnboardingError | None) -> str:
    """Etiqueta para métricas: "ok" o el código de error."""
    return "ok" if error is None else error.code.value
