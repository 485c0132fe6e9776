"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (ActorContext, StaffAccount, Compliance, Check-in)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos (métodos) para mantener invariantes simples.
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.value_objects: enums cerrados y GeoPoint.
    - domain.onboarding_policy: reglas de transición del agregado.
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a DB/Redis/HTTP.
    - Structs planos con campos opcionales explícitos (sin lazy relations).
    - `version` es el token de concurrencia optimista de cada agregado.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

from .value_objects import (
    AccountType,
    CertificateStatus,
    CertificateType,
    GeoPoint,
    MainServiceType,
    OnboardingStep,
    RoleTag,
)


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Actor context (provider scoping)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ActorContext:
    """
    Contexto de service provider del actor autenticado.

    - service_provider_id: siempre presente.
    - employee_id: solo si el actor es empleado (no owner).
    Se calcula por request; nunca se persiste.
    """

    service_provider_id: UUID
    employee_id: Optional[UUID] = None

    @property
    def is_owner(self) -> bool:
        return self.employee_id is None


@dataclass(frozen=True, slots=True)
class ProviderOwner:
    """Registro de owner: su id ES el id del service provider."""

    id: UUID
    user_id: UUID


@dataclass(frozen=True, slots=True)
class Employee:
    """Empleado de un provider (link nullable: puede estar desvinculado)."""

    id: UUID
    user_id: UUID
    service_provider_id: Optional[UUID] = None


# ---------------------------------------------------------------------------
# Onboarding aggregate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StaffProfile:
    """Perfil de staff creado una sola vez al completar el onboarding."""

    user_id: UUID
    first_name: str
    last_name: str
    date_of_birth: date
    right_to_work_status: str
    agreed_to_terms: bool
    roles: frozenset[RoleTag] = frozenset()
    mobile: Optional[str] = None
    cv_url: Optional[str] = None
    experience: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class ServiceProviderProfile:
    """Perfil de la organización (rama service_provider del onboarding)."""

    user_id: UUID
    service_provider_id: UUID
    first_name: str
    last_name: str
    organization_name: str
    cqc_provider_number: str
    primary_address: str
    main_service_type: MainServiceType
    max_client_capacity: int
    agreed_to_terms: bool
    mobile: Optional[str] = None
    website: Optional[str] = None
    vat_tax_id: Optional[str] = None
    brand_logo_url: Optional[str] = None


@dataclass
class StaffAccount:
    """
    Aggregate root del onboarding.

    Importante:
      - Las transiciones se validan en domain.onboarding_policy; este objeto
        solo centraliza la mutación para evitar writes inconsistentes.
      - password_hash es opaco (nunca el password en claro).
    """

    user_id: UUID
    email: str
    onboarding_step: OnboardingStep = OnboardingStep.REGISTERED
    account_type: Optional[AccountType] = None
    email_verified_at: Optional[datetime] = None
    password_hash: Optional[str] = None
    profile: Optional[StaffProfile] = None
    version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_email_verified(self) -> bool:
        return self.email_verified_at is not None

    @property
    def is_profile_completed(self) -> bool:
        return self.onboarding_step == OnboardingStep.PROFILE_COMPLETED

    def mark_email_verified(self, *, at: datetime | None = None) -> None:
        when = at or _utcnow()
        self.email_verified_at = when
        self.onboarding_step = OnboardingStep.EMAIL_VERIFIED
        self.updated_at = when

    def select_account_type(
        self, account_type: AccountType, *, at: datetime | None = None
    ) -> None:
        self.account_type = account_type
        self.onboarding_step = OnboardingStep.ACCOUNT_TYPE_SELECTED
        self.updated_at = at or _utcnow()

    def complete_profile(
        self,
        *,
        password_hash: str,
        profile: StaffProfile | None = None,
        at: datetime | None = None,
    ) -> None:
        """Transición final (irreversible). profile es None en la rama provider."""
        self.password_hash = password_hash
        self.profile = profile
        self.onboarding_step = OnboardingStep.PROFILE_COMPLETED
        self.updated_at = at or _utcnow()


@dataclass(frozen=True, slots=True)
class EmailVerificationChallenge:
    """Challenge transitorio de verificación de email (uso único)."""

    email: str
    user_id: UUID
    code: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


# ---------------------------------------------------------------------------
# Compliance
# ---------------------------------------------------------------------------


@dataclass
class StaffCertificate:
    """Certificado por (user_id, certificate_type). Upsert, nunca duplicado."""

    user_id: UUID
    certificate_type: CertificateType
    expiry_date: Optional[date] = None
    verified_status: CertificateStatus = CertificateStatus.PENDING
    reviewed_by_user_id: Optional[UUID] = None
    updated_at: Optional[datetime] = None


@dataclass
class DbsInfo:
    """Datos del certificado DBS (uno por usuario)."""

    user_id: UUID
    certificate_number: str
    surname_on_certificate: str
    dob_on_certificate: date
    certificate_print_date: date
    is_registered_on_update_service: bool = False
    updated_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Shifts / check-in
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ShiftGeofence:
    """Límite circular (centro + radio en metros)."""

    center: GeoPoint
    radius_meters: float

    def __post_init__(self) -> None:
        if self.radius_meters <= 0:
            raise ValueError("radius_meters must be greater than 0")


@dataclass(frozen=True)
class ScheduledShift:
    """Vista mínima del turno provista por el scheduler externo."""

    id: UUID
    service_provider_id: UUID
    assigned_staff_user_id: Optional[UUID] = None
    geofence: Optional[ShiftGeofence] = None
    hourly_rate: Decimal = Decimal("0")


class VerificationMethod(str, Enum):
    """Cómo se decidió el check-in."""

    DEVICE_LOCATION = "device_location"
    MANAGER_CONFIRMATION = "manager_confirmation"
    NONE = "none"


@dataclass
class GeofenceCheckIn:
    """
    Estado "latest" del check-in por (shift_id, staff_user_id).

    Nota:
      - El historial completo de intentos vive en la auditoría (append-only).
      - Los totales se completan solo al hacer check-out.
    """

    shift_id: UUID
    staff_user_id: UUID
    timestamp: datetime
    verified: bool
    reason: str
    reported_latitude: Optional[float] = None
    reported_longitude: Optional[float] = None
    distance_meters: Optional[float] = None
    verification_method: VerificationMethod = VerificationMethod.NONE
    checked_out_at: Optional[datetime] = None
    total_hours: Optional[Decimal] = None
    total_pay: Optional[Decimal] = None
    version: int = 0

    @property
    def is_checked_out(self) -> bool:
        return self.checked_out_at is not None


@dataclass(frozen=True)
class CheckInAttempt:
    """Proyección de un intento de check-in leído desde la auditoría."""

    shift_id: UUID
    staff_user_id: Optional[UUID]
    occurred_at: Optional[datetime]
    verified: bool
    reason: str
    metadata: dict = field(default_factory=dict)
