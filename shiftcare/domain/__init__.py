"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/infrastructure.
    - Mantener estable el “surface area” del dominio.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .audit import AuditEvent
from .entities import (
    ActorContext,
    DbsInfo,
    EmailVerificationChallenge,
    Employee,
    GeofenceCheckIn,
    ProviderOwner,
    ScheduledShift,
    ServiceProviderProfile,
    ShiftGeofence,
    StaffAccount,
    StaffCertificate,
    StaffProfile,
    VerificationMethod,
)
from .repositories import (
    AuditEventRepository,
    CertificateRepository,
    ChallengeStore,
    CheckInRepository,
    DbsInfoRepository,
    IdentityStore,
    ServiceProviderProfileRepository,
    StaffAccountRepository,
)
from .services import CredentialHasher, ShiftScheduler, VerificationCodeGenerator
from .value_objects import (
    AccountType,
    CertificateStatus,
    CertificateType,
    GeoPoint,
    InvalidEnumValueError,
    MainServiceType,
    OnboardingStep,
    RoleTag,
    coerce_flag,
)

__all__ = [
    # Entities
    "ActorContext",
    "ProviderOwner",
    "Employee",
    "StaffAccount",
    "StaffProfile",
    "ServiceProviderProfile",
    "StaffCertificate",
    "DbsInfo",
    "EmailVerificationChallenge",
    "ScheduledShift",
    "ShiftGeofence",
    "GeofenceCheckIn",
    "VerificationMethod",
    "AuditEvent",
    # Repository Interfaces (Ports)
    "IdentityStore",
    "StaffAccountRepository",
    "CertificateRepository",
    "DbsInfoRepository",
    "ServiceProviderProfileRepository",
    "ChallengeStore",
    "CheckInRepository",
    "AuditEventRepository",
    # Service Interfaces (Ports)
    "CredentialHasher",
    "VerificationCodeGenerator",
    "ShiftScheduler",
    # Value Objects
    "AccountType",
    "CertificateStatus",
    "CertificateType",
    "GeoPoint",
    "MainServiceType",
    "OnboardingStep",
    "RoleTag",
    "InvalidEnumValueError",
    "coerce_flag",
]
