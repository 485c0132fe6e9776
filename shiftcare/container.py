"""
===============================================================================
TARJETA CRC — shiftcare/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer repositorios, stores y servicios detrás de los puertos del dominio.
  - Exponer factories de casos de uso para el host (HTTP, worker, CLI).
  - Mantener singletons cacheados (lru_cache) para el estado en memoria y Redis.
  - Traducir Settings (TTL, longitudes, flags) a parámetros de los use cases.

Colaboradores:
  - shiftcare.crosscutting.config.get_settings
  - shiftcare.domain.repositories / shiftcare.domain.services (puertos)
  - shiftcare.infrastructure.* (implementaciones)
  - shiftcare.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Los repositorios de referencia son in-memory; un host con DB real
    reemplaza estas factories (o las overridea en sus propios tests).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from redis import Redis

from .application.usecases import (
    CheckInToShiftUseCase,
    CheckOutOfShiftUseCase,
    CompleteServiceProviderProfileUseCase,
    CompleteStaffProfileUseCase,
    GetRegistrationStatusUseCase,
    ListCheckInAttemptsUseCase,
    RegisterEmailUseCase,
    ResendVerificationCodeUseCase,
    ResolveActorContextUseCase,
    ReviewCertificateUseCase,
    SelectAccountTypeUseCase,
    SubmitCertificatesUseCase,
    SubmitDbsInfoUseCase,
    VerifyEmailCodeUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    AuditEventRepository,
    CertificateRepository,
    ChallengeStore,
    CheckInRepository,
    DbsInfoRepository,
    IdentityStore,
    ServiceProviderProfileRepository,
    StaffAccountRepository,
)
from .domain.services import (
    CredentialHasher,
    ShiftScheduler,
    VerificationCodeGenerator,
)
from .identity import Argon2CredentialHasher
from .infrastructure.challenges import InMemoryChallengeStore, RedisChallengeStore
from .infrastructure.repositories import (
    InMemoryAuditEventRepository,
    InMemoryCertificateRepository,
    InMemoryCheckInRepository,
    InMemoryDbsInfoRepository,
    InMemoryIdentityStore,
    InMemoryServiceProviderProfileRepository,
    InMemoryShiftScheduler,
    InMemoryStaffAccountRepository,
)
from .infrastructure.services import NumericCodeGenerator

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_identity_store() -> IdentityStore:
    """Owners y empleados de service providers."""
    return InMemoryIdentityStore()


@lru_cache(maxsize=1)
def get_staff_account_repository() -> StaffAccountRepository:
    return InMemoryStaffAccountRepository()


@lru_cache(maxsize=1)
def get_service_provider_profile_repository() -> ServiceProviderProfileRepository:
    return InMemoryServiceProviderProfileRepository()


@lru_cache(maxsize=1)
def get_certificate_repository() -> CertificateRepository:
    return InMemoryCertificateRepository()


@lru_cache(maxsize=1)
def get_dbs_info_repository() -> DbsInfoRepository:
    return InMemoryDbsInfoRepository()


@lru_cache(maxsize=1)
def get_check_in_repository() -> CheckInRepository:
    return InMemoryCheckInRepository()


@lru_cache(maxsize=1)
def get_shift_scheduler() -> ShiftScheduler:
    """Vista de turnos (el scheduler real vive fuera de este core)."""
    return InMemoryShiftScheduler()


@lru_cache(maxsize=1)
def get_audit_repository() -> AuditEventRepository:
    """Auditoría append-only (también fuente del historial de check-in)."""
    return InMemoryAuditEventRepository()


# =============================================================================
# Stores y servicios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_challenge_store() -> ChallengeStore:
    """
    Store de challenges de verificación de email.

    Regla:
      - REDIS_URL configurada => RedisChallengeStore (TTL nativo, multi-proceso).
      - Sin REDIS_URL => in-memory (single-process, dev/test).
    """
    settings = get_settings()
    if not settings.redis_url.strip():
        return InMemoryChallengeStore()

    client = Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_connect_timeout=2,
        socket_timeout=5,
        health_check_interval=30,
    )
    return RedisChallengeStore(client)


@lru_cache(maxsize=1)
def get_code_generator() -> VerificationCodeGenerator:
    return NumericCodeGenerator(length=get_settings().email_code_length)


@lru_cache(maxsize=1)
def get_credential_hasher() -> CredentialHasher:
    """Hashing argon2 (parámetros por defecto de argon2-cffi)."""
    return Argon2CredentialHasher()


# =============================================================================
# Casos de uso (factory por request)
# =============================================================================


def get_resolve_actor_context_use_case() -> ResolveActorContextUseCase:
    return ResolveActorContextUseCase(identity_store=get_identity_store())


def get_register_email_use_case() -> RegisterEmailUseCase:
    """Caso de uso: alta por email + emisión del primer código."""
    settings = get_settings()
    return RegisterEmailUseCase(
        accounts=get_staff_account_repository(),
        challenges=get_challenge_store(),
        code_generator=get_code_generator(),
        code_ttl_minutes=settings.email_code_ttl_minutes,
        audit_repository=get_audit_repository(),
    )


def get_resend_verification_code_use_case() -> ResendVerificationCodeUseCase:
    settings = get_settings()
    return ResendVerificationCodeUseCase(
        accounts=get_staff_account_repository(),
        challenges=get_challenge_store(),
        code_generator=get_code_generator(),
        code_ttl_minutes=settings.email_code_ttl_minutes,
        audit_repository=get_audit_repository(),
    )


def get_verify_email_code_use_case() -> VerifyEmailCodeUseCase:
    return VerifyEmailCodeUseCase(
        accounts=get_staff_account_repository(),
        challenges=get_challenge_store(),
        audit_repository=get_audit_repository(),
    )


def get_select_account_type_use_case() -> SelectAccountTypeUseCase:
    return SelectAccountTypeUseCase(
        accounts=get_staff_account_repository(),
        allow_admin_self_registration=get_settings().allow_admin_self_registration,
        audit_repository=get_audit_repository(),
    )


def get_complete_staff_profile_use_case() -> CompleteStaffProfileUseCase:
    return CompleteStaffProfileUseCase(
        accounts=get_staff_account_repository(),
        hasher=get_credential_hasher(),
        password_min_length=get_settings().password_min_length,
        audit_repository=get_audit_repository(),
    )


def get_complete_service_provider_profile_use_case() -> (
    CompleteServiceProviderProfileUseCase
):
    """Rama provider: además crea el owner record (scoping del actor)."""
    return CompleteServiceProviderProfileUseCase(
        accounts=get_staff_account_repository(),
        identity_store=get_identity_store(),
        profiles=get_service_provider_profile_repository(),
        hasher=get_credential_hasher(),
        password_min_length=get_settings().password_min_length,
        audit_repository=get_audit_repository(),
    )


def get_get_registration_status_use_case() -> GetRegistrationStatusUseCase:
    return GetRegistrationStatusUseCase(accounts=get_staff_account_repository())


def get_submit_certificates_use_case() -> SubmitCertificatesUseCase:
    return SubmitCertificatesUseCase(
        accounts=get_staff_account_repository(),
        certificates=get_certificate_repository(),
        audit_repository=get_audit_repository(),
    )


def get_review_certificate_use_case() -> ReviewCertificateUseCase:
    return ReviewCertificateUseCase(
        accounts=get_staff_account_repository(),
        certificates=get_certificate_repository(),
        audit_repository=get_audit_repository(),
    )


def get_submit_dbs_info_use_case() -> SubmitDbsInfoUseCase:
    return SubmitDbsInfoUseCase(
        accounts=get_staff_account_repository(),
        dbs_records=get_dbs_info_repository(),
        audit_repository=get_audit_repository(),
    )


def get_check_in_to_shift_use_case() -> CheckInToShiftUseCase:
    """Caso de uso: check-in con verificación de geofence (retry por conflicto)."""
    return CheckInToShiftUseCase(
        scheduler=get_shift_scheduler(),
        check_ins=get_check_in_repository(),
        identity_store=get_identity_store(),
        audit_repository=get_audit_repository(),
        conflict_retries=get_settings().check_in_conflict_retries,
    )


def get_check_out_of_shift_use_case() -> CheckOutOfShiftUseCase:
    return CheckOutOfShiftUseCase(
        scheduler=get_shift_scheduler(),
        check_ins=get_check_in_repository(),
        audit_repository=get_audit_repository(),
    )


def get_list_check_in_attempts_use_case() -> ListCheckInAttemptsUseCase:
    return ListCheckInAttemptsUseCase(audit_repository=get_audit_repository())
