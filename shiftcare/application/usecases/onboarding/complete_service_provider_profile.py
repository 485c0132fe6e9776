"""
===============================================================================
USE CASE: Complete Service Provider Profile
===============================================================================

Name:
    Complete Service Provider Profile Use Case

Business Goal:
    Rama hermana de CompleteStaffProfile: cierra el onboarding de una
    organización y crea el registro ProviderOwner que luego consume el
    Actor Context Resolver.

Rules:
    - Estado/rama antes que inputs (ILLEGAL_STATE_TRANSITION).
    - main_service_type es un catálogo cerrado (INVALID_ENUM_VALUE).
    - max_client_capacity entero >= 1.
    - El write versionado de la cuenta va primero: si pierde la carrera no se
      crea owner ni perfil.

Collaborators:
    - StaffAccountRepository, IdentityStore, ServiceProviderProfileRepository
    - CredentialHasher
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from ....audit import emit_audit_event
from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_onboarding_event
from ....domain.audit import ACTION_PROVIDER_PROFILE_COMPLETED
from ....domain.entities import ServiceProviderProfile
from ....domain.onboarding_policy import can_complete_profile
from ....domain.repositories import (
    AuditEventRepository,
    IdentityStore,
    ServiceProviderProfileRepository,
    StaffAccountRepository,
)
from ....domain.services import CredentialHasher
from ....domain.value_objects import (
    AccountType,
    InvalidEnumValueError,
    MainServiceType,
    coerce_flag,
    parse_enum,
)
from ...clock import Clock, system_clock
from .account_access import load_account, save_transition
from .onboarding_results import (
    OnboardingErrorCode,
    ServiceProviderProfileResult,
    onboarding_error,
    outcome_of,
)

_OPERATION = "complete_service_provider_profile"

_REQUIRED_TEXT_FIELDS = (
    "first_name",
    "last_name",
    "organization_name",
    "cqc_provider_number",
    "primary_address",
)


@dataclass(frozen=True)
class CompleteServiceProviderProfileInput:
    user_id: UUID | None
    first_name: str
    last_name: str
    organization_name: str
    cqc_provider_number: str
    primary_address: str
    main_service_type: Any
    max_client_capacity: Any
    password: str
    agreed_to_terms: Any
    mobile: str | None = None
    website: str | None = None
    vat_tax_id: str | None = None
    brand_logo_url: str | None = None


class CompleteServiceProviderProfileUseCase:
    def __init__(
        self,
        accounts: StaffAccountRepository,
        identity_store: IdentityStore,
        profiles: ServiceProviderProfileRepository,
        hasher: CredentialHasher,
        *,
        password_min_length: int = 8,
        audit_repository: AuditEventRepository | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._accounts = accounts
        self._identity = identity_store
        self._profiles = profiles
        self._hasher = hasher
        self._password_min_length = password_min_length
        self._audit = audit_repository
        self._clock = clock

    def execute(
        self, input_data: CompleteServiceProviderProfileInput
    ) -> ServiceProviderProfileResult:
        result = self._complete(input_data)
        record_onboarding_event(_OPERATION, outcome_of(result.error))
        return result

    def _complete(
        self, input_data: CompleteServiceProviderProfileInput
    ) -> ServiceProviderProfileResult:
        account, error = load_account(self._accounts, input_data.user_id)
        if error is not None:
            return ServiceProviderProfileResult(error=error)

        if not can_complete_profile(account, AccountType.SERVICE_PROVIDER):
            return ServiceProviderProfileResult(
                error=onboarding_error(
                    OnboardingErrorCode.ILLEGAL_STATE_TRANSITION,
                    "Service provider profile requires the service_provider "
                    "account type and an incomplete profile.",
                )
            )

        cleaned = {
            name: (getattr(input_data, name) or "").strip()
            for name in _REQUIRED_TEXT_FIELDS
        }
        missing = [name for name, value in cleaned.items() if not value]
        if missing:
            return self._validation_error(f"Missing required fields: {', '.join(missing)}")

        try:
            main_service_type = parse_enum(MainServiceType, input_data.main_service_type)
        except InvalidEnumValueError as exc:
            return ServiceProviderProfileResult(
                error=onboarding_error(OnboardingErrorCode.INVALID_ENUM_VALUE, str(exc))
            )

        capacity = _parse_capacity(input_data.max_client_capacity)
        if capacity is None:
            return self._validation_error("max_client_capacity must be an integer >= 1")

        password = input_data.password
        if not isinstance(password, str) or len(password) < self._password_min_length:
            return self._validation_error(
                f"Password must be at least {self._password_min_length} characters."
            )

        if not coerce_flag(input_data.agreed_to_terms):
            return self._validation_error("Terms and conditions must be accepted.")

        now = self._clock()
        expected_version = account.version
        account.complete_profile(
            password_hash=self._hasher.hash(password), at=now
        )
        saved, error = save_transition(
            self._accounts,
            account,
            expected_version=expected_version,
            operation=_OPERATION,
        )
        if error is not None:
            return ServiceProviderProfileResult(error=error)

        owner = self._identity.create_provider_owner(saved.user_id)
        profile = self._profiles.save_profile(
            ServiceProviderProfile(
                user_id=saved.user_id,
                service_provider_id=owner.id,
                first_name=cleaned["first_name"],
                last_name=cleaned["last_name"],
                organization_name=cleaned["organization_name"],
                cqc_provider_number=cleaned["cqc_provider_number"],
                primary_address=cleaned["primary_address"],
                main_service_type=main_service_type,
                max_client_capacity=capacity,
                agreed_to_terms=True,
                mobile=_clean_optional(input_data.mobile),
                website=_clean_optional(input_data.website),
                vat_tax_id=_clean_optional(input_data.vat_tax_id),
                brand_logo_url=_clean_optional(input_data.brand_logo_url),
            )
        )

        emit_audit_event(
            self._audit,
            action=ACTION_PROVIDER_PROFILE_COMPLETED,
            actor_user_id=saved.user_id,
            target_id=owner.id,
            metadata={"main_service_type": main_service_type.value},
            occurred_at=now,
        )
        logger.info(
            "Service provider profile completed",
            extra={"user_id": str(saved.user_id), "service_provider_id": str(owner.id)},
        )
        return ServiceProviderProfileResult(account=saved, profile=profile)

    @staticmethod
    def _validation_error(message: str) -> ServiceProviderProfileResult:
        return ServiceProviderProfileResult(
            error=onboarding_error(OnboardingErrorCode.VALIDATION_ERROR, message)
        )


def _parse_capacity(raw: Any) -> int | None:
    """Entero >= 1; acepta strings numéricos (formularios)."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw.isdigit():
            return None
        raw = int(raw)
    if not isinstance(raw, int) or raw < 1:
        return None
    return raw


def _clean_optional(value: str | None) -> str | None:
    cleaned = (value or "").strip()
    return cleaned or None
