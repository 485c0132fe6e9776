"""
Use Cases Layer (Business Operations)

This package exposes entry points for business logic, organized by feature/domain.

Structure
---------
usecases/
├── actor_context/  # Provider scoping (owner / employee resolution)
├── onboarding/     # Register, verify email, account type, profile completion
├── compliance/     # Training certificates and DBS
└── geofence/       # Shift check-in / check-out and attempt history

Usage
-----
Import from subpackages for clarity:

    from shiftcare.application.usecases.onboarding import RegisterEmailUseCase
    from shiftcare.application.usecases.geofence import CheckInToShiftUseCase

Or use the barrel exports from this module:

    from shiftcare.application.usecases import RegisterEmailUseCase
"""

# Actor context
from .actor_context import (
    ActorContextError,
    ActorContextErrorCode,
    ActorContextResult,
    ResolveActorContextInput,
    ResolveActorContextUseCase,
    resolve_actor_context,
)

# Compliance
from .compliance import (
    CertificateResult,
    CertificatesResult,
    ComplianceError,
    ComplianceErrorCode,
    DbsInfoResult,
    ReviewCertificateInput,
    ReviewCertificateUseCase,
    SubmitCertificatesInput,
    SubmitCertificatesUseCase,
    SubmitDbsInfoInput,
    SubmitDbsInfoUseCase,
)

# Geofence
from .geofence import (
    CheckInAttemptsResult,
    CheckInError,
    CheckInErrorCode,
    CheckInResult,
    CheckInToShiftInput,
    CheckInToShiftUseCase,
    CheckOutOfShiftInput,
    CheckOutOfShiftUseCase,
    CheckOutResult,
    ListCheckInAttemptsInput,
    ListCheckInAttemptsUseCase,
)

# Onboarding
from .onboarding import (
    CompleteServiceProviderProfileInput,
    CompleteServiceProviderProfileUseCase,
    CompleteStaffProfileInput,
    CompleteStaffProfileUseCase,
    GetRegistrationStatusInput,
    GetRegistrationStatusUseCase,
    OnboardingError,
    OnboardingErrorCode,
    OnboardingResult,
    RegisterEmailInput,
    RegisterEmailUseCase,
    RegistrationResult,
    RegistrationStatus,
    RegistrationStatusResult,
    ResendVerificationCodeInput,
    ResendVerificationCodeUseCase,
    SelectAccountTypeInput,
    SelectAccountTypeUseCase,
    ServiceProviderProfileResult,
    VerifyEmailCodeInput,
    VerifyEmailCodeUseCase,
)

__all__ = [
    # Actor context
    "ActorContextError",
    "ActorContextErrorCode",
    "ActorContextResult",
    "ResolveActorContextInput",
    "ResolveActorContextUseCase",
    "resolve_actor_context",
    # Onboarding
    "RegisterEmailInput",
    "RegisterEmailUseCase",
    "ResendVerificationCodeInput",
    "ResendVerificationCodeUseCase",
    "VerifyEmailCodeInput",
    "VerifyEmailCodeUseCase",
    "SelectAccountTypeInput",
    "SelectAccountTypeUseCase",
    "CompleteStaffProfileInput",
    "CompleteStaffProfileUseCase",
    "CompleteServiceProviderProfileInput",
    "CompleteServiceProviderProfileUseCase",
    "GetRegistrationStatusInput",
    "GetRegistrationStatusUseCase",
    "OnboardingError",
    "OnboardingErrorCode",
    "OnboardingResult",
    "RegistrationResult",
    "RegistrationStatus",
    "RegistrationStatusResult",
    "ServiceProviderProfileResult",
    # Compliance
    "SubmitCertificatesInput",
    "SubmitCertificatesUseCase",
    "ReviewCertificateInput",
    "ReviewCertificateUseCase",
    "SubmitDbsInfoInput",
    "SubmitDbsInfoUseCase",
    "CertificateResult",
    "CertificatesResult",
    "ComplianceError",
    "ComplianceErrorCode",
    "DbsInfoResult",
    # Geofence
    "CheckInToShiftInput",
    "CheckInToShiftUseCase",
    "CheckOutOfShiftInput",
    "CheckOutOfShiftUseCase",
    "ListCheckInAttemptsInput",
    "ListCheckInAttemptsUseCase",
    "CheckInAttemptsResult",
    "CheckInError",
    "CheckInErrorCode",
    "CheckInResult",
    "CheckOutResult",
]
