"""Onboarding use cases (staff identity state machine)."""

from .complete_service_provider_profile import (
    CompleteServiceProviderProfileInput,
    CompleteServiceProviderProfileUseCase,
)
from .complete_staff_profile import (
    CompleteStaffProfileInput,
    CompleteStaffProfileUseCase,
)
from .get_registration_status import (
    GetRegistrationStatusInput,
    GetRegistrationStatusUseCase,
)
from .onboarding_results import (
    OnboardingError,
    OnboardingErrorCode,
    OnboardingResult,
    RegistrationResult,
    RegistrationStatus,
    RegistrationStatusResult,
    ServiceProviderProfileResult,
)
from .register_email import RegisterEmailInput, RegisterEmailUseCase
from .resend_verification_code import (
    ResendVerificationCodeInput,
    ResendVerificationCodeUseCase,
)
from .select_account_type import SelectAccountTypeInput, SelectAccountTypeUseCase
from .verify_email_code import VerifyEmailCodeInput, VerifyEmailCodeUseCase

__all__ = [
    # Use cases
    "RegisterEmailUseCase",
    "ResendVerificationCodeUseCase",
    "VerifyEmailCodeUseCase",
    "SelectAccountTypeUseCase",
    "CompleteStaffProfileUseCase",
    "CompleteServiceProviderProfileUseCase",
    "GetRegistrationStatusUseCase",
    # Inputs
    "RegisterEmailInput",
    "ResendVerificationCodeInput",
    "VerifyEmailCodeInput",
    "SelectAccountTypeInput",
    "CompleteStaffProfileInput",
    "CompleteServiceProviderProfileInput",
    "GetRegistrationStatusInput",
    # Results
    "OnboardingError",
    "OnboardingErrorCode",
    "OnboardingResult",
    "RegistrationResult",
    "RegistrationStatus",
    "RegistrationStatusResult",
    "ServiceProviderProfileResult",
]
