"""
===============================================================================
USE CASE: Get Registration Status
===============================================================================

Business Goal:
    Query de solo lectura: en qué paso está la cuenta y cuál es el siguiente.

Collaborators:
    - StaffAccountRepository
    - domain.onboarding_policy.next_step_for
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ....domain.onboarding_policy import next_step_for
from ....domain.repositories import StaffAccountRepository
from .account_access import load_account
from .onboarding_results import RegistrationStatus, RegistrationStatusResult


@dataclass(frozen=True)
class GetRegistrationStatusInput:
    user_id: UUID | None


class GetRegistrationStatusUseCase:
    def __init__(self, accounts: StaffAccountRepository) -> None:
        self._accounts = accounts

    def execute(self, input_data: GetRegistrationStatusInput) -> RegistrationStatusResult:
        account, error = load_account(self._accounts, input_data.user_id)
        if error is not None:
            return RegistrationStatusResult(error=error)

        return RegistrationStatusResult(
            status=RegistrationStatus(
                user_id=account.user_id,
                email=account.email,
                onboarding_step=account.onboarding_step,
                account_type=account.account_type,
                email_verified=account.is_email_verified,
                profile_created=account.is_profile_completed,
                next_step=next_step_for(account),
            )
        )
