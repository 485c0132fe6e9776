"""
===============================================================================
COMPLIANCE ACCESS HELPERS
===============================================================================

Business Goal:
    Precondición única para certificados y DBS: la cuenta existe, es de staff
    y completó el perfil. Retorna (StaffAccount | None, ComplianceError | None).

Collaborators:
    - StaffAccountRepository
    - domain.onboarding_policy.can_submit_compliance
===============================================================================
"""

from __future__ import annotations

from typing import Tuple
from uuid import UUID

from ....domain.entities import StaffAccount
from ....domain.onboarding_policy import can_submit_compliance
from ....domain.repositories import StaffAccountRepository
from .compliance_results import ComplianceError, ComplianceErrorCode, compliance_error


def resolve_account_for_compliance(
    accounts: StaffAccountRepository, user_id: UUID | None
) -> Tuple[StaffAccount | None, ComplianceError | None]:
    if user_id is None:
        return None, compliance_error(
            ComplianceErrorCode.VALIDATION_ERROR, "user_id is required."
        )

    account = accounts.get_account(user_id)
    if account is None:
        return None, compliance_error(ComplianceErrorCode.NOT_FOUND, "Account not found.")

    if not can_submit_compliance(account):
        return None, compliance_error(
            ComplianceErrorCode.ILLEGAL_STATE_TRANSITION,
            "Compliance documents require a completed staff profile.",
        )
    return account, None
