"""
===============================================================================
ACCOUNT ACCESS HELPERS (Load / Persist the onboarding aggregate)
===============================================================================

Name:
    Account Access Helpers

Business Goal:
    Centralizar la carga de StaffAccount, la emisión de challenges y el write
    versionado, para que todos los use cases de onboarding apliquen las mismas
    reglas (NOT_FOUND, CONFLICT) y no dupliquen checks.

-------------------------------------------------------------------------------
CRC CARD (Functions-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Responsibilities:
    - load_account(): (StaffAccount | None, OnboardingError | None)
    - save_transition(): compare-and-set; ConflictError => CONFLICT
    - issue_challenge(): nuevo código + expiración, reemplaza el anterior

Collaborators:
    - StaffAccountRepository, ChallengeStore, VerificationCodeGenerator
    - crosscutting.exceptions.ConflictError
    - onboarding_results
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Tuple
from uuid import UUID

from ....crosscutting.exceptions import ConflictError
from ....crosscutting.logger import logger
from ....domain.entities import EmailVerificationChallenge, StaffAccount
from ....domain.repositories import ChallengeStore, StaffAccountRepository
from ....domain.services import VerificationCodeGenerator
from .onboarding_results import OnboardingError, OnboardingErrorCode, onboarding_error


def load_account(
    accounts: StaffAccountRepository, user_id: UUID | None
) -> Tuple[StaffAccount | None, OnboardingError | None]:
    if user_id is None:
        return None, onboarding_error(
            OnboardingErrorCode.VALIDATION_ERROR, "user_id is required."
        )

    account = accounts.get_account(user_id)
    if account is None:
        return None, onboarding_error(
            OnboardingErrorCode.NOT_FOUND, "Account not found."
        )
    return account, None


def save_transition(
    accounts: StaffAccountRepository,
    account: StaffAccount,
    *,
    expected_version: int,
    operation: str,
) -> Tuple[StaffAccount | None, OnboardingError | None]:
    """
    Write versionado del agregado.

    Un conflicto NO se reintenta: el perdedor recibe CONFLICT y relee.
    """
    try:
        return accounts.save_account(account, expected_version), None
    except ConflictError as exc:
        logger.warning(
            "Onboarding write lost a concurrent race",
            extra={
                "operation": operation,
                "user_id": str(account.user_id),
                "error_id": exc.error_id,
            },
        )
        return None, onboarding_error(
            OnboardingErrorCode.CONFLICT,
            "The account was modified concurrently. Reload and retry.",
        )


def issue_challenge(
    challenges: ChallengeStore,
    code_generator: VerificationCodeGenerator,
    *,
    account: StaffAccount,
    now: datetime,
    ttl_minutes: int,
) -> EmailVerificationChallenge:
    """Emite (y persiste) un challenge nuevo; el anterior deja de valer."""
    challenge = EmailVerificationChallenge(
        email=account.email,
        user_id=account.user_id,
        code=code_generator.generate(),
        expires_at=now + timedelta(minutes=ttl_minutes),
    )
    challenges.put(challenge)
    return challenge
