"""
Name: Onboarding Policy Tests

Responsibilities:
  - Validate the step ordering of the onboarding state machine
  - Validate branch/compliance preconditions and next-step hints
"""

from uuid import uuid4

import pytest

from shiftcare.domain.entities import StaffAccount
from shiftcare.domain.onboarding_policy import (
    NEXT_COMPLETE_ADMIN_PROFILE,
    NEXT_COMPLETE_PROVIDER_PROFILE,
    NEXT_COMPLETE_STAFF_PROFILE,
    NEXT_NONE,
    NEXT_SELECT_ACCOUNT_TYPE,
    NEXT_SUBMIT_COMPLIANCE,
    NEXT_VERIFY_EMAIL,
    can_advance,
    can_complete_profile,
    can_submit_compliance,
    next_step_for,
)
from shiftcare.domain.value_objects import AccountType, OnboardingStep

pytestmark = pytest.mark.unit

STEPS = list(OnboardingStep)


def _account(step: OnboardingStep, account_type: AccountType | None = None) -> StaffAccount:
    return StaffAccount(
        user_id=uuid4(),
        email="carer@example.com",
        onboarding_step=step,
        account_type=account_type,
    )


class TestCanAdvance:
    @pytest.mark.parametrize("index", range(len(STEPS) - 1))
    def test_only_next_step_is_allowed(self, index):
        current = STEPS[index]
        for target_index, target in enumerate(STEPS):
            assert can_advance(current, target) is (target_index == index + 1)

    def test_profile_completed_is_terminal(self):
        for target in STEPS:
            assert can_advance(OnboardingStep.PROFILE_COMPLETED, target) is False


class TestCanCompleteProfile:
    def test_requires_matching_branch(self):
        account = _account(OnboardingStep.ACCOUNT_TYPE_SELECTED, AccountType.STAFF)
        assert can_complete_profile(account, AccountType.STAFF) is True
        assert can_complete_profile(account, AccountType.SERVICE_PROVIDER) is False

    @pytest.mark.parametrize(
        "step",
        [
            OnboardingStep.REGISTERED,
            OnboardingStep.EMAIL_VERIFIED,
            OnboardingStep.PROFILE_COMPLETED,
        ],
    )
    def test_rejects_other_steps(self, step):
        account = _account(step, AccountType.STAFF)
        assert can_complete_profile(account, AccountType.STAFF) is False


class TestCanSubmitCompliance:
    def test_completed_staff_only(self):
        assert can_submit_compliance(
            _account(OnboardingStep.PROFILE_COMPLETED, AccountType.STAFF)
        )
        assert not can_submit_compliance(
            _account(OnboardingStep.PROFILE_COMPLETED, AccountType.SERVICE_PROVIDER)
        )
        assert not can_submit_compliance(
            _account(OnboardingStep.ACCOUNT_TYPE_SELECTED, AccountType.STAFF)
        )


@pytest.mark.parametrize(
    "step,account_type,expected",
    [
        (OnboardingStep.REGISTERED, None, NEXT_VERIFY_EMAIL),
        (OnboardingStep.EMAIL_VERIFIED, None, NEXT_SELECT_ACCOUNT_TYPE),
        (OnboardingStep.ACCOUNT_TYPE_SELECTED, AccountType.STAFF, NEXT_COMPLETE_STAFF_PROFILE),
        (
            OnboardingStep.ACCOUNT_TYPE_SELECTED,
            AccountType.SERVICE_PROVIDER,
            NEXT_COMPLETE_PROVIDER_PROFILE,
        ),
        (OnboardingStep.ACCOUNT_TYPE_SELECTED, AccountType.ADMIN, NEXT_COMPLETE_ADMIN_PROFILE),
        (OnboardingStep.PROFILE_COMPLETED, AccountType.STAFF, NEXT_SUBMIT_COMPLIANCE),
        (OnboardingStep.PROFILE_COMPLETED, AccountType.SERVICE_PROVIDER, NEXT_NONE),
    ],
)
def test_next_step_for(step, account_type, expected):
    assert next_step_for(_account(step, account_type)) == expected
