"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (no .env, APP_ENV=test)
  - Provide in-memory adapters per test (isolation)
  - Provide deterministic fakes (clock, code generator, hasher)
  - Provide builders for onboarding accounts at each step

Notes:
  - Fixtures are function-scoped unless stated otherwise
  - Real argon2 hashing is covered in tests/unit/identity; use cases use a fast fake
"""

import os
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, List
from uuid import UUID, uuid4

import pytest

os.environ.setdefault("APP_ENV", "test")

from shiftcare.crosscutting import config as shiftcare_config  # noqa: E402

shiftcare_config.Settings.model_config["env_file"] = None

from shiftcare.domain.entities import (  # noqa: E402
    ScheduledShift,
    ShiftGeofence,
    StaffAccount,
    StaffProfile,
)
from shiftcare.domain.value_objects import (  # noqa: E402
    AccountType,
    GeoPoint,
    OnboardingStep,
)
from shiftcare.infrastructure.challenges import InMemoryChallengeStore  # noqa: E402
from shiftcare.infrastructure.repositories import (  # noqa: E402
    InMemoryAuditEventRepository,
    InMemoryCertificateRepository,
    InMemoryCheckInRepository,
    InMemoryDbsInfoRepository,
    InMemoryIdentityStore,
    InMemoryServiceProviderProfileRepository,
    InMemoryShiftScheduler,
    InMemoryStaffAccountRepository,
)

# London (Trafalgar Square) as the default shift site.
SHIFT_CENTER = GeoPoint(51.5080, -0.1281)
SHIFT_RADIUS_METERS = 200.0
FIXED_NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Deterministic fakes
# ============================================================================


class FrozenClock:
    """Reloj controlable: devuelve `now` hasta que el test lo avanza."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class SequenceCodeGenerator:
    """Devuelve códigos predecibles: 100001, 100002, ..."""

    def __init__(self, start: int = 100001):
        self._next = start
        self.issued: List[str] = []

    def generate(self) -> str:
        code = str(self._next)
        self._next += 1
        self.issued.append(code)
        return code


class FakeCredentialHasher:
    def hash(self, password: str) -> str:
        return f"hashed:{password[::-1]}"

    def verify(self, password_hash: str, password: str) -> bool:
        return password_hash == self.hash(password)


# ============================================================================
# Fixtures: fakes
# ============================================================================


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def code_generator() -> SequenceCodeGenerator:
    return SequenceCodeGenerator()


@pytest.fixture
def hasher() -> FakeCredentialHasher:
    return FakeCredentialHasher()


# ============================================================================
# Fixtures: in-memory adapters
# ============================================================================


@pytest.fixture
def accounts() -> InMemoryStaffAccountRepository:
    return InMemoryStaffAccountRepository()


@pytest.fixture
def challenges() -> InMemoryChallengeStore:
    return InMemoryChallengeStore()


@pytest.fixture
def identity_store() -> InMemoryIdentityStore:
    return InMemoryIdentityStore()


@pytest.fixture
def provider_profiles() -> InMemoryServiceProviderProfileRepository:
    return InMemoryServiceProviderProfileRepository()


@pytest.fixture
def certificates() -> InMemoryCertificateRepository:
    return InMemoryCertificateRepository()


@pytest.fixture
def dbs_records() -> InMemoryDbsInfoRepository:
    return InMemoryDbsInfoRepository()


@pytest.fixture
def check_ins() -> InMemoryCheckInRepository:
    return InMemoryCheckInRepository()


@pytest.fixture
def scheduler() -> InMemoryShiftScheduler:
    return InMemoryShiftScheduler()


@pytest.fixture
def audit_repository() -> InMemoryAuditEventRepository:
    return InMemoryAuditEventRepository()


# ============================================================================
# Builders
# ============================================================================


@pytest.fixture
def make_account(accounts) -> Callable[..., StaffAccount]:
    """
    Persiste una cuenta ya ubicada en el paso pedido.

    Usage:
        account = make_account(step=OnboardingStep.ACCOUNT_TYPE_SELECTED)
    """

    def _make(
        *,
        email: str | None = None,
        step: OnboardingStep = OnboardingStep.REGISTERED,
        account_type: AccountType | None = None,
    ) -> StaffAccount:
        user_id = uuid4()
        if account_type is None and step in (
            OnboardingStep.ACCOUNT_TYPE_SELECTED,
            OnboardingStep.PROFILE_COMPLETED,
        ):
            account_type = AccountType.STAFF

        profile = None
        if step == OnboardingStep.PROFILE_COMPLETED and account_type == AccountType.STAFF:
            profile = StaffProfile(
                user_id=user_id,
                first_name="Ada",
                last_name="Okafor",
                date_of_birth=date(1990, 5, 17),
                right_to_work_status="british_citizen",
                agreed_to_terms=True,
            )

        account = StaffAccount(
            user_id=user_id,
            email=email or f"{user_id.hex[:8]}@example.com",
            onboarding_step=step,
            account_type=account_type,
            email_verified_at=(
                FIXED_NOW if step != OnboardingStep.REGISTERED else None
            ),
            password_hash=(
                "hashed:x" if step == OnboardingStep.PROFILE_COMPLETED else None
            ),
            profile=profile,
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
        )
        return accounts.create_account(account)

    return _make


@pytest.fixture
def make_shift(scheduler) -> Callable[..., ScheduledShift]:
    def _make(
        *,
        assigned_staff_user_id: UUID | None = None,
        service_provider_id: UUID | None = None,
        with_geofence: bool = True,
        hourly_rate: Decimal = Decimal("12.50"),
    ) -> ScheduledShift:
        shift = ScheduledShift(
            id=uuid4(),
            service_provider_id=service_provider_id or uuid4(),
            assigned_staff_user_id=assigned_staff_user_id,
            geofence=(
                ShiftGeofence(center=SHIFT_CENTER, radius_meters=SHIFT_RADIUS_METERS)
                if with_geofence
                else None
            ),
            hourly_rate=hourly_rate,
        )
        scheduler.add_shift(shift)
        return shift

    return _make
