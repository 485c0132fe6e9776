"""
Name: Shift Check-Out + Attempt History Tests

Responsibilities:
  - Check-out only after a verified check-in, exactly once
  - Totals (hours, pay) rounded to 2 decimals
  - Attempt history projected from the audit trail
"""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from shiftcare.application.usecases import (
    CheckInErrorCode,
    CheckInToShiftInput,
    CheckInToShiftUseCase,
    CheckOutOfShiftInput,
    CheckOutOfShiftUseCase,
    ListCheckInAttemptsInput,
    ListCheckInAttemptsUseCase,
)
from shiftcare.crosscutting.exceptions import ConflictError
from shiftcare.domain.audit import ACTION_CHECK_IN_ATTEMPT, ACTION_CHECK_OUT, AuditEvent
from shiftcare.domain.geofence import REASON_WITHIN

pytestmark = pytest.mark.unit


@pytest.fixture
def staff_id():
    return uuid4()


@pytest.fixture
def shift(make_shift, staff_id):
    return make_shift(assigned_staff_user_id=staff_id)


@pytest.fixture
def check_in(scheduler, check_ins, identity_store, audit_repository, clock):
    return CheckInToShiftUseCase(
        scheduler,
        check_ins,
        identity_store,
        audit_repository=audit_repository,
        clock=clock,
    )


@pytest.fixture
def check_out(scheduler, check_ins, audit_repository, clock):
    return CheckOutOfShiftUseCase(
        scheduler, check_ins, audit_repository=audit_repository, clock=clock
    )


@pytest.fixture
def history(audit_repository):
    return ListCheckInAttemptsUseCase(audit_repository)


def _at_center(shift, staff_id, **overrides) -> CheckInToShiftInput:
    center = shift.geofence.center
    data = dict(
        shift_id=shift.id,
        staff_user_id=staff_id,
        latitude=center.latitude,
        longitude=center.longitude,
    )
    data.update(overrides)
    return CheckInToShiftInput(**data)


def _far_away(shift, staff_id) -> CheckInToShiftInput:
    return _at_center(shift, staff_id, latitude=shift.geofence.center.latitude + 1.0)


# =============================================================================
# CheckOutOfShift
# =============================================================================


class TestCheckOut:
    def test_computes_totals(self, check_in, check_out, shift, staff_id, clock, audit_repository):
        started = clock.now
        check_in.execute(_at_center(shift, staff_id))
        clock.advance(hours=8, minutes=15)

        result = check_out.execute(
            CheckOutOfShiftInput(shift_id=shift.id, staff_user_id=staff_id)
        )

        assert result.error is None
        assert result.check_in.checked_out_at == started + timedelta(hours=8, minutes=15)
        assert result.check_in.total_hours == Decimal("8.25")
        assert result.check_in.total_pay == Decimal("103.13")
        assert result.check_in.version == 2

        event = audit_repository.get_all_events()[-1]
        assert event.action == ACTION_CHECK_OUT
        assert event.metadata["total_pay"] == "103.13"
        assert event.metadata["hourly_rate"] == "12.50"

    def test_explicit_checked_out_at(self, check_in, check_out, shift, staff_id, clock):
        check_in.execute(_at_center(shift, staff_id))

        result = check_out.execute(
            CheckOutOfShiftInput(
                shift_id=shift.id,
                staff_user_id=staff_id,
                checked_out_at=clock.now + timedelta(minutes=20),
            )
        )

        assert result.check_in.total_hours == Decimal("0.33")
        assert result.check_in.total_pay == Decimal("4.13")

    def test_naive_check_in_time_is_treated_as_utc(
        self, check_in, check_out, shift, staff_id, clock
    ):
        naive_start = (clock.now - timedelta(hours=2)).replace(tzinfo=None)

        recorded = check_in.execute(_at_center(shift, staff_id, timestamp=naive_start))
        result = check_out.execute(
            CheckOutOfShiftInput(shift_id=shift.id, staff_user_id=staff_id)
        )

        assert recorded.check_in.timestamp == clock.now - timedelta(hours=2)
        assert result.error is None
        assert result.check_in.total_hours == Decimal("2.00")
        assert result.check_in.total_pay == Decimal("25.00")

    def test_naive_check_out_time_is_treated_as_utc(
        self, check_in, check_out, shift, staff_id, clock
    ):
        check_in.execute(_at_center(shift, staff_id))

        result = check_out.execute(
            CheckOutOfShiftInput(
                shift_id=shift.id,
                staff_user_id=staff_id,
                checked_out_at=(clock.now + timedelta(hours=1)).replace(tzinfo=None),
            )
        )

        assert result.error is None
        assert result.check_in.checked_out_at == clock.now + timedelta(hours=1)
        assert result.check_in.total_hours == Decimal("1.00")

    def test_requires_check_in(self, check_out, shift, staff_id):
        result = check_out.execute(
            CheckOutOfShiftInput(shift_id=shift.id, staff_user_id=staff_id)
        )

        assert result.error.code == CheckInErrorCode.ILLEGAL_STATE_TRANSITION

    def test_requires_verified_check_in(self, check_in, check_out, shift, staff_id, check_ins):
        check_in.execute(_far_away(shift, staff_id))

        result = check_out.execute(
            CheckOutOfShiftInput(shift_id=shift.id, staff_user_id=staff_id)
        )

        assert result.error.code == CheckInErrorCode.ILLEGAL_STATE_TRANSITION
        assert check_ins.get_check_in(shift.id, staff_id).checked_out_at is None

    def test_second_check_out_is_illegal(self, check_in, check_out, shift, staff_id, clock):
        check_in.execute(_at_center(shift, staff_id))
        clock.advance(hours=1)
        first = check_out.execute(CheckOutOfShiftInput(shift_id=shift.id, staff_user_id=staff_id))
        clock.advance(hours=1)

        second = check_out.execute(
            CheckOutOfShiftInput(shift_id=shift.id, staff_user_id=staff_id)
        )

        assert second.error.code == CheckInErrorCode.ILLEGAL_STATE_TRANSITION
        assert first.check_in.total_hours == Decimal("1.00")

    def test_only_assigned_staff(self, check_out, shift):
        result = check_out.execute(
            CheckOutOfShiftInput(shift_id=shift.id, staff_user_id=uuid4())
        )

        assert result.error.code == CheckInErrorCode.FORBIDDEN

    def test_concurrent_write_is_reported(
        self, check_in, scheduler, check_ins, shift, staff_id, clock
    ):
        check_in.execute(_at_center(shift, staff_id))

        class RacingRepository:
            def get_check_in(self, shift_id, staff_user_id):
                return check_ins.get_check_in(shift_id, staff_user_id)

            def save_check_in(self, check_in, expected_version):
                raise ConflictError("Check-in was modified concurrently")

        use_case = CheckOutOfShiftUseCase(scheduler, RacingRepository(), clock=clock)

        result = use_case.execute(
            CheckOutOfShiftInput(shift_id=shift.id, staff_user_id=staff_id)
        )

        assert result.error.code == CheckInErrorCode.CONFLICT


# =============================================================================
# ListCheckInAttempts
# =============================================================================


class TestAttemptHistory:
    def test_lists_every_attempt_newest_first(self, check_in, history, shift, staff_id, clock):
        check_in.execute(_far_away(shift, staff_id))
        clock.advance(minutes=1)
        check_in.execute(_at_center(shift, staff_id, longitude=None))
        clock.advance(minutes=1)
        check_in.execute(_at_center(shift, staff_id))

        result = history.execute(ListCheckInAttemptsInput(shift_id=shift.id))

        assert result.error is None
        newest, invalid, outside = result.attempts
        assert newest.reason == REASON_WITHIN
        assert invalid.reason == "VALIDATION_ERROR"
        assert outside.reason.startswith("outside_geofence:")
        assert [a.verified for a in result.attempts] == [True, False, False]
        assert result.attempts[0].occurred_at > result.attempts[1].occurred_at
        assert all(a.staff_user_id == staff_id for a in result.attempts)

    def test_filters_by_staff_and_limit(self, check_in, history, shift, staff_id, clock):
        check_in.execute(_at_center(shift, uuid4()))
        for _ in range(3):
            clock.advance(minutes=1)
            check_in.execute(_far_away(shift, staff_id))

        mine = history.execute(
            ListCheckInAttemptsInput(shift_id=shift.id, staff_user_id=staff_id, limit=2)
        )
        everyone = history.execute(ListCheckInAttemptsInput(shift_id=shift.id))

        assert len(mine.attempts) == 2
        assert all(a.staff_user_id == staff_id for a in mine.attempts)
        assert len(everyone.attempts) == 4

    def test_staff_filter_is_not_crowded_out_by_other_staff(
        self, check_in, history, audit_repository, shift, staff_id, clock
    ):
        check_in.execute(_at_center(shift, staff_id))
        other_staff = uuid4()
        for minute in range(1, 502):
            audit_repository.record_event(
                AuditEvent(
                    id=uuid4(),
                    actor=f"user:{other_staff}",
                    action=ACTION_CHECK_IN_ATTEMPT,
                    target_id=shift.id,
                    metadata={"staff_user_id": str(other_staff), "verified": False},
                    created_at=clock.now + timedelta(minutes=minute),
                )
            )

        result = history.execute(
            ListCheckInAttemptsInput(shift_id=shift.id, staff_user_id=staff_id)
        )

        assert len(result.attempts) == 1
        assert result.attempts[0].staff_user_id == staff_id
        assert result.attempts[0].verified is True

    def test_other_shifts_are_excluded(self, check_in, history, make_shift, shift, staff_id):
        other = make_shift(assigned_staff_user_id=staff_id)
        check_in.execute(_at_center(other, staff_id))

        result = history.execute(ListCheckInAttemptsInput(shift_id=shift.id))

        assert result.attempts == []

    def test_requires_shift_id(self, history):
        result = history.execute(ListCheckInAttemptsInput(shift_id=None))

        assert result.error.code == CheckInErrorCode.VALIDATION_ERROR
