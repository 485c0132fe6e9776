"""
Name: Audit Emission Tests

Responsibilities:
  - Events are built with a stable actor/action/target shape
  - Secrets are dropped from metadata, non-JSON values stringified
  - Persistence failures never break the caller
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock
from uuid import uuid4

import pytest

from shiftcare.audit import actor_for_user, build_audit_event, emit_audit_event
from shiftcare.domain.value_objects import AccountType
from shiftcare.infrastructure.repositories import InMemoryAuditEventRepository

pytestmark = pytest.mark.unit


def test_actor_format():
    user_id = uuid4()
    assert actor_for_user(user_id) == f"user:{user_id}"
    assert actor_for_user(None) == "system"


def test_emits_sanitized_event():
    repository = InMemoryAuditEventRepository()
    user_id = uuid4()
    occurred_at = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)

    emit_audit_event(
        repository,
        action="onboarding.email.verified",
        actor_user_id=user_id,
        target_id=user_id,
        metadata={
            "code": "123456",
            "password": "hunter22",
            "total_pay": Decimal("10.50"),
            "staff_user_id": user_id,
            "verified": True,
            "roles": ("nurse",),
        },
        occurred_at=occurred_at,
    )

    [event] = repository.get_all_events()
    assert event.actor == f"user:{user_id}"
    assert event.target_id == user_id
    assert event.created_at == occurred_at
    assert event.metadata == {
        "total_pay": "10.50",
        "staff_user_id": str(user_id),
        "verified": True,
        "roles": ["nurse"],
    }


def test_explicit_actor_wins():
    repository = InMemoryAuditEventRepository()

    emit_audit_event(repository, action="x", actor="system", actor_user_id=uuid4())

    assert repository.get_all_events()[0].actor == "system"


def test_none_repository_is_noop():
    emit_audit_event(None, action="x")


def test_repository_failure_is_swallowed_and_logged(caplog):
    repository = Mock()
    repository.record_event.side_effect = RuntimeError("db down")

    with caplog.at_level("WARNING", logger="shiftcare"):
        emit_audit_event(repository, action="shift.check_out")

    repository.record_event.assert_called_once()
    assert any("auditoría" in r.getMessage() for r in caplog.records)


def test_build_event_flattens_enums_and_nested_secrets():
    event = build_audit_event(
        action="onboarding.account_type.selected",
        actor="system",
        metadata={
            "account_type": AccountType.STAFF,
            "profile": {"first_name": "Ada", "PASSWORD": "x"},
        },
    )

    assert event.metadata == {
        "account_type": "staff",
        "profile": {"first_name": "Ada"},
    }
    assert event.created_at is not None
