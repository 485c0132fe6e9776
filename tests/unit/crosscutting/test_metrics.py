"""
Name: Metrics Tests

Responsibilities:
  - Counters live in the private registry
  - Exposition output is Prometheus text
"""

import pytest

from shiftcare.crosscutting.metrics import (
    get_metrics_response,
    get_registry,
    record_check_in,
    record_check_in_conflict_retry,
    record_onboarding_event,
)

pytestmark = pytest.mark.unit


def _sample(name: str, labels: dict | None = None) -> float:
    return get_registry().get_sample_value(name, labels or {}) or 0.0


def test_onboarding_counter_increments_by_label():
    labels = {"operation": "register_email", "outcome": "CONFLICT"}
    before = _sample("shiftcare_onboarding_events_total", labels)

    record_onboarding_event("register_email", "CONFLICT")

    assert _sample("shiftcare_onboarding_events_total", labels) == before + 1


def test_check_in_counters():
    before = _sample("shiftcare_check_ins_total", {"outcome": "verified"})
    retries_before = _sample("shiftcare_check_in_conflict_retries_total")

    record_check_in("verified")
    record_check_in_conflict_retry()

    assert _sample("shiftcare_check_ins_total", {"outcome": "verified"}) == before + 1
    assert _sample("shiftcare_check_in_conflict_retries_total") == retries_before + 1


def test_metrics_response_is_prometheus_text():
    record_check_in("unverified")

    body, content_type = get_metrics_response()

    assert content_type.startswith("text/plain")
    assert b"shiftcare_check_ins_total" in body
