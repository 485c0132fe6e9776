"""
Name: In-Memory Repository Tests

Responsibilities:
  - Optimistic versioning (compare-and-set) for accounts and check-ins
  - Defensive copies (callers cannot mutate stored state)
  - Upsert semantics for certificates/DBS
  - Audit listing filters and ordering
"""

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from shiftcare.crosscutting.exceptions import ConflictError
from shiftcare.domain.audit import AuditEvent
from shiftcare.domain.entities import (
    DbsInfo,
    Employee,
    GeofenceCheckIn,
    StaffAccount,
    StaffCertificate,
)
from shiftcare.domain.value_objects import (
    CertificateStatus,
    CertificateType,
    OnboardingStep,
)

pytestmark = pytest.mark.unit

T0 = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)


class TestStaffAccountRepository:
    def test_create_rejects_duplicate_email_case_insensitive(self, accounts):
        accounts.create_account(StaffAccount(user_id=uuid4(), email="ada@example.com"))

        with pytest.raises(ConflictError):
            accounts.create_account(
                StaffAccount(user_id=uuid4(), email="ADA@example.com ")
            )

    def test_lookup_by_email(self, accounts):
        created = accounts.create_account(
            StaffAccount(user_id=uuid4(), email="ada@example.com")
        )
        assert accounts.get_account_by_email("Ada@Example.com").user_id == created.user_id
        assert accounts.get_account_by_email("other@example.com") is None

    def test_save_bumps_version(self, accounts):
        account = accounts.create_account(
            StaffAccount(user_id=uuid4(), email="ada@example.com")
        )
        account.mark_email_verified(at=T0)

        saved = accounts.save_account(account, expected_version=0)

        assert saved.version == 1
        assert accounts.get_account(account.user_id).onboarding_step == (
            OnboardingStep.EMAIL_VERIFIED
        )

    def test_stale_version_conflicts(self, accounts):
        account = accounts.create_account(
            StaffAccount(user_id=uuid4(), email="ada@example.com")
        )
        accounts.save_account(account, expected_version=0)

        with pytest.raises(ConflictError):
            accounts.save_account(account, expected_version=0)

    def test_delete_only_untouched_version(self, accounts):
        account = accounts.create_account(
            StaffAccount(user_id=uuid4(), email="ada@example.com")
        )
        accounts.save_account(account, expected_version=0)

        assert accounts.delete_account(account.user_id, expected_version=0) is False
        assert accounts.delete_account(account.user_id, expected_version=1) is True
        assert accounts.get_account(account.user_id) is None
        assert accounts.get_account_by_email("ada@example.com") is None
        assert accounts.delete_account(account.user_id, expected_version=1) is False

    def test_returned_objects_are_copies(self, accounts):
        account = accounts.create_account(
            StaffAccount(user_id=uuid4(), email="ada@example.com")
        )
        loaded = accounts.get_account(account.user_id)
        loaded.onboarding_step = OnboardingStep.PROFILE_COMPLETED

        assert accounts.get_account(account.user_id).onboarding_step == (
            OnboardingStep.REGISTERED
        )


class TestIdentityStore:
    def test_create_provider_owner_is_idempotent(self, identity_store):
        user_id = uuid4()
        first = identity_store.create_provider_owner(user_id)
        second = identity_store.create_provider_owner(user_id)

        assert first == second
        assert identity_store.find_provider_owner_by_user_id(user_id) == first

    def test_employee_can_be_relinked_and_removed(self, identity_store):
        user_id = uuid4()
        identity_store.add_employee(Employee(id=uuid4(), user_id=user_id, service_provider_id=uuid4()))
        new_provider = uuid4()
        identity_store.add_employee(
            Employee(id=uuid4(), user_id=user_id, service_provider_id=new_provider)
        )
        assert identity_store.find_employee_by_user_id(user_id).service_provider_id == new_provider

        identity_store.remove_employee(user_id)
        assert identity_store.find_employee_by_user_id(user_id) is None


class TestComplianceRepositories:
    def test_certificate_upsert_keeps_one_row_per_type(self, certificates):
        user_id = uuid4()
        certificates.upsert_certificates(
            [StaffCertificate(user_id=user_id, certificate_type=CertificateType.FIRST_AID)]
        )
        certificates.upsert_certificates(
            [
                StaffCertificate(
                    user_id=user_id,
                    certificate_type=CertificateType.FIRST_AID,
                    expiry_date=date(2027, 1, 1),
                    verified_status=CertificateStatus.VERIFIED,
                ),
                StaffCertificate(user_id=user_id, certificate_type=CertificateType.COSHH),
            ]
        )

        stored = certificates.list_certificates(user_id)

        assert [c.certificate_type for c in stored] == [
            CertificateType.COSHH,
            CertificateType.FIRST_AID,
        ]
        first_aid = certificates.get_certificate(user_id, CertificateType.FIRST_AID)
        assert first_aid.expiry_date == date(2027, 1, 1)
        assert certificates.list_certificates(uuid4()) == []

    def test_dbs_upsert_replaces(self, dbs_records):
        user_id = uuid4()
        base = DbsInfo(
            user_id=user_id,
            certificate_number="001234567890",
            surname_on_certificate="Okafor",
            dob_on_certificate=date(1990, 5, 17),
            certificate_print_date=date(2024, 2, 1),
        )
        dbs_records.upsert_dbs_info(base)
        dbs_records.upsert_dbs_info(
            DbsInfo(
                user_id=user_id,
                certificate_number="009999999999",
                surname_on_certificate="Okafor",
                dob_on_certificate=date(1990, 5, 17),
                certificate_print_date=date(2025, 2, 1),
                is_registered_on_update_service=True,
            )
        )

        stored = dbs_records.get_dbs_info(user_id)
        assert stored.certificate_number == "009999999999"
        assert stored.is_registered_on_update_service is True


class TestCheckInRepository:
    @staticmethod
    def _check_in(**overrides) -> GeofenceCheckIn:
        data = dict(
            shift_id=uuid4(),
            staff_user_id=uuid4(),
            timestamp=T0,
            verified=False,
            reason="no_location_reported",
        )
        data.update(overrides)
        return GeofenceCheckIn(**data)

    def test_first_write_requires_version_zero(self, check_ins):
        check_in = self._check_in()

        saved = check_ins.save_check_in(check_in, expected_version=0)

        assert saved.version == 1
        with pytest.raises(ConflictError):
            check_ins.save_check_in(check_in, expected_version=0)

    def test_write_against_missing_record_with_version_conflicts(self, check_ins):
        with pytest.raises(ConflictError):
            check_ins.save_check_in(self._check_in(), expected_version=3)

    def test_compare_and_set_update(self, check_ins):
        check_in = self._check_in()
        check_ins.save_check_in(check_in, expected_version=0)
        current = check_ins.get_check_in(check_in.shift_id, check_in.staff_user_id)
        current.verified = True

        updated = check_ins.save_check_in(current, expected_version=current.version)

        assert updated.version == 2
        assert check_ins.get_check_in(check_in.shift_id, check_in.staff_user_id).verified


class TestAuditEventRepository:
    @staticmethod
    def _event(action: str, *, target_id=None, actor="system", minutes: int = 0):
        return AuditEvent(
            id=uuid4(),
            actor=actor,
            action=action,
            target_id=target_id,
            created_at=T0 + timedelta(minutes=minutes),
        )

    def test_filters_and_orders_newest_first(self, audit_repository):
        shift_id = uuid4()
        audit_repository.record_event(self._event("shift.check_in.attempt", target_id=shift_id))
        audit_repository.record_event(
            self._event("shift.check_in.attempt", target_id=shift_id, minutes=5)
        )
        audit_repository.record_event(self._event("shift.check_out", target_id=shift_id, minutes=9))
        audit_repository.record_event(
            self._event("shift.check_in.attempt", target_id=uuid4(), minutes=7)
        )

        events = audit_repository.list_events(
            target_id=shift_id, action_prefix="shift.check_in"
        )

        assert [e.created_at for e in events] == [
            T0 + timedelta(minutes=5),
            T0,
        ]

    def test_equal_timestamps_keep_reverse_insertion_order(self, audit_repository):
        first = self._event("a")
        second = self._event("a")
        audit_repository.record_event(first)
        audit_repository.record_event(second)

        assert [e.id for e in audit_repository.list_events()] == [second.id, first.id]

    def test_actor_window_and_pagination(self, audit_repository):
        for minute in range(5):
            audit_repository.record_event(self._event("x", actor="user:1", minutes=minute))
        audit_repository.record_event(self._event("x", actor="user:2", minutes=2))

        events = audit_repository.list_events(
            actor_id="user:1",
            start_at=T0 + timedelta(minutes=1),
            end_at=T0 + timedelta(minutes=3),
            limit=2,
            offset=1,
        )

        assert [e.created_at for e in events] == [
            T0 + timedelta(minutes=2),
            T0 + timedelta(minutes=1),
        ]
