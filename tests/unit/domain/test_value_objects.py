"""
Name: Value Object Tests

Responsibilities:
  - GeoPoint range/shape validation
  - Closed catalog parsing (enums, role tags)
  - Date parsing and boolean flag coercion
"""

import math
from datetime import date, datetime, timezone

import pytest

from shiftcare.domain.value_objects import (
    AccountType,
    CertificateType,
    GeoPoint,
    InvalidEnumValueError,
    RoleTag,
    coerce_flag,
    is_valid_email,
    normalize_email,
    parse_date,
    parse_enum,
    parse_role_tags,
)

pytestmark = pytest.mark.unit


class TestGeoPoint:
    def test_accepts_boundaries(self):
        assert GeoPoint(90, 180).latitude == 90
        assert GeoPoint(-90, -180).longitude == -180

    @pytest.mark.parametrize(
        "latitude,longitude",
        [(90.0001, 0), (-91, 0), (0, 180.5), (0, -181)],
    )
    def test_rejects_out_of_range(self, latitude, longitude):
        with pytest.raises(ValueError):
            GeoPoint(latitude, longitude)

    @pytest.mark.parametrize("bad", [True, "51.5", None, math.nan])
    def test_rejects_non_numbers(self, bad):
        with pytest.raises(ValueError, match="must be a number"):
            GeoPoint(bad, 0.0)

    def test_is_immutable(self):
        point = GeoPoint(1.0, 2.0)
        with pytest.raises(AttributeError):
            point.latitude = 3.0  # type: ignore[misc]


class TestParseEnum:
    def test_is_case_insensitive_and_trimmed(self):
        assert parse_enum(AccountType, "  Service_Provider ") == AccountType.SERVICE_PROVIDER

    def test_passes_members_through(self):
        assert parse_enum(CertificateType, CertificateType.COSHH) is CertificateType.COSHH

    def test_unknown_value_lists_allowed(self):
        with pytest.raises(InvalidEnumValueError) as exc_info:
            parse_enum(AccountType, "manager")

        err = exc_info.value
        assert err.enum_name == "AccountType"
        assert err.value == "manager"
        assert "staff" in err.allowed
        assert "manager" in str(err)

    def test_non_string_is_invalid(self):
        with pytest.raises(InvalidEnumValueError):
            parse_enum(AccountType, 3)


class TestParseRoleTags:
    def test_none_is_empty_set(self):
        assert parse_role_tags(None) == frozenset()

    def test_comma_separated_string(self):
        assert parse_role_tags("Nurse, hca_carer,") == frozenset(
            {RoleTag.NURSE, RoleTag.HCA_CARER}
        )

    def test_list_dedupes(self):
        assert parse_role_tags(["nurse", "NURSE"]) == frozenset({RoleTag.NURSE})

    def test_unknown_role_raises(self):
        with pytest.raises(InvalidEnumValueError):
            parse_role_tags(["nurse", "doctor"])

    def test_unsupported_container_raises(self):
        with pytest.raises(InvalidEnumValueError):
            parse_role_tags(42)


class TestParseDate:
    def test_accepts_iso_date_string(self):
        assert parse_date("2027-01-31", field_name="expiry") == date(2027, 1, 31)

    def test_accepts_iso_datetime_with_z(self):
        assert parse_date("2027-01-31T10:00:00Z", field_name="expiry") == date(2027, 1, 31)

    def test_accepts_date_and_datetime(self):
        assert parse_date(date(2020, 1, 1), field_name="x") == date(2020, 1, 1)
        assert parse_date(
            datetime(2020, 1, 1, 23, 0, tzinfo=timezone.utc), field_name="x"
        ) == date(2020, 1, 1)

    @pytest.mark.parametrize("bad", ["31/01/2027", "", "   ", None, 20270131])
    def test_rejects_malformed(self, bad):
        with pytest.raises(ValueError, match="expiry must be a valid ISO date"):
            parse_date(bad, field_name="expiry")


class TestCoerceFlag:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, True),
            (False, False),
            (1, True),
            (1.0, True),
            (0, False),
            (2, False),
            ("true", True),
            (" TRUE ", True),
            ("1", True),
            ("yes", True),
            ("Yes", True),
            ("no", False),
            ("maybe", False),
            ("", False),
            (None, False),
            ([], False),
            ({"a": 1}, False),
        ],
    )
    def test_coercion_table(self, value, expected):
        assert coerce_flag(value) is expected


class TestEmail:
    def test_normalize_trims_and_lowercases(self):
        assert normalize_email("  Ada@Example.COM ") == "ada@example.com"
        assert normalize_email(None) == ""

    @pytest.mark.parametrize(
        "email,valid",
        [
            ("ada@example.com", True),
            ("ada@example", False),
            ("ada example@x.com", False),
            ("@example.com", False),
        ],
    )
    def test_shape_check(self, email, valid):
        assert is_valid_email(email) is valid
