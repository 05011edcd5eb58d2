"""
Unit tests for value normalization, table mappings and record validation
"""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from migration.common.exceptions import RecordValidationError
from migration.transform.mappings import (
    transform_appointment,
    transform_client,
    transform_employee,
    transform_rate,
)
from migration.transform.utils import (
    clean_string,
    is_sentinel_date,
    parse_big_int,
    parse_date,
    parse_day,
    to_bool,
    to_flag,
    to_float,
)
from migration.transform.validator import missing_fields, validate_record
from factories import make_appointment, make_client


class TestSentinelDates:
    """The 0001-01-01 placeholder must never survive as a date"""

    @pytest.mark.parametrize("value", [
        "0001-01-01",
        "0001-01-01T00:00:00",
        "0001-01-01 00:00:00.0000000",
        "Jan  1 0001",
        "Jan  1 0001 12:00AM",
        "Jan 1 0001",
        "Jan 01 0001",
        "1-01-01",
        "01/01/0001",
        date(1, 1, 1),
        datetime(1, 1, 1),
    ])
    def test_sentinel_becomes_none(self, value):
        assert is_sentinel_date(value)
        assert parse_date(value) is None
        assert parse_day(value) is None

    def test_real_dates_are_not_sentinels(self):
        # "2021-01-01" contains "1-01-01" but does not start with it
        assert not is_sentinel_date("2021-01-01")
        assert not is_sentinel_date(date(2021, 1, 1))
        assert not is_sentinel_date(None)

    @pytest.mark.parametrize("value", ["1899-12-31", datetime(1753, 1, 1), date(1899, 6, 1)])
    def test_dates_before_1900_become_none(self, value):
        assert parse_date(value) is None

    def test_1900_floor_is_inclusive(self):
        assert parse_date("1900-01-01") == datetime(1900, 1, 1)


class TestParseDate:
    """Valid dates round-trip exactly"""

    @pytest.mark.parametrize("value", [
        datetime(1900, 1, 1),
        datetime(1999, 12, 31, 23, 59, 59),
        datetime(2024, 2, 29, 8, 15),
        datetime(2087, 7, 4, 0, 0, 1),
    ])
    def test_datetime_round_trip(self, value):
        assert parse_date(value) == value
        assert parse_date(value.isoformat()) == value
        assert parse_date(value.strftime("%Y-%m-%d %H:%M:%S")) == value

    @pytest.mark.parametrize("value", [date(1950, 6, 15), date(2024, 2, 29), date(2099, 12, 31)])
    def test_calendar_date_round_trip(self, value):
        assert parse_day(value.isoformat()) == value
        assert parse_day(value) == value

    def test_sql_server_fractional_seconds_are_dropped(self):
        assert parse_date("2024-03-05 10:15:00.1230000") == datetime(2024, 3, 5, 10, 15)
        assert parse_date("2024-03-05T10:15:00.123") == datetime(2024, 3, 5, 10, 15)

    def test_other_renderings_fall_back_to_pandas(self):
        assert parse_date("Mar 5 2024") == datetime(2024, 3, 5)

    @pytest.mark.parametrize("value", [None, "", "NULL", "  ", float("nan")])
    def test_missing_values(self, value):
        assert parse_date(value) is None

    def test_unparseable_is_none_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_date("not a date") is None
        assert "Unparseable date" in caplog.text


class TestScalarConversions:
    """Booleans, identifiers, strings and numbers"""

    @pytest.mark.parametrize("value,expected", [
        (1, True), (0, False), (True, True), (False, False),
        ("1", True), ("0", False), ("true", True), ("False", False),
        (None, None), ("NULL", None),
    ])
    def test_to_bool(self, value, expected):
        assert to_bool(value) is expected

    def test_to_flag(self):
        assert to_flag(True) == 1
        assert to_flag("0") == 0
        assert to_flag(None) == 0

    def test_big_int_beyond_int64(self):
        assert parse_big_int("9223372036854775808") == 2 ** 63
        assert parse_big_int("123456789012345678901234567890") == 123456789012345678901234567890

    @pytest.mark.parametrize("value,expected", [
        (42, 42), ("42", 42), (" 7 ", 7), (12.0, 12), ("12.0", 12), (Decimal("5"), 5),
        (None, None), ("", None),
    ])
    def test_big_int_values(self, value, expected):
        assert parse_big_int(value) == expected

    def test_big_int_parse_failure_degrades_to_none(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_big_int("ABC-123") is None
            assert parse_big_int(1.5) is None
        assert "using null" in caplog.text

    @pytest.mark.parametrize("value", ["inf", "Infinity", "-Infinity", "NaN", "sNaN", float("inf")])
    def test_big_int_non_finite_degrades_to_none(self, value, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_big_int(value) is None
        assert "using null" in caplog.text

    def test_clean_string(self):
        assert clean_string("  Jane ") == "Jane"
        assert clean_string("NULL") is None
        assert clean_string(None, default="") == ""
        assert clean_string(123) == "123"

    def test_to_float(self):
        assert to_float(Decimal("85.5000")) == 85.5
        assert to_float("12.25") == 12.25
        assert to_float(None) is None
        assert to_float("n/a") is None


class TestMappings:
    """Legacy column names map onto destination column names"""

    def test_client_with_sentinel_next_appt(self):
        row = transform_client(make_client(7, Next_Appt="0001-01-01"))

        assert row["id"] == 7
        assert row["next_appt"] is None
        assert row["hashed_id"] == ""
        assert row["client_sp_id"] == 0
        assert row["type"] == "Individual"
        assert row["tx_plan"] is True
        assert row["consent"] is False

    def test_client_with_real_next_appt(self):
        row = transform_client(make_client(7, Next_Appt="2024-04-01T00:00:00"))
        assert row["next_appt"] == date(2024, 4, 1)

    def test_employee_active_is_smallint(self):
        row = transform_employee({
            "ID": 3, "Name": "A B", "Email": "a@example.com", "Active": False,
            "Start_Date": "2019-05-01", "EmployeeSP_ID": None, "LastName": "B",
            "FirstName": "A", "PayType": "Salary", "GustoId": None,
        })
        assert row["active"] == 0
        assert row["employee_sp_id"] == 0
        assert row["start_date"] == date(2019, 5, 1)

    def test_rate_gusto_id_is_big_int(self):
        row = transform_rate({
            "ID": 1, "Rate": 85.5, "EmployeeID": 1, "Start_Date": "2022-01-01",
            "Active": 1, "RateType": "Fixed", "End_Date": None, "Appt_TypeID": 1,
            "GustoID": "18446744073709551616",
        })
        assert row["gusto_id"] == 2 ** 64
        assert row["active"] == 1
        assert row["end_date"] is None

    def test_appointment(self):
        row = transform_appointment(make_appointment(5))

        assert row["appt_sp_id"] == 9000000000000000001
        assert row["created"] == datetime(2024, 3, 5, 11, 0)
        assert row["duration"] == 50.0
        assert row["has_progress_note"] is True
        assert row["comments"] is None

    def test_appointment_null_progress_note_is_false(self):
        row = transform_appointment(make_appointment(6, HasProgressNote=None))
        assert row["has_progress_note"] is False
        assert missing_fields("appointments", row) == []


class TestValidator:
    """NOT NULL destination fields are checked before insert"""

    def test_valid_appointment_passes(self):
        validate_record("appointments", transform_appointment(make_appointment(1)), 1)

    @pytest.mark.parametrize("legacy_field,field", [
        ("Duration", "duration"),
        ("Appt_Date", "appt_date"),
        ("Created", "created"),
        ("Updated", "updated"),
    ])
    def test_missing_appointment_field(self, legacy_field, field):
        row = transform_appointment(make_appointment(9, **{legacy_field: None}))

        with pytest.raises(RecordValidationError) as exc_info:
            validate_record("appointments", row, 9)

        assert exc_info.value.field == field
        assert exc_info.value.record_id == 9
        assert exc_info.value.table_name == "appointments"

    def test_sentinel_created_date_fails_validation(self):
        row = transform_appointment(make_appointment(4, Created="0001-01-01T00:00:00"))
        assert missing_fields("appointments", row) == ["created"]

    def test_unknown_table_has_no_requirements(self):
        assert missing_fields("unknown", {}) == []
