"""
Tests for post-load verification
"""

from datetime import date

from db.models import AppointmentType, Client, Employee
from migration.common.quality_checks import QCReport, QCResult
from migration.tables import get_table_specs
from migration.verify.verifier import MigrationVerifier


def _seed(session, next_appt=None):
    session.add(AppointmentType(id=1, code="00001", appt_type="Individual"))
    session.add(Employee(id=1, first_name="Jane", last_name="Doe", active=1))
    session.flush()
    session.add(Client(id=1, employee_id=1, appt_type_id=1, client_name="C", next_appt=next_appt))
    session.commit()


class TestMigrationVerifier:

    def test_count_rows(self, db_session):
        _seed(db_session)

        counts = MigrationVerifier(db_session).count_rows(get_table_specs())

        assert counts == {
            "appointment_types": 1,
            "employees": 1,
            "time_periods": 0,
            "clients": 1,
            "rates": 0,
            "appointments": 0,
        }

    def test_sentinel_check_passes_with_null_dates(self, db_session):
        _seed(db_session, next_appt=None)

        result = MigrationVerifier(db_session).check_sentinel_dates()

        assert result.passed
        assert result.details["below_floor"] == 0

    def test_sentinel_check_flags_leftover_placeholder(self, db_session, caplog):
        _seed(db_session, next_appt=date(1, 1, 1))

        result = MigrationVerifier(db_session).check_sentinel_dates()

        assert not result.passed
        assert result.details["below_floor"] == 1
        assert "sentinel next_appt" in caplog.text

    def test_check_counts(self, db_session):
        _seed(db_session)

        results = MigrationVerifier(db_session).check_counts({"employees": 1, "clients": 2})

        assert [r.passed for r in results] == [True, False]
        assert results[1].details == {"db_row_count": 1, "expected": 2}

    def test_verify_report(self, db_session):
        _seed(db_session)

        report = MigrationVerifier(db_session).verify(get_table_specs(), {"clients": 1})

        assert isinstance(report, QCReport)
        assert report.passed
        assert len(report.results) == 7
        assert report.get("clients", "row_count").details["expected"] == 1
        assert report.get("employees", "row_count").details == {"db_row_count": 1}
        assert report.get("clients", "date_floor_next_appt").passed

    def test_verify_report_fails_on_count_mismatch(self, db_session):
        _seed(db_session)

        report = MigrationVerifier(db_session).verify(get_table_specs(), {"employees": 2})

        assert not report.passed
        assert report.failed_count == 1
        assert "[FAIL] employees.row_count" in report.summary()


class TestQCReport:

    def test_counts(self):
        report = QCReport()
        report.add(QCResult("row_count", "a", True, "ok"))
        report.add(QCResult("row_count", "b", False, "bad"))

        assert not report.passed
        assert report.passed_count == 1
        assert report.failed_count == 1
        assert report.get("b", "row_count").message == "bad"
        assert report.get("c", "row_count") is None
