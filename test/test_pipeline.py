"""
End-to-end pipeline tests: legacy source -> JSON -> destination -> verify
"""

from pathlib import Path

import pytest
from sqlalchemy import select

from db.models import AppointmentType, Client, Employee
from migration.common.exceptions import RowCountMismatchError
from migration.common.quality_checks import count_table
from migration.orchestrator import MigrationPipeline, MigrationResult, PipelineState


def _pipeline(source, session, export_dir, **kwargs):
    kwargs.setdefault("check_counts", False)
    return MigrationPipeline(source, session, export_dir=export_dir, **kwargs)


class TestMigrationPipeline:

    def test_end_to_end_scenario(self, seeded_source, db_session, export_dir):
        pipeline = _pipeline(seeded_source, db_session, export_dir)

        result = pipeline.run()

        assert pipeline.state == PipelineState.DONE
        assert result.state == PipelineState.DONE
        assert result.succeeded
        assert count_table(db_session, AppointmentType) == 3
        assert count_table(db_session, Employee) == 2
        assert count_table(db_session, Client) == 1

        client = db_session.get(Client, 1)
        assert client.next_appt is None
        assert client.hashed_id == ""
        assert client.type == "Individual"

        actives = db_session.execute(select(Employee.id, Employee.active).order_by(Employee.id)).all()
        assert [tuple(row) for row in actives] == [(1, 1), (2, 0)]

        sentinel = result.qc_report.get("clients", "date_floor_next_appt")
        assert sentinel.passed
        assert sentinel.details["below_floor"] == 0

        clients = next(r for r in result.load_results if r.table_name == "clients")
        assert clients.dates_nulled == 1

    def test_writes_one_export_per_table(self, seeded_source, db_session, export_dir):
        _pipeline(seeded_source, db_session, export_dir).run()

        names = sorted(p.name for p in Path(export_dir).iterdir())
        assert names == [
            "appointment.json", "appointmenttype.json", "client.json",
            "employee.json", "rate.json", "timeperiod.json",
        ]

    def test_rerun_gives_identical_counts(self, seeded_source, db_session, export_dir):
        first = _pipeline(seeded_source, db_session, export_dir).run()
        second = _pipeline(seeded_source, db_session, export_dir).run()

        first_counts = {r.table_name: r.inserted for r in first.load_results}
        second_counts = {r.table_name: r.inserted for r in second.load_results}
        assert first_counts == second_counts
        assert count_table(db_session, Employee) == 2

    def test_count_mismatch_aborts(self, seeded_source, db_session, export_dir):
        pipeline = _pipeline(seeded_source, db_session, export_dir, check_counts=True)

        with pytest.raises(RowCountMismatchError):
            pipeline.run()

        assert pipeline.state == PipelineState.ABORTED
        assert count_table(db_session, Employee) == 0

    def test_count_mismatch_can_be_tolerated(self, seeded_source, db_session, export_dir):
        pipeline = _pipeline(
            seeded_source, db_session, export_dir,
            check_counts=True, abort_on_count_mismatch=False,
        )

        result = pipeline.run()

        assert result.state == PipelineState.DONE
        assert all(not r.count_matched for r in result.extract_results if r.row_count)

    def test_summary(self, seeded_source, db_session, export_dir):
        result = _pipeline(seeded_source, db_session, export_dir).run()

        summary = result.summary()

        assert "MIGRATION SUMMARY - DONE" in summary
        assert "employees" in summary
        assert "Invalid dates converted to null: 1" in summary
        assert result.total_inserted == 6
        assert result.total_failed == 0
        assert result.errors == []


class TestMigrationResult:

    def test_empty_result_has_not_succeeded(self):
        result = MigrationResult()
        assert result.state == PipelineState.IDLE
        assert not result.succeeded
