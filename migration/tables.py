# migration/tables.py
"""
Table registry - which legacy table feeds which destination table, in what
order, and through which transform.

TABLE_ORDER is the load order (parents before children); clearing runs in
reverse.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from db import models, models_legacy
from migration.transform import mappings


@dataclass(frozen=True)
class TableSpec:
    """Migration settings for one table."""
    name: str                      # destination table name
    source_table: str              # legacy table name
    export_file: str               # artifact file name under the export dir
    model: Any                     # destination ORM model
    source_model: Any              # legacy ORM model
    transform: Callable[[Dict[str, Any]], Dict[str, Any]]
    expected_rows: Optional[int] = None
    depends_on: Tuple[str, ...] = ()
    # (legacy column, destination column) pairs where sentinel dates become null
    sentinel_fields: Tuple[Tuple[str, str], ...] = ()

    @property
    def columns(self) -> List[str]:
        """Legacy column names, in declaration order."""
        return [c.name for c in self.source_model.__table__.columns]


# Row counts of the legacy production database at cut-over
EXPECTED_ROW_COUNTS: Dict[str, int] = {
    "appointment_types": 30,
    "employees": 83,
    "time_periods": 444,
    "clients": 9289,
    "rates": 1912,
    "appointments": 134179,
}


TABLE_ORDER: List[TableSpec] = [
    TableSpec(
        name="appointment_types",
        source_table="AppointmentType",
        export_file="appointmenttype.json",
        model=models.AppointmentType,
        source_model=models_legacy.LegacyAppointmentType,
        transform=mappings.transform_appointment_type,
        expected_rows=EXPECTED_ROW_COUNTS["appointment_types"],
    ),
    TableSpec(
        name="employees",
        source_table="Employee",
        export_file="employee.json",
        model=models.Employee,
        source_model=models_legacy.LegacyEmployee,
        transform=mappings.transform_employee,
        expected_rows=EXPECTED_ROW_COUNTS["employees"],
    ),
    TableSpec(
        name="time_periods",
        source_table="TimePeriod",
        export_file="timeperiod.json",
        model=models.TimePeriod,
        source_model=models_legacy.LegacyTimePeriod,
        transform=mappings.transform_time_period,
        expected_rows=EXPECTED_ROW_COUNTS["time_periods"],
    ),
    TableSpec(
        name="clients",
        source_table="Client",
        export_file="client.json",
        model=models.Client,
        source_model=models_legacy.LegacyClient,
        transform=mappings.transform_client,
        expected_rows=EXPECTED_ROW_COUNTS["clients"],
        depends_on=("employees", "appointment_types"),
        sentinel_fields=(("Next_Appt", "next_appt"),),
    ),
    TableSpec(
        name="rates",
        source_table="Rate",
        export_file="rate.json",
        model=models.Rate,
        source_model=models_legacy.LegacyRate,
        transform=mappings.transform_rate,
        expected_rows=EXPECTED_ROW_COUNTS["rates"],
        depends_on=("employees", "appointment_types"),
    ),
    TableSpec(
        name="appointments",
        source_table="Appointment",
        export_file="appointment.json",
        model=models.Appointment,
        source_model=models_legacy.LegacyAppointment,
        transform=mappings.transform_appointment,
        expected_rows=EXPECTED_ROW_COUNTS["appointments"],
        depends_on=("clients", "employees", "rates", "appointment_types"),
    ),
]

LOG_TABLE = TableSpec(
    name="logs",
    source_table="Logs",
    export_file="logs.json",
    model=models.Log,
    source_model=models_legacy.LegacyLog,
    transform=mappings.transform_log,
)


def get_table_specs(include_logs: bool = False, check_counts: bool = True) -> List[TableSpec]:
    """
    Return table specs in dependency order.

    Args:
        include_logs: Append the Logs table
        check_counts: Keep expected row counts (False drops them, e.g. for a
            copy of the database that is not the production snapshot)
    """
    specs = list(TABLE_ORDER)
    if include_logs:
        specs.append(LOG_TABLE)
    if not check_counts:
        specs = [replace(s, expected_rows=None) for s in specs]
    return specs


def get_spec(name: str) -> TableSpec:
    """Look up a TableSpec by destination table name."""
    for spec in TABLE_ORDER + [LOG_TABLE]:
        if spec.name == name:
            return spec
    raise KeyError(f"Unknown table: {name}")
