"""
Pytest configuration and fixtures

Both databases are in-memory SQLite with foreign keys enforced, so orphan
inserts fail the way they do on PostgreSQL.
"""

from datetime import date, datetime

import pytest

from db.db_utils import get_engine, get_session
from db.models import Base
from db.models_legacy import (
    LegacyAppointmentType,
    LegacyBase,
    LegacyClient,
    LegacyEmployee,
)


@pytest.fixture
def destination_engine():
    """Destination schema in a fresh in-memory database"""
    engine = get_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(destination_engine):
    """Session on the destination database"""
    session = get_session(destination_engine)
    yield session
    session.close()


@pytest.fixture
def source_engine():
    """Empty legacy schema"""
    engine = get_engine("sqlite://")
    LegacyBase.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def seeded_source(source_engine):
    """
    Legacy source with 3 appointment types, 2 employees (one inactive) and
    1 client whose Next_Appt is the 0001-01-01 placeholder.
    """
    session = get_session(source_engine)
    session.add_all([
        LegacyAppointmentType(ID=1, Code="00001", Appt_Type="Individual",
                              Description="Individual session", TypeIdForRate=1),
        LegacyAppointmentType(ID=2, Code="00002", Appt_Type="Couples",
                              Description="Couples session", TypeIdForRate=2),
        LegacyAppointmentType(ID=3, Code="00003", Appt_Type="Intake",
                              Description=None, TypeIdForRate=1),
        LegacyEmployee(ID=1, Name="Jane Doe", Email="jane@example.com", Active=True,
                       Start_Date=date(2020, 3, 1), EmployeeSP_ID=101,
                       LastName="Doe", FirstName="Jane", PayType="Hourly", GustoId="g-1"),
        LegacyEmployee(ID=2, Name="John Roe", Email="john@example.com", Active=False,
                       Start_Date=date(2018, 7, 15), EmployeeSP_ID=None,
                       LastName="Roe", FirstName="John", PayType="Pct", GustoId=None),
        LegacyClient(ID=1, EmployeeID=1, Client_Name="Client One", TxPlan=True, NPP=True,
                     Consent=False, Loaded="Yes", Email="client@example.com",
                     Created=datetime(2021, 1, 5, 9, 30), Updated=datetime(2021, 2, 1, 12, 0),
                     Next_Appt=date(1, 1, 1), Active=True, ClientSP_ID=501,
                     HashedID=None, EmployeeSP_ID=101, Appt_TypeID=1, Type=None),
    ])
    session.commit()
    session.close()
    return source_engine


@pytest.fixture
def export_dir(tmp_path):
    """Temporary export directory"""
    return str(tmp_path / "exports")

