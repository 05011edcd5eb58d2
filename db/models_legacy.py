"""
Legacy Models - the SQL Server tables the data is migrated from.
Column names keep the legacy casing; nothing here is renamed.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

LegacyBase = declarative_base()


class LegacyAppointmentType(LegacyBase):
    __tablename__ = "AppointmentType"

    ID = Column(Integer, primary_key=True, autoincrement=False)
    Code = Column(String(50))
    Appt_Type = Column(String(100))
    Description = Column(Text)
    TypeIdForRate = Column(Integer)


class LegacyEmployee(LegacyBase):
    __tablename__ = "Employee"

    ID = Column(Integer, primary_key=True, autoincrement=False)
    Name = Column(String(255))
    Email = Column(String(255))
    Active = Column(Boolean)
    Start_Date = Column(Date)
    EmployeeSP_ID = Column(Integer)
    LastName = Column(String(255))
    FirstName = Column(String(255))
    PayType = Column(String(100))
    GustoId = Column(String(100))


class LegacyTimePeriod(LegacyBase):
    __tablename__ = "TimePeriod"

    ID = Column(BigInteger, primary_key=True, autoincrement=False)
    Year = Column(Integer)
    PayPeriod = Column(Integer)
    StartDate = Column(DateTime)
    EndDate = Column(DateTime)


class LegacyClient(LegacyBase):
    """Next_Appt holds 0001-01-01 when no appointment is booked."""

    __tablename__ = "Client"

    ID = Column(Integer, primary_key=True, autoincrement=False)
    EmployeeID = Column(Integer)
    Client_Name = Column(String(255))
    TxPlan = Column(Boolean)
    NPP = Column(Boolean)
    Consent = Column(Boolean)
    Loaded = Column(String(255))
    Email = Column(String(255))
    Created = Column(DateTime)
    Updated = Column(DateTime)
    Next_Appt = Column(Date)
    Active = Column(Boolean)
    ClientSP_ID = Column(Integer)
    HashedID = Column(String(50))
    EmployeeSP_ID = Column(Integer)
    Appt_TypeID = Column(Integer)
    Type = Column(String(100))


class LegacyRate(LegacyBase):
    __tablename__ = "Rate"

    ID = Column(Integer, primary_key=True, autoincrement=False)
    Rate = Column(Numeric(18, 4))
    EmployeeID = Column(Integer)
    Start_Date = Column(Date)
    Active = Column(Boolean)
    RateType = Column(String(255))
    End_Date = Column(Date)
    Appt_TypeID = Column(Integer)
    GustoID = Column(String(50), doc="Numeric id stored as text; may exceed int64")


class LegacyAppointment(LegacyBase):
    __tablename__ = "Appointment"

    ID = Column(Integer, primary_key=True, autoincrement=False)
    ClientID = Column(Integer)
    EmployeeID = Column(Integer)
    RateID = Column(Integer)
    ApptSP_ID = Column(String(50))
    Appt_TypeID = Column(Integer)
    Appt_Date = Column(DateTime)
    Units = Column(Float)
    Clinician_Amount = Column(Numeric(18, 2))
    Client_Payment_Status = Column(String(255))
    Duration = Column(Float)
    HasProgressNote = Column(Boolean)
    Created = Column(DateTime)
    Updated = Column(DateTime)
    Client_Charge = Column(Numeric(18, 2))
    Flagged = Column(Boolean)
    Client_Payment_Status_Desc = Column(String(255))
    Vacation_Hours = Column(Float)
    Bonus = Column(Numeric(18, 2))
    Correction_Payment = Column(Numeric(18, 2))
    Personal_Note = Column(String(255))
    Reimbursement = Column(Numeric(18, 2))
    Comments = Column(String(255))


class LegacyLog(LegacyBase):
    __tablename__ = "Logs"

    ID = Column(BigInteger, primary_key=True, autoincrement=False)
    LogTime = Column(DateTime)
    Type = Column(String(100))
    Description = Column(Text)
