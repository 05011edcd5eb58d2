# db/models.py
"""
Destination Models - PostgreSQL schema consumed by the employee records API.
Schema: public

Column names here are the contract the API and reports depend on; the legacy
to destination mapping lives in migration/transform/mappings.py.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# SQLite only auto-increments INTEGER PRIMARY KEY
BigIntKey = BigInteger().with_variant(Integer, "sqlite")


class AppointmentType(Base):
    """Lookup of billable session categories."""

    __tablename__ = "appointment_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50))
    appt_type = Column(String(100))
    description = Column(Text)
    type_id_for_rate = Column(Integer)

    def __repr__(self):
        return f"<AppointmentType(id={self.id}, code={self.code}, type={self.appt_type})>"


class Employee(Base):
    """Staff / clinician record."""

    __tablename__ = "employees"
    __table_args__ = (
        Index("idx_employees_email", "email"),
        Index("idx_employees_last_name", "last_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255))
    email = Column(String(255))
    active = Column(SmallInteger)
    start_date = Column(Date)
    employee_sp_id = Column(Integer, nullable=False, default=0, server_default="0")
    last_name = Column(String(255))
    first_name = Column(String(255))
    pay_type = Column(String(100))
    gusto_id = Column(String(100))

    def __repr__(self):
        return f"<Employee(id={self.id}, name={self.first_name} {self.last_name})>"


class TimePeriod(Base):
    """Payroll period."""

    __tablename__ = "time_periods"

    id = Column(BigIntKey, primary_key=True, autoincrement=True)
    year = Column(Integer, nullable=False)
    pay_period = Column(Integer, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<TimePeriod(id={self.id}, year={self.year}, period={self.pay_period})>"


class Client(Base):
    """Patient / customer record."""

    __tablename__ = "clients"
    __table_args__ = (
        Index("idx_clients_employee_id", "employee_id"),
        Index("idx_clients_appt_type_id", "appt_type_id"),
        Index("idx_clients_client_name", "client_name"),
        Index("idx_clients_email", "email"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="RESTRICT"))
    client_name = Column(String(255))
    tx_plan = Column(Boolean)
    npp = Column(Boolean)
    consent = Column(Boolean)
    loaded = Column(String(255))
    email = Column(String(255))
    created = Column(DateTime)
    updated = Column(DateTime)
    next_appt = Column(Date, doc="Null when the legacy row carried the 0001-01-01 placeholder")
    active = Column(Boolean)
    client_sp_id = Column(Integer, nullable=False, default=0, server_default="0")
    hashed_id = Column(String(50), nullable=False, default="", server_default="")
    employee_sp_id = Column(Integer, default=0)
    appt_type_id = Column(
        Integer, ForeignKey("appointment_types.id", ondelete="RESTRICT"), nullable=False
    )
    type = Column(String(100), default="Individual")

    def __repr__(self):
        return f"<Client(id={self.id}, name={self.client_name})>"


class Rate(Base):
    """Compensation rate for an employee / appointment type."""

    __tablename__ = "rates"
    __table_args__ = (
        Index("idx_rates_employee_id", "employee_id"),
        Index("idx_rates_appt_type_id", "appt_type_id"),
        Index("idx_rates_start_date", "start_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    rate = Column(Float)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="RESTRICT"))
    start_date = Column(Date, nullable=False)
    active = Column(SmallInteger)
    rate_type = Column(String(255))
    end_date = Column(Date)
    appt_type_id = Column(Integer, ForeignKey("appointment_types.id", ondelete="RESTRICT"))
    gusto_id = Column(BigInteger)

    def __repr__(self):
        return f"<Rate(id={self.id}, employee_id={self.employee_id}, rate={self.rate})>"


class Appointment(Base):
    """A billable session instance."""

    __tablename__ = "appointments"
    __table_args__ = (
        Index("idx_appointments_multi", "client_id", "employee_id", "appt_type_id", "appt_date"),
        Index("idx_appointments_employee_date", "employee_id", "appt_date"),
        Index("idx_appointments_date", "appt_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="RESTRICT"), nullable=False)
    rate_id = Column(Integer, ForeignKey("rates.id", ondelete="RESTRICT"))
    appt_sp_id = Column(BigInteger)
    appt_type_id = Column(Integer, ForeignKey("appointment_types.id", ondelete="RESTRICT"))
    appt_date = Column(DateTime, nullable=False)
    units = Column(Float)
    clinician_amount = Column(Float)
    client_payment_status = Column(String(255))
    duration = Column(Float, nullable=False)
    has_progress_note = Column(Boolean, nullable=False)
    created = Column(DateTime, nullable=False)
    updated = Column(DateTime, nullable=False)
    client_charge = Column(Float)
    flagged = Column(Boolean)
    client_payment_status_desc = Column(String(255))
    vacation_hours = Column(Float)
    bonus = Column(Float)
    correction_payment = Column(Float)
    personal_note = Column(String(255))
    reimbursement = Column(Float)
    comments = Column(String(255))

    def __repr__(self):
        return f"<Appointment(id={self.id}, client_id={self.client_id}, date={self.appt_date})>"


class Log(Base):
    """Application log rows (seventh table, migrated only on request)."""

    __tablename__ = "logs"

    id = Column(BigIntKey, primary_key=True, autoincrement=True)
    log_time = Column(DateTime, nullable=False)
    type = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Log(id={self.id}, type={self.type}, time={self.log_time})>"
