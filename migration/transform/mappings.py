# migration/transform/mappings.py
"""
Legacy -> destination column mappings, one function per table.

Each transform takes one exported record (legacy column names) and returns
a dict keyed by destination column names. All value handling goes through
migration.transform.utils.
"""

from typing import Any, Dict

from migration.transform.utils import (
    clean_string,
    parse_big_int,
    parse_date,
    parse_day,
    to_bool,
    to_flag,
    to_float,
    to_int,
)

Record = Dict[str, Any]


# Lookup rows missing from the original AppointmentType export. Appended by
# the loader only when something references them.
SUPPLEMENTAL_APPOINTMENT_TYPES = [
    {
        "ID": 11,
        "Code": "00011",
        "Appt_Type": "Pro Bono",
        "Description": "Free session for client, clinician gets paid out of the GoFundMe fund",
        "TypeIdForRate": 11,
    },
    {
        "ID": 41,
        "Code": "00041",
        "Appt_Type": "Team Lead",
        "Description": (
            "Pay code that includes Clinical Lead, Clinical Manager, PCC Manager, "
            "HR Manager and Client Relationship Manager"
        ),
        "TypeIdForRate": 41,
    },
]


def transform_appointment_type(record: Record) -> Record:
    return {
        "id": to_int(record.get("ID")),
        "code": clean_string(record.get("Code")),
        "appt_type": clean_string(record.get("Appt_Type")),
        "description": clean_string(record.get("Description")),
        "type_id_for_rate": to_int(record.get("TypeIdForRate")),
    }


def transform_employee(record: Record) -> Record:
    return {
        "id": to_int(record.get("ID")),
        "name": clean_string(record.get("Name")),
        "email": clean_string(record.get("Email")),
        "active": to_flag(record.get("Active")),
        "start_date": parse_day(record.get("Start_Date")),
        "employee_sp_id": to_int(record.get("EmployeeSP_ID"), default=0),
        "last_name": clean_string(record.get("LastName")),
        "first_name": clean_string(record.get("FirstName")),
        "pay_type": clean_string(record.get("PayType")),
        "gusto_id": clean_string(record.get("GustoId")),
    }


def transform_time_period(record: Record) -> Record:
    return {
        "id": parse_big_int(record.get("ID")),
        "year": to_int(record.get("Year")),
        "pay_period": to_int(record.get("PayPeriod")),
        "start_date": parse_date(record.get("StartDate")),
        "end_date": parse_date(record.get("EndDate")),
    }


def transform_client(record: Record) -> Record:
    """Next_Appt is the field that carries the 0001-01-01 placeholder."""
    return {
        "id": to_int(record.get("ID")),
        "employee_id": to_int(record.get("EmployeeID")),
        "client_name": clean_string(record.get("Client_Name")),
        "tx_plan": to_bool(record.get("TxPlan")),
        "npp": to_bool(record.get("NPP")),
        "consent": to_bool(record.get("Consent")),
        "loaded": clean_string(record.get("Loaded")),
        "email": clean_string(record.get("Email")),
        "created": parse_date(record.get("Created")),
        "updated": parse_date(record.get("Updated")),
        "next_appt": parse_day(record.get("Next_Appt")),
        "active": to_bool(record.get("Active")),
        "client_sp_id": to_int(record.get("ClientSP_ID"), default=0),
        "hashed_id": clean_string(record.get("HashedID"), default=""),
        "employee_sp_id": to_int(record.get("EmployeeSP_ID"), default=0),
        "appt_type_id": to_int(record.get("Appt_TypeID")),
        "type": clean_string(record.get("Type"), default="Individual"),
    }


def transform_rate(record: Record) -> Record:
    return {
        "id": to_int(record.get("ID")),
        "rate": to_float(record.get("Rate")),
        "employee_id": to_int(record.get("EmployeeID")),
        "start_date": parse_day(record.get("Start_Date")),
        "active": to_flag(record.get("Active")),
        "rate_type": clean_string(record.get("RateType")),
        "end_date": parse_day(record.get("End_Date")),
        "appt_type_id": to_int(record.get("Appt_TypeID")),
        "gusto_id": parse_big_int(record.get("GustoID")),
    }


def transform_appointment(record: Record) -> Record:
    return {
        "id": to_int(record.get("ID")),
        "client_id": to_int(record.get("ClientID")),
        "employee_id": to_int(record.get("EmployeeID")),
        "rate_id": to_int(record.get("RateID")),
        "appt_sp_id": parse_big_int(record.get("ApptSP_ID")),
        "appt_type_id": to_int(record.get("Appt_TypeID")),
        "appt_date": parse_date(record.get("Appt_Date")),
        "units": to_float(record.get("Units")),
        "clinician_amount": to_float(record.get("Clinician_Amount")),
        "client_payment_status": clean_string(record.get("Client_Payment_Status")),
        "duration": to_float(record.get("Duration")),
        "has_progress_note": bool(to_flag(record.get("HasProgressNote"))),
        "created": parse_date(record.get("Created")),
        "updated": parse_date(record.get("Updated")),
        "client_charge": to_float(record.get("Client_Charge")),
        "flagged": to_bool(record.get("Flagged")),
        "client_payment_status_desc": clean_string(record.get("Client_Payment_Status_Desc")),
        "vacation_hours": to_float(record.get("Vacation_Hours")),
        "bonus": to_float(record.get("Bonus")),
        "correction_payment": to_float(record.get("Correction_Payment")),
        "personal_note": clean_string(record.get("Personal_Note")),
        "reimbursement": to_float(record.get("Reimbursement")),
        "comments": clean_string(record.get("Comments")),
    }


def transform_log(record: Record) -> Record:
    return {
        "id": parse_big_int(record.get("ID")),
        "log_time": parse_date(record.get("LogTime")),
        "type": clean_string(record.get("Type")),
        "description": clean_string(record.get("Description")),
    }
