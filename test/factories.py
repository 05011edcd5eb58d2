"""Legacy records as they appear in export files"""


def make_appointment(record_id, **overrides):
    record = {
        "ID": record_id,
        "ClientID": 1,
        "EmployeeID": 1,
        "RateID": None,
        "ApptSP_ID": "9000000000000000001",
        "Appt_TypeID": 1,
        "Appt_Date": "2024-03-05T10:00:00",
        "Units": 1.0,
        "Clinician_Amount": 85.5,
        "Client_Payment_Status": "Paid",
        "Duration": 50,
        "HasProgressNote": True,
        "Created": "2024-03-05T11:00:00.1230000",
        "Updated": "2024-03-06T08:00:00",
        "Client_Charge": 120.0,
        "Flagged": False,
        "Client_Payment_Status_Desc": None,
        "Vacation_Hours": None,
        "Bonus": None,
        "Correction_Payment": None,
        "Personal_Note": None,
        "Reimbursement": None,
        "Comments": "",
    }
    record.update(overrides)
    return record


def make_time_period(record_id, **overrides):
    record = {
        "ID": record_id,
        "Year": 2024,
        "PayPeriod": record_id,
        "StartDate": "2024-01-01T00:00:00",
        "EndDate": "2024-01-14T23:59:59",
    }
    record.update(overrides)
    return record


def make_appointment_type(record_id, **overrides):
    record = {
        "ID": record_id,
        "Code": f"{record_id:05d}",
        "Appt_Type": f"Type {record_id}",
        "Description": None,
        "TypeIdForRate": record_id,
    }
    record.update(overrides)
    return record


def make_employee(record_id, **overrides):
    record = {
        "ID": record_id,
        "Name": f"Employee {record_id}",
        "Email": f"employee{record_id}@example.com",
        "Active": True,
        "Start_Date": "2020-01-01",
        "EmployeeSP_ID": None,
        "LastName": f"Last{record_id}",
        "FirstName": f"First{record_id}",
        "PayType": "Hourly",
        "GustoId": None,
    }
    record.update(overrides)
    return record


def make_client(record_id, **overrides):
    record = {
        "ID": record_id,
        "EmployeeID": 1,
        "Client_Name": f"Client {record_id}",
        "TxPlan": 1,
        "NPP": 1,
        "Consent": 0,
        "Loaded": None,
        "Email": None,
        "Created": "2021-01-05T09:30:00",
        "Updated": "2021-02-01T12:00:00",
        "Next_Appt": "2024-04-01",
        "Active": 1,
        "ClientSP_ID": None,
        "HashedID": None,
        "EmployeeSP_ID": None,
        "Appt_TypeID": 1,
        "Type": None,
    }
    record.update(overrides)
    return record
