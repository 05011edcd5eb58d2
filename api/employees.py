# api/employees.py
"""Employee CRUD endpoints over the migrated employees table."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.auth import require_auth
from api.database import get_db
from api.schemas import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
    MessageResponse,
    PayType,
)
from db.models import Employee

router = APIRouter(
    prefix="/api/employees",
    tags=["Employees"],
    dependencies=[Depends(require_auth)],
)

SORT_COLUMNS = {
    "id": Employee.id,
    "first_name": Employee.first_name,
    "last_name": Employee.last_name,
    "email": Employee.email,
    "active": Employee.active,
    "pay_type": Employee.pay_type,
    "start_date": Employee.start_date,
}


def _get_or_404(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if employee is None:
        raise HTTPException(status_code=404, detail=f"Employee with id {employee_id} not found")
    return employee


def _email_taken(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Employee.id).filter(func.lower(Employee.email) == email.strip().lower())
    if exclude_id is not None:
        query = query.filter(Employee.id != exclude_id)
    return query.first() is not None


def _full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    return " ".join(part for part in (first_name, last_name) if part)


@router.post("", response_model=EmployeeResponse, status_code=201)
def create_employee(employee: EmployeeCreate, db: Session = Depends(get_db)):
    """
    Create a new employee.

    - **first_name**, **last_name**, **email**: required
    - **pay_type**: Hourly, Salary or Pct
    - **409** when the email is already in use
    """
    if _email_taken(db, employee.email):
        raise HTTPException(status_code=409, detail="Email already exists.")

    data = employee.model_dump()
    data["email"] = data["email"].strip()
    data["active"] = int(data["active"])
    data["name"] = _full_name(data["first_name"], data["last_name"])

    db_employee = Employee(**data)
    db.add(db_employee)
    db.commit()
    db.refresh(db_employee)
    return db_employee


@router.get("", response_model=EmployeeListResponse)
def list_employees(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
    active: Optional[bool] = Query(None, description="Filter by active status"),
    pay_type: Optional[PayType] = Query(None, description="Filter by pay type"),
    search: Optional[str] = Query(None, description="Search by first name, last name or email"),
    sort_by: Literal[
        "id", "first_name", "last_name", "email", "active", "pay_type", "start_date"
    ] = Query("last_name", description="Sort column"),
    sort_dir: Literal["asc", "desc"] = Query("asc", description="Sort direction"),
    db: Session = Depends(get_db),
):
    """
    List employees with pagination, filtering and sorting.

    - **page**: Page number (default: 1)
    - **page_size**: Items per page (default: 20, max: 100)
    - **active**, **pay_type**: Filters
    - **search**: Case-insensitive match on first_name, last_name or email
    - **sort_by** / **sort_dir**: Ordering (id is always the tie-breaker)
    """
    query = db.query(Employee)

    # Apply filters
    if active is not None:
        query = query.filter(Employee.active == int(active))
    if pay_type is not None:
        query = query.filter(Employee.pay_type == pay_type)
    if search:
        search_pattern = f"%{search.strip()}%"
        query = query.filter(
            (Employee.first_name.ilike(search_pattern)) |
            (Employee.last_name.ilike(search_pattern)) |
            (Employee.email.ilike(search_pattern))
        )

    # Get total count
    total = query.count()

    column = SORT_COLUMNS[sort_by]
    order = column.desc() if sort_dir == "desc" else column.asc()
    query = query.order_by(order, Employee.id.asc())

    # Apply pagination
    offset = (page - 1) * page_size
    employees = query.offset(offset).limit(page_size).all()

    return EmployeeListResponse(
        total=total,
        page=page,
        page_size=page_size,
        employees=employees,
    )


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: int, db: Session = Depends(get_db)):
    """Get a specific employee by id."""
    return _get_or_404(db, employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    employee_update: EmployeeUpdate,
    db: Session = Depends(get_db),
):
    """
    Update an existing employee.

    - Only provided fields will be updated
    - **409** when the new email belongs to another employee
    """
    employee = _get_or_404(db, employee_id)

    update_data = employee_update.model_dump(exclude_unset=True)
    if update_data.get("email"):
        if _email_taken(db, update_data["email"], exclude_id=employee_id):
            raise HTTPException(status_code=409, detail="Email already exists.")
        update_data["email"] = update_data["email"].strip()
    if update_data.get("active") is not None:
        update_data["active"] = int(update_data["active"])

    for field, value in update_data.items():
        setattr(employee, field, value)
    if "first_name" in update_data or "last_name" in update_data:
        employee.name = _full_name(employee.first_name, employee.last_name)

    db.commit()
    db.refresh(employee)
    return employee


@router.delete("/{employee_id}", response_model=MessageResponse)
def delete_employee(employee_id: int, db: Session = Depends(get_db)):
    """
    Delete an employee.

    - **409** when clients, rates or appointments still reference the employee
    """
    employee = _get_or_404(db, employee_id)
    message = f"{employee.first_name} {employee.last_name}'s data has been deleted."

    db.delete(employee)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=409,
            detail="Employee still has related records and cannot be deleted.",
        )
    return {"message": message}
