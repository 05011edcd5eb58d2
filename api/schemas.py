"""Pydantic schemas for request/response validation."""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PayType = Literal["Hourly", "Salary", "Pct"]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# EMPLOYEE SCHEMAS

class EmployeeBase(BaseModel):
    """Base employee schema with common fields."""
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    active: bool = Field(True, description="Currently employed")
    pay_type: Optional[PayType] = Field(None, description="Hourly, Salary or Pct")
    start_date: Optional[date] = None


class EmployeeCreate(EmployeeBase):
    """Schema for creating a new employee."""
    gusto_id: Optional[str] = None


class EmployeeUpdate(BaseModel):
    """Schema for updating an existing employee (all fields optional)."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    active: Optional[bool] = None
    pay_type: Optional[PayType] = None
    start_date: Optional[date] = None
    gusto_id: Optional[str] = None


class EmployeeResponse(BaseModel):
    """Schema for employee response with all fields."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    active: Optional[bool] = None
    pay_type: Optional[str] = None
    start_date: Optional[date] = None
    employee_sp_id: int = 0
    gusto_id: Optional[str] = None


class EmployeeListResponse(BaseModel):
    """Paginated list of employees."""
    total: int
    page: int
    page_size: int
    employees: List[EmployeeResponse]


class MessageResponse(BaseModel):
    message: str


# AUTH SCHEMAS

class LoginRequest(BaseModel):
    """Both fields optional so a missing one is reported as 400, not 422."""
    email: Optional[str] = None
    password: Optional[str] = None


class AuthStatus(BaseModel):
    isAuthenticated: bool
