"""Time entry domain model"""
from datetime import date as date_type, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TimeEntryStatus(str, Enum):
    """Billing status of a time entry"""
    UNBILLED = "unbilled"
    INVOICED = "invoiced"
    PAID = "paid"


class TimeEntryBase(BaseModel):
    """Base time entry fields"""
    description: str
    hours: float = Field(..., ge=0)
    date: date_type
    billable: bool = True
    company_id: Optional[str] = None
    project_id: Optional[str] = None
    rate: Optional[float] = Field(None, ge=0)


class TimeEntryCreate(TimeEntryBase):
    """Time entry creation model"""
    status: TimeEntryStatus = TimeEntryStatus.UNBILLED


class TimeEntryUpdate(BaseModel):
    """Time entry update model - all fields optional"""
    description: Optional[str] = None
    hours: Optional[float] = Field(None, ge=0)
    date: Optional[date_type] = None
    billable: Optional[bool] = None
    company_id: Optional[str] = None
    project_id: Optional[str] = None
    rate: Optional[float] = Field(None, ge=0)
    status: Optional[TimeEntryStatus] = None
    invoice_id: Optional[str] = None


class TimeEntry(TimeEntryBase):
    """Complete time entry model from database"""
    id: str  # UUID as string
    created_at: Optional[datetime] = None
    status: TimeEntryStatus = TimeEntryStatus.UNBILLED
    invoice_id: Optional[str] = None

    class Config:
        from_attributes = True
