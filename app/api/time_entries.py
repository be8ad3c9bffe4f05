from datetime import date as date_type
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.dependencies import get_time_entry_service
from app.middleware.auth import get_current_user_id
from app.models.time_entry import TimeEntry, TimeEntryStatus, TimeEntryUpdate
from app.services.time_entries import TimeEntryService, TimeEntrySummary

router = APIRouter(
    prefix="/api/time-entries",
    tags=["time-entries"],
    dependencies=[Depends(get_current_user_id)],
)


# Request/Response models
class CreateTimeEntryRequest(BaseModel):
    description: str
    hours: float = Field(..., ge=0)
    date: Optional[date_type] = None
    billable: bool = True
    company_id: Optional[str] = None
    project_id: Optional[str] = None
    rate: Optional[float] = Field(None, ge=0)


class UpdateTimeEntryRequest(BaseModel):
    description: Optional[str] = None
    hours: Optional[float] = Field(None, ge=0)
    date: Optional[date_type] = None
    billable: Optional[bool] = None
    company_id: Optional[str] = None
    project_id: Optional[str] = None
    rate: Optional[float] = Field(None, ge=0)
    status: Optional[TimeEntryStatus] = None


class InvoiceEntriesRequest(BaseModel):
    entry_ids: List[str]
    invoice_id: str


class TimeEntryResponse(BaseModel):
    entry: TimeEntry


class TimeEntryListResponse(BaseModel):
    entries: List[TimeEntry]
    count: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


# CRUD Endpoints
@router.get("", response_model=TimeEntryListResponse)
async def list_time_entries(
    limit: Optional[int] = Query(None, ge=1),
    service: TimeEntryService = Depends(get_time_entry_service),
):
    """List time entries, most recent date first"""
    entries = await service.list_entries(limit=limit)
    return {"entries": entries, "count": len(entries)}


@router.get("/summary", response_model=TimeEntrySummary)
async def get_summary(service: TimeEntryService = Depends(get_time_entry_service)):
    """Total, billable and unbilled hours"""
    return await service.summary()


@router.get("/unbilled", response_model=TimeEntryListResponse)
async def list_unbilled(
    company_id: str,
    service: TimeEntryService = Depends(get_time_entry_service),
):
    """Billable entries for a client that are not on an invoice yet"""
    entries = await service.unbilled_for_company(company_id)
    return {"entries": entries, "count": len(entries)}


@router.get("/{entry_id}", response_model=TimeEntryResponse)
async def get_time_entry(entry_id: str, service: TimeEntryService = Depends(get_time_entry_service)):
    entry = await service.get_entry(entry_id)

    if not entry:
        raise HTTPException(status_code=404, detail="Time entry not found")

    return {"entry": entry}


@router.post("", response_model=TimeEntryResponse)
async def create_time_entry(
    request: CreateTimeEntryRequest,
    service: TimeEntryService = Depends(get_time_entry_service),
):
    """Log hours manually"""
    try:
        entry = await service.log_time(
            description=request.description,
            hours=request.hours,
            entry_date=request.date,
            billable=request.billable,
            company_id=request.company_id,
            project_id=request.project_id,
            rate=request.rate,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"entry": entry}


@router.put("/{entry_id}", response_model=TimeEntryResponse)
async def update_time_entry(
    entry_id: str,
    request: UpdateTimeEntryRequest,
    service: TimeEntryService = Depends(get_time_entry_service),
):
    update = TimeEntryUpdate(**request.model_dump(exclude_unset=True))
    try:
        entry = await service.update_entry(entry_id, update)
    except ValueError as e:
        status_code = 404 if "not found" in str(e) else 400
        raise HTTPException(status_code=status_code, detail=str(e))

    return {"entry": entry}


@router.delete("/{entry_id}", response_model=DeleteResponse)
async def delete_time_entry(entry_id: str, service: TimeEntryService = Depends(get_time_entry_service)):
    try:
        await service.delete_entry(entry_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {"success": True, "message": f"Time entry {entry_id} deleted"}


@router.post("/invoice", response_model=TimeEntryListResponse)
async def invoice_time_entries(
    request: InvoiceEntriesRequest,
    service: TimeEntryService = Depends(get_time_entry_service),
):
    """Mark unbilled entries as invoiced on the given invoice"""
    try:
        entries = await service.mark_invoiced(request.entry_ids, request.invoice_id)
    except ValueError as e:
        status_code = 404 if "not found" in str(e) else 409
        raise HTTPException(status_code=status_code, detail=str(e))

    return {"entries": entries, "count": len(entries)}
