import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from leadsheet.api.dependencies import Clock, get_clock, get_lead_store
from leadsheet.core.metrics import LEAD_UPDATES
from leadsheet.models.lead import Lead, column_of, to_lead, to_row
from leadsheet.services import lead_rules
from leadsheet.services.lead_store import LeadStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["leads"])


class StatusUpdate(BaseModel):
    status: str


class NextCallUpdate(BaseModel):
    next_call_date: str = Field(..., alias="nextCallDate")

    class Config:
        populate_by_name = True


class RemarkUpdate(BaseModel):
    remark: str


class UpdateResponse(BaseModel):
    success: bool = True
    updated_row: Lead = Field(..., alias="updatedRow")

    class Config:
        populate_by_name = True


def _error(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=500)


async def _load_leads(store: LeadStore) -> List[Lead]:
    rows = await store.read_rows()
    return [to_lead(row, index) for index, row in enumerate(rows)]


async def _reread(store: LeadStore, index: int) -> UpdateResponse:
    updated = to_lead(await store.read_row(index), index)
    return UpdateResponse(updated_row=updated)


async def _write_fields(store: LeadStore, lead: Lead, first_field: str, last_field: str) -> UpdateResponse:
    """Write the columns first_field..last_field of a lead and return the re-read row."""
    first_column, last_column = column_of(first_field), column_of(last_field)
    await store.write_row(lead.index, first_column, to_row(lead, first_column, last_column))
    return await _reread(store, lead.index)


async def _overwrite(store: LeadStore, index: int, field: str, value: str) -> UpdateResponse:
    await store.write_row(index, column_of(field), [value])
    return await _reread(store, index)


@router.get("/leads", response_model=List[Lead])
async def get_leads(store: LeadStore = Depends(get_lead_store)):
    """Get all leads in sheet order."""
    try:
        return await _load_leads(store)
    except Exception:
        logger.exception("Error fetching leads")
        return _error("Error fetching leads")


@router.get("/filter-leads", response_model=List[Lead])
async def filter_leads(date: Optional[str] = None, store: LeadStore = Depends(get_lead_store)):
    """Get the leads whose next call date is exactly ``date``; all leads when omitted."""
    try:
        leads = await _load_leads(store)
    except Exception:
        logger.exception("Error filtering leads")
        return _error("Error filtering leads")
    if not date:
        return leads
    return [lead for lead in leads if lead.next_call_date == date]


@router.post("/update-call/{index}", response_model=UpdateResponse)
async def update_call(
    index: int,
    store: LeadStore = Depends(get_lead_store),
    clock: Clock = Depends(get_clock),
):
    """Register a call made now: status, last called, follow-ups and call time."""
    try:
        lead = to_lead(await store.read_row(index), index)
        called = lead_rules.register_call(lead, clock())
        # Status..Call Time in one write; remarks are written back unchanged.
        response = await _write_fields(store, called, "status", "call_time")
    except Exception:
        logger.exception("Error updating call for lead %s", index)
        return _error("Error updating call")
    LEAD_UPDATES.labels(kind="call").inc()
    return response


@router.post("/update-status/{index}", response_model=UpdateResponse)
async def update_status(index: int, payload: StatusUpdate, store: LeadStore = Depends(get_lead_store)):
    try:
        response = await _overwrite(store, index, "status", payload.status)
    except Exception:
        logger.exception("Error updating status for lead %s", index)
        return _error("Error updating status")
    LEAD_UPDATES.labels(kind="status").inc()
    return response


@router.post("/update-next-call/{index}", response_model=UpdateResponse)
async def update_next_call(index: int, payload: NextCallUpdate, store: LeadStore = Depends(get_lead_store)):
    try:
        response = await _overwrite(store, index, "next_call_date", payload.next_call_date)
    except Exception:
        logger.exception("Error updating next call date for lead %s", index)
        return _error("Error updating next call date")
    LEAD_UPDATES.labels(kind="next_call").inc()
    return response


@router.post("/update-remarks/{index}", response_model=UpdateResponse)
async def update_remarks(
    index: int,
    payload: RemarkUpdate,
    store: LeadStore = Depends(get_lead_store),
    clock: Clock = Depends(get_clock),
):
    """Add a remark under today's date."""
    try:
        lead = to_lead(await store.read_row(index), index)
        remarked = lead_rules.add_remark(lead, payload.remark, clock())
        response = await _write_fields(store, remarked, "remarks", "remarks")
    except Exception:
        logger.exception("Error updating remarks for lead %s", index)
        return _error("Error updating remarks")
    LEAD_UPDATES.labels(kind="remarks").inc()
    return response
