"""Analysis endpoints — SLA verdicts for the configured export or posted rows."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from helpdesk_sla.application.ports.ticket_source import TicketSource
from helpdesk_sla.application.use_cases.analyze_tickets import BatchAnalysisUseCase
from helpdesk_sla.infrastructure.api.dependencies import get_batch_analysis_uc, get_ticket_source

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])

# ── Request schemas ─────────────────────────────────────────────────

class TicketRow(BaseModel):
    id: str | None = None
    created_at: str | None = None
    priority: str | None = None
    status: str | None = None
    comments: str | None = None
    assigned_technician: str | None = None
    subject: str | None = None
    submitted_by: str | None = None


class TicketBatchRequest(BaseModel):
    tickets: list[TicketRow] = Field(default_factory=list)


# ── Helpers ─────────────────────────────────────────────────────────

def _evaluation_time(now: datetime | None) -> datetime:
    # The clock is read here, once per request; everything below gets it injected.
    return now if now is not None else datetime.now(timezone.utc)


# ── Endpoints ───────────────────────────────────────────────────────

@router.post("")
def analyze_export(
    now: datetime | None = Query(default=None, description="Evaluation instant (ISO-8601)"),
    source: TicketSource = Depends(get_ticket_source),
    batch_uc: BatchAnalysisUseCase = Depends(get_batch_analysis_uc),
):
    """Analyze every ticket in the configured CSV export."""
    try:
        rows = source.load_rows()
    except FileNotFoundError as e:
        raise HTTPException(status_code=400, detail=f"Ticket export not found: {e.filename}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = batch_uc.execute(rows, _evaluation_time(now))
    return result.to_dict()


@router.post("/tickets")
def analyze_tickets(
    payload: TicketBatchRequest,
    now: datetime | None = Query(default=None, description="Evaluation instant (ISO-8601)"),
    batch_uc: BatchAnalysisUseCase = Depends(get_batch_analysis_uc),
):
    """Analyze ticket rows posted as JSON."""
    rows = [row.model_dump() for row in payload.tickets]
    result = batch_uc.execute(rows, _evaluation_time(now))
    return result.to_dict()
