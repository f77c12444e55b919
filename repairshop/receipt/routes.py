# repairshop/receipt/routes.py
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.orm import Session

from repairshop.core.config import Settings, get_settings
from repairshop.core.database import get_db
from repairshop.receipt.formatter import ReceiptLayout, ReceiptResult, format_receipt, provisional_ticket_number
from repairshop.receipt.schemas import ReceiptError, ReceiptPreview
from repairshop.ticket import services as ticket_service

router = APIRouter(tags=["Receipts"])

RECEIPT_RESPONSES = {422: {"model": ReceiptError, "description": "Ticket lacks the fields a receipt needs"}}


def _respond(result: ReceiptResult):
    if not result.ok:
        return JSONResponse(status_code=422, content={"detail": result.message, "missing": result.missing})
    return HTMLResponse(result.html)


@router.get("/tickets/{ticket_id}/receipt", response_class=HTMLResponse, responses=RECEIPT_RESPONSES)
def ticket_receipt(
    ticket_id: str,
    layout: ReceiptLayout | None = Query(default=None, description="Defaults to RECEIPT_LAYOUT"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    ticket = ticket_service.require_ticket(db, ticket_id)
    return _respond(
        format_receipt(
            ticket,
            settings.business_profile(),
            layout=layout or settings.RECEIPT_LAYOUT,
            unclaimed_days=settings.UNCLAIMED_DAYS,
        )
    )


@router.post("/receipts/preview", response_class=HTMLResponse, responses=RECEIPT_RESPONSES)
def preview_receipt(
    intake: ReceiptPreview,
    layout: ReceiptLayout | None = Query(default=None),
    settings: Settings = Depends(get_settings),
):
    now = datetime.now()
    data = intake.model_dump()
    data["numero_ticket"] = data["numero_ticket"] or provisional_ticket_number(now)
    return _respond(
        format_receipt(
            data,
            settings.business_profile(),
            layout=layout or settings.RECEIPT_LAYOUT,
            printed_at=now,
            unclaimed_days=settings.UNCLAIMED_DAYS,
        )
    )
