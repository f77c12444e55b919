# repairshop/ticket/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from repairshop.core.database import get_db
from repairshop.ticket.lifecycle import ALL_STATES_FILTER
from repairshop.ticket.schemas import StatisticsOut, TicketCreate, TicketOut, TicketUpdate
from repairshop.ticket import services as ticket_service

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.post("/", response_model=TicketOut, status_code=201)
def create(ticket: TicketCreate, db: Session = Depends(get_db)):
    return ticket_service.create_ticket(db, ticket)


@router.get("/", response_model=list[TicketOut])
def list_all(
    status: str | None = Query(default=None, description=f"Current state, or '{ALL_STATES_FILTER}'"),
    search: str | None = Query(default=None, description="Ticket number, customer, phone or device type"),
    db: Session = Depends(get_db),
):
    return ticket_service.list_tickets(db, status=status, search=search)


@router.get("/stats", response_model=StatisticsOut)
def stats(db: Session = Depends(get_db)):
    return ticket_service.compute_statistics(db).as_dict()


@router.get("/{ticket_id}", response_model=TicketOut)
def get(ticket_id: str, db: Session = Depends(get_db)):
    return ticket_service.require_ticket(db, ticket_id)


@router.put("/{ticket_id}", response_model=TicketOut)
def update(ticket_id: str, ticket: TicketUpdate, db: Session = Depends(get_db)):
    return ticket_service.update_ticket(db, ticket_id, ticket)


@router.delete("/{ticket_id}", response_model=TicketOut)
def delete(ticket_id: str, db: Session = Depends(get_db)):
    return ticket_service.delete_ticket(db, ticket_id)
