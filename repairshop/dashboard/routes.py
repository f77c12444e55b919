# repairshop/dashboard/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from repairshop.core.database import get_db
from repairshop.dashboard.schemas import DashboardOut
from repairshop.ticket import aggregation
from repairshop.ticket import services as ticket_service
from repairshop.ticket.lifecycle import lookup_table
from repairshop.ticket.schemas import TicketOut

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(db: Session = Depends(get_db)):
    # one fetch feeds the counters and both slices
    board = aggregation.build_dashboard(ticket_service.get_all_tickets(db))
    return DashboardOut(
        statistics=board.statistics.as_dict(),
        recent=[TicketOut.model_validate(t) for t in board.recent],
        urgent=[TicketOut.model_validate(t) for t in board.urgent],
    )


@router.get("/lifecycle")
def lifecycle():
    return lookup_table()
