# repairshop/dashboard/schemas.py
from pydantic import BaseModel

from repairshop.ticket.schemas import StatisticsOut, TicketOut


class DashboardOut(BaseModel):
    statistics: StatisticsOut
    recent: list[TicketOut]
    urgent: list[TicketOut]
