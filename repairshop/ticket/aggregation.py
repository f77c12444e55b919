# repairshop/ticket/aggregation.py
"""In-memory filtering and counting over fetched tickets.

Everything here works on plain objects exposing the ticket attributes (ORM rows,
``TicketOut`` instances, ``SimpleNamespace`` in tests) and never touches the
database.
"""
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from repairshop.ticket.lifecycle import (
    ALL_STATES_FILTER,
    COMPLETED_STATES,
    IN_PROCESS_STATES,
    PRIORITIES,
    STATES,
    Priority,
    is_urgent,
)

DASHBOARD_SLICE = 5

SEARCH_FIELDS = ("numero_ticket", "nombre_cliente", "telefono", "tipo_equipo")


@dataclass
class Statistics:
    total: int = 0
    counts_by_state: dict[str, int] = field(default_factory=dict)
    counts_by_priority: dict[str, int] = field(default_factory=dict)

    @property
    def in_process(self) -> int:
        return sum(self.counts_by_state.get(s, 0) for s in IN_PROCESS_STATES)

    @property
    def completed(self) -> int:
        return sum(self.counts_by_state.get(s, 0) for s in COMPLETED_STATES)

    @property
    def urgent(self) -> int:
        return self.counts_by_priority.get(Priority.URGENT.value, 0)

    def as_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "counts_by_state": dict(self.counts_by_state),
            "counts_by_priority": dict(self.counts_by_priority),
            "in_process": self.in_process,
            "completed": self.completed,
            "urgent": self.urgent,
        }


@dataclass
class Dashboard:
    statistics: Statistics
    recent: list
    urgent: list


def matches_search(ticket, text: str) -> bool:
    needle = text.lower()
    return any(needle in (getattr(ticket, f, "") or "").lower() for f in SEARCH_FIELDS)


def filter_tickets(tickets: Iterable, status: str | None = None, search: str | None = None) -> list:
    """Keep tickets in the given state and/or matching the search text.

    ``status`` equal to "All" (or empty) disables the state filter; the search
    is a case-insensitive substring test over number, customer name, phone and
    device type. Input order is preserved.
    """
    result = list(tickets)
    if status and status != ALL_STATES_FILTER:
        result = [t for t in result if t.estado_actual == status]
    search = (search or "").strip()
    if search:
        result = [t for t in result if matches_search(t, search)]
    return result


def sort_by_intake(tickets: Iterable) -> list:
    # sorted() is stable with reverse=True, equal timestamps keep store order
    return sorted(tickets, key=lambda t: t.fecha_ingreso, reverse=True)


def recent_tickets(tickets: Iterable, limit: int = DASHBOARD_SLICE) -> list:
    return sort_by_intake(tickets)[:limit]


def urgent_tickets(tickets: Iterable, limit: int = DASHBOARD_SLICE) -> list:
    pending = [t for t in sort_by_intake(tickets) if is_urgent(t.prioridad, t.estado_actual)]
    return pending[:limit]


def tally_statistics(rows: Iterable) -> Statistics:
    """Count tickets per state and per priority.

    ``rows`` may be tickets or ``(estado_actual, prioridad)`` pairs. Every known
    value gets a key, unknown values are counted under their own key so each
    breakdown sums to ``total``.
    """
    by_state = {s: 0 for s in STATES}
    by_priority = {p: 0 for p in PRIORITIES}
    total = 0
    for row in rows:
        state, priority = _state_and_priority(row)
        by_state[state] = by_state.get(state, 0) + 1
        by_priority[priority] = by_priority.get(priority, 0) + 1
        total += 1
    return Statistics(total=total, counts_by_state=by_state, counts_by_priority=by_priority)


def build_dashboard(tickets: Sequence, limit: int = DASHBOARD_SLICE) -> Dashboard:
    return Dashboard(
        statistics=tally_statistics(tickets),
        recent=recent_tickets(tickets, limit),
        urgent=urgent_tickets(tickets, limit),
    )


def _state_and_priority(row) -> tuple[str, str]:
    if isinstance(row, tuple):
        state, priority = row
    elif hasattr(row, "estado_actual"):
        state, priority = row.estado_actual, row.prioridad
    else:
        # SQLAlchemy Row from a two-column select
        state, priority = row[0], row[1]
    return getattr(state, "value", state), getattr(priority, "value", priority)
