# repairshop/ticket/lifecycle.py
"""Workflow states, priorities and the lookups built on them.

States are a flat enumeration: any state may follow any other, a delivered
ticket can be moved back to an earlier state. Member order is display order.

Compare and key dicts by ``.value``; a ``str`` Enum hashes by member name, so
``{"In Repair": 1}[TicketState.IN_REPAIR]`` would miss.
"""
from enum import Enum


class TicketState(str, Enum):
    RECEIVED = "Received"
    IN_DIAGNOSIS = "In Diagnosis"
    IN_REPAIR = "In Repair"
    AWAITING_PARTS = "Awaiting Parts"
    REPAIRED = "Repaired"
    READY_FOR_PICKUP = "Ready for Pickup"
    DELIVERED = "Delivered"


class InitialState(str, Enum):
    RECEIVED = "Received"
    UNDER_EVALUATION = "Under Evaluation"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


ALL_STATES_FILTER = "All"

DEFAULT_STATE = TicketState.RECEIVED.value
DEFAULT_INITIAL_STATE = InitialState.RECEIVED.value
DEFAULT_PRIORITY = Priority.MEDIUM.value
TERMINAL_STATE = TicketState.DELIVERED.value

STATES: tuple[str, ...] = tuple(s.value for s in TicketState)
INITIAL_STATES: tuple[str, ...] = tuple(s.value for s in InitialState)
PRIORITIES: tuple[str, ...] = tuple(p.value for p in Priority)

IN_PROCESS_STATES = frozenset(
    {
        TicketState.RECEIVED.value,
        TicketState.IN_DIAGNOSIS.value,
        TicketState.IN_REPAIR.value,
        TicketState.AWAITING_PARTS.value,
    }
)
COMPLETED_STATES = frozenset({TicketState.REPAIRED.value, TicketState.READY_FOR_PICKUP.value})
URGENT_PRIORITIES = frozenset({Priority.HIGH.value, Priority.URGENT.value})

# Fields the edit view may change after intake.
EDITABLE_FIELDS = (
    "estado_actual",
    "tecnico_asignado",
    "notas_tecnico",
    "costo_estimado",
    "costo_final",
    "fecha_estimada_entrega",
)

DEFAULT_STYLE = "gray"

STATE_STYLES = {
    TicketState.RECEIVED.value: "blue",
    TicketState.IN_DIAGNOSIS.value: "purple",
    TicketState.IN_REPAIR.value: "yellow",
    TicketState.AWAITING_PARTS.value: "orange",
    TicketState.REPAIRED.value: "green",
    TicketState.READY_FOR_PICKUP.value: "teal",
    TicketState.DELIVERED.value: "gray",
}

PRIORITY_STYLES = {
    Priority.LOW.value: "green",
    Priority.MEDIUM.value: "yellow",
    Priority.HIGH.value: "orange",
    Priority.URGENT.value: "red",
}


def state_style(state: str) -> str:
    return STATE_STYLES.get(state, DEFAULT_STYLE)


def priority_style(priority: str) -> str:
    return PRIORITY_STYLES.get(priority, DEFAULT_STYLE)


def is_urgent(priority: str, state: str) -> bool:
    """High/Urgent tickets still in the shop."""
    return priority in URGENT_PRIORITIES and state != TERMINAL_STATE


def lookup_table() -> dict:
    return {
        "states": [{"value": s, "style": state_style(s)} for s in STATES],
        "initial_states": list(INITIAL_STATES),
        "priorities": [{"value": p, "style": priority_style(p)} for p in PRIORITIES],
        "all_filter": ALL_STATES_FILTER,
        "editable_fields": list(EDITABLE_FIELDS),
    }
