# repairshop/ticket/services.py
from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from repairshop.core.config import get_settings
from repairshop.core.errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from repairshop.core.logging_config import get_logger
from repairshop.ticket import aggregation
from repairshop.ticket.lifecycle import DEFAULT_STATE
from repairshop.ticket.models import Ticket
from repairshop.ticket.numbering import format_ticket_number, reserve_sequence
from repairshop.ticket.schemas import TicketCreate, TicketUpdate, as_utc

logger = get_logger(__name__)

TEXT_FIELDS = ("tecnico_asignado", "notas_tecnico")
COST_FIELDS = ("costo_estimado", "costo_final")


def _coerce(schema: type[BaseModel], payload):
    if isinstance(payload, schema):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(payload)
    except SchemaError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise ValidationError(f"Invalid or missing fields: {', '.join(fields)}", fields=fields) from exc


def generate_next_ticket_number(db: Session, now: datetime | None = None) -> str:
    """Reserve the next ``TKT-<year>-NNNN`` number.

    The reservation becomes permanent when the caller commits; callers that
    roll back give the number back.
    """
    now = now or datetime.now(timezone.utc)
    prefix = get_settings().TICKET_PREFIX
    return format_ticket_number(prefix, now.year, reserve_sequence(db, prefix, now.year))


def create_ticket(db: Session, payload: TicketCreate | Mapping, now: datetime | None = None) -> Ticket:
    data = _coerce(TicketCreate, payload).model_dump()
    now = now or datetime.now(timezone.utc)
    if data.get("fecha_ingreso") is None:
        data["fecha_ingreso"] = as_utc(now)
    try:
        numero = generate_next_ticket_number(db, now)
        db_ticket = Ticket(**data, numero_ticket=numero, estado_actual=DEFAULT_STATE)
        db.add(db_ticket)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create ticket for %s", data.get("nombre_cliente"))
        raise PersistenceError() from exc
    db.refresh(db_ticket)
    logger.info("Created ticket %s (%s)", db_ticket.numero_ticket, db_ticket.id)
    return db_ticket


def get_all_tickets(db: Session) -> list[Ticket]:
    try:
        return db.query(Ticket).order_by(Ticket.fecha_ingreso.desc()).all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to load tickets")
        raise PersistenceError("Could not load tickets") from exc


def list_tickets(db: Session, status: str | None = None, search: str | None = None) -> list[Ticket]:
    # no server-side filtering: the full set is fetched and narrowed in memory
    return aggregation.filter_tickets(get_all_tickets(db), status=status, search=search)


def get_ticket(db: Session, ticket_id: str) -> Ticket | None:
    try:
        return db.query(Ticket).filter(Ticket.id == ticket_id).first()
    except SQLAlchemyError as exc:
        logger.exception("Failed to load ticket %s", ticket_id)
        raise PersistenceError("Could not load ticket") from exc


def require_ticket(db: Session, ticket_id: str) -> Ticket:
    db_ticket = get_ticket(db, ticket_id)
    if not db_ticket:
        raise NotFoundError()
    return db_ticket


def update_ticket(db: Session, ticket_id: str, payload: TicketUpdate | Mapping) -> Ticket:
    """Apply an edit-view change set.

    Only the fields in ``EDITABLE_FIELDS`` can change; ``version`` (when sent)
    must match the stored one.
    """
    changes_in = _coerce(TicketUpdate, payload)
    db_ticket = require_ticket(db, ticket_id)
    if changes_in.version is not None and changes_in.version != db_ticket.version:
        raise ConflictError()

    changes = _normalise_changes(changes_in.model_dump(exclude_unset=True, exclude={"version"}))
    for field, value in changes.items():
        setattr(db_ticket, field, value)
    try:
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        raise ConflictError() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update ticket %s", ticket_id)
        raise PersistenceError() from exc
    db.refresh(db_ticket)
    logger.info("Updated ticket %s: %s", db_ticket.numero_ticket, ", ".join(sorted(changes)) or "no changes")
    return db_ticket


def delete_ticket(db: Session, ticket_id: str) -> Ticket:
    db_ticket = require_ticket(db, ticket_id)
    numero = db_ticket.numero_ticket
    try:
        db.delete(db_ticket)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete ticket %s", ticket_id)
        raise PersistenceError() from exc
    logger.info("Deleted ticket %s", numero)
    return db_ticket


def compute_statistics(db: Session) -> aggregation.Statistics:
    try:
        rows = db.query(Ticket.estado_actual, Ticket.prioridad).all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to load ticket statistics")
        raise PersistenceError("Could not load statistics") from exc
    return aggregation.tally_statistics(rows)


def _normalise_changes(changes: dict) -> dict:
    if changes.get("estado_actual", DEFAULT_STATE) is None:
        del changes["estado_actual"]
    for field in TEXT_FIELDS:
        if field in changes and changes[field] is None:
            changes[field] = ""
    for field in COST_FIELDS:
        if field in changes and changes[field] is None:
            changes[field] = Decimal("0")
    return changes
