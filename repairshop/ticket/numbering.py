# repairshop/ticket/numbering.py
"""Human ticket numbers: ``<prefix>-<year>-<sequence:04d>``.

Each year has a row in ``ticket_counters``. Reserving a number increments that
row with a single ``UPDATE ... SET last_value = last_value + 1`` inside the
caller's transaction, so two concurrent intakes serialize on the row instead
of both reading the same "latest" ticket. The first reservation of a year
seeds its row from the highest number already issued for that year, which
keeps databases created before the counter table in sequence.
"""
from sqlalchemy import insert, select, update
from sqlalchemy.orm import Session

from repairshop.ticket.models import Ticket, TicketCounter


def format_ticket_number(prefix: str, year: int, sequence: int) -> str:
    return f"{prefix}-{year}-{sequence:04d}"


def parse_ticket_number(number: str) -> tuple[str, int, int] | None:
    parts = (number or "").rsplit("-", 2)
    if len(parts) != 3:
        return None
    prefix, year, sequence = parts
    if not (year.isdigit() and sequence.isdigit()):
        return None
    return prefix, int(year), int(sequence)


def highest_issued_sequence(db: Session, prefix: str, year: int) -> int:
    pattern = f"{prefix}-{year}-%"
    numbers = db.execute(select(Ticket.numero_ticket).where(Ticket.numero_ticket.like(pattern))).scalars()
    highest = 0
    for number in numbers:
        parsed = parse_ticket_number(number)
        if parsed and parsed[0] == prefix and parsed[1] == year:
            highest = max(highest, parsed[2])
    return highest


def reserve_sequence(db: Session, prefix: str, year: int) -> int:
    """Increment and return the counter for ``year``. Not committed here."""
    _ensure_counter(db, prefix, year)
    db.execute(
        update(TicketCounter)
        .where(TicketCounter.year == year)
        .values(last_value=TicketCounter.last_value + 1)
    )
    return db.execute(select(TicketCounter.last_value).where(TicketCounter.year == year)).scalar_one()


def _ensure_counter(db: Session, prefix: str, year: int) -> None:
    exists = db.execute(select(TicketCounter.year).where(TicketCounter.year == year)).first()
    if exists:
        return
    values = {"year": year, "last_value": highest_issued_sequence(db, prefix, year)}
    dialect = db.get_bind().dialect.name
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert as dialect_insert
    elif dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert as dialect_insert
    else:
        db.execute(insert(TicketCounter).values(**values))
        return
    # a concurrent first-of-year reservation may have created the row already
    db.execute(dialect_insert(TicketCounter).values(**values).on_conflict_do_nothing(index_elements=["year"]))
