# repairshop/receipt/formatter.py
"""Printable work orders.

``format_receipt`` turns a ticket into a standalone HTML document with inline
styles and a fixed ``@page`` size, ready for the browser's print dialog. It
never reads or writes the database: pass it an ORM ticket, a ``TicketOut``,
an intake preview or a plain mapping.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from repairshop.core.config import BusinessProfile
from repairshop.receipt.accessories import accessory_flags, device_category, split_accessories

TEMPLATE_DIR = Path(__file__).parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

REQUIRED_FIELDS = {
    "nombre_cliente": "customer name",
    "telefono": "phone",
    "descripcion_problema": "problem description",
}
VALIDATION_MESSAGE = "Fill in at least the customer name, phone and problem description before printing."
DEFAULT_UNCLAIMED_DAYS = 45


class ReceiptLayout(str, Enum):
    WORK_ORDER = "work_order"
    THERMAL_80 = "thermal_80"
    THERMAL_58 = "thermal_58"


# layout -> (template, @page size, paper width)
LAYOUTS = {
    ReceiptLayout.WORK_ORDER.value: ("work_order.html", "A5 portrait", "148mm"),
    ReceiptLayout.THERMAL_80.value: ("thermal.html", "80mm auto", "80mm"),
    ReceiptLayout.THERMAL_58.value: ("thermal.html", "58mm auto", "58mm"),
}


@dataclass
class ReceiptResult:
    ok: bool
    html: str = ""
    message: str = ""
    missing: list[str] = field(default_factory=list)


def _value(ticket, name: str, default=""):
    if isinstance(ticket, Mapping):
        value = ticket.get(name, default)
    else:
        value = getattr(ticket, name, default)
    return default if value is None else value


def _money(value) -> str:
    try:
        amount = Decimal(str(value or 0))
    except InvalidOperation:
        return ""
    return f"{amount:,.2f}" if amount > 0 else ""


def _date(value) -> str:
    if isinstance(value, datetime):
        return value.strftime("%d/%m/%Y %H:%M")
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    return str(value or "")


def provisional_ticket_number(now: datetime) -> str:
    """Placeholder number for printing an intake that is not saved yet."""
    millis = int(now.timestamp() * 1000)
    return f"TMP-{now:%Y%m%d}-{str(millis)[-6:]}"


def missing_fields(ticket) -> list[str]:
    return [label for name, label in REQUIRED_FIELDS.items() if not str(_value(ticket, name)).strip()]


def build_context(ticket, profile: BusinessProfile, printed_at: datetime, unclaimed_days: int) -> dict:
    accessories = _value(ticket, "accesorios_incluidos")
    password = _value(ticket, "contrasena_equipo")
    total = _money(_value(ticket, "costo_final", 0)) or _money(_value(ticket, "costo_estimado", 0))
    delivery = _value(ticket, "fecha_estimada_entrega", None)
    # intake date when the ticket has one, the print time for unsaved previews
    received = _value(ticket, "fecha_ingreso", None)
    if not isinstance(received, date):
        received = printed_at
    return {
        "business": profile,
        "printed_at": printed_at.strftime("%d/%m/%Y %H:%M"),
        "received_on": _date(received),
        "day": received.day,
        "month": received.month,
        "year": received.strftime("%y"),
        "ticket_number": _value(ticket, "numero_ticket") or "-",
        "customer": {
            "name": _value(ticket, "nombre_cliente"),
            "address": _value(ticket, "direccion"),
            "phone": _value(ticket, "telefono"),
        },
        "device": {
            "type": _value(ticket, "tipo_equipo"),
            "category": device_category(_value(ticket, "tipo_equipo")),
            "brand": _value(ticket, "marca"),
            "model": _value(ticket, "modelo"),
            "serial": _value(ticket, "numero_serie"),
        },
        "accessory_boxes": accessory_flags(accessories).checkboxes(),
        "accessories": split_accessories(accessories),
        "accessories_text": accessories,
        "problem": _value(ticket, "descripcion_problema"),
        "observations": f"Password: {password}" if password else "",
        "priority": _value(ticket, "prioridad"),
        "state": _value(ticket, "estado_inicial"),
        "total": total,
        "received_by": _value(ticket, "recibido_por"),
        "estimated_delivery": _date(delivery) if delivery else "Not set",
        "unclaimed_days": unclaimed_days,
    }


def format_receipt(
    ticket,
    profile: BusinessProfile,
    layout: ReceiptLayout | str = ReceiptLayout.WORK_ORDER,
    printed_at: datetime | None = None,
    unclaimed_days: int = DEFAULT_UNCLAIMED_DAYS,
) -> ReceiptResult:
    missing = missing_fields(ticket)
    if missing:
        return ReceiptResult(ok=False, message=VALIDATION_MESSAGE, missing=missing)

    layout = ReceiptLayout(layout).value
    template_name, page_size, paper_width = LAYOUTS[layout]
    context = build_context(ticket, profile, printed_at or datetime.now(), unclaimed_days)
    html = env.get_template(template_name).render(
        **context, layout=layout, page_size=page_size, paper_width=paper_width
    )
    return ReceiptResult(ok=True, html=html)
