# repairshop/ticket/schemas.py
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
)

from repairshop.ticket.lifecycle import InitialState, Priority, TicketState


def _zero_if_blank(value):
    if value is None or value == "":
        return Decimal("0")
    return value


def _empty_if_none(value):
    return "" if value is None else value


def _none_if_blank(value):
    return None if value == "" else value


def as_utc(value):
    """Naive datetimes are taken as UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


Money = Annotated[
    Decimal,
    BeforeValidator(_zero_if_blank),
    Field(ge=0, max_digits=10, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]
OptionalText = Annotated[str, BeforeValidator(_empty_if_none)]
DeliveryDate = Annotated[date | None, BeforeValidator(_none_if_blank)]
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class TicketBase(BaseModel):
    nombre_cliente: str = Field(..., min_length=1)
    telefono: str = Field(..., min_length=1)
    direccion: OptionalText = ""
    tipo_equipo: OptionalText = ""
    marca: OptionalText = ""
    modelo: OptionalText = ""
    numero_serie: OptionalText = ""
    contrasena_equipo: OptionalText = ""
    accesorios_incluidos: OptionalText = ""
    descripcion_problema: str = Field(..., min_length=1)
    recibido_por: OptionalText = ""
    fecha_estimada_entrega: DeliveryDate = None


class TicketCreate(TicketBase):
    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True, extra="forbid")

    prioridad: Priority = Priority.MEDIUM.value
    estado_inicial: InitialState = InitialState.RECEIVED.value
    costo_estimado: Money = Decimal("0")
    # defaults to the moment of saving, accepted for back-dated intakes.
    # stored as UTC, the sqlite DateTime column keeps no offset
    fecha_ingreso: UtcDatetime | None = None


class TicketUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True, extra="forbid")

    estado_actual: TicketState | None = None
    # explicit nulls clear text fields and zero the costs
    tecnico_asignado: str | None = None
    notas_tecnico: str | None = None
    costo_estimado: Money | None = None
    costo_final: Money | None = None
    fecha_estimada_entrega: DeliveryDate = None
    # version the client last saw; omit to skip the check
    version: int | None = Field(default=None, ge=1)


class TicketOut(TicketBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    numero_ticket: str
    prioridad: str
    estado_inicial: str
    estado_actual: str
    tecnico_asignado: str
    notas_tecnico: str
    costo_estimado: Money
    costo_final: Money
    fecha_ingreso: UtcDatetime
    created_at: UtcDatetime
    updated_at: UtcDatetime
    version: int


class StatisticsOut(BaseModel):
    total: int
    counts_by_state: dict[str, int]
    counts_by_priority: dict[str, int]
    in_process: int
    completed: int
    urgent: int
