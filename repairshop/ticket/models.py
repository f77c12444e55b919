# repairshop/ticket/models.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Text
from repairshop.core.database import Base
from repairshop.ticket.lifecycle import DEFAULT_INITIAL_STATE, DEFAULT_PRIORITY, DEFAULT_STATE


def _now():
    return datetime.now(timezone.utc)


def _new_id():
    return str(uuid.uuid4())


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(String(36), primary_key=True, default=_new_id)
    numero_ticket = Column(String(32), unique=True, index=True, nullable=False)

    # customer
    nombre_cliente = Column(String, index=True, nullable=False)
    telefono = Column(String, nullable=False)
    direccion = Column(String, nullable=False, default="")

    # device
    tipo_equipo = Column(String, nullable=False, default="")
    marca = Column(String, nullable=False, default="")
    modelo = Column(String, nullable=False, default="")
    numero_serie = Column(String, nullable=False, default="")
    contrasena_equipo = Column(String, nullable=False, default="")
    accesorios_incluidos = Column(Text, nullable=False, default="")
    descripcion_problema = Column(Text, nullable=False)

    prioridad = Column(String(16), nullable=False, default=DEFAULT_PRIORITY, index=True)
    estado_inicial = Column(String(32), nullable=False, default=DEFAULT_INITIAL_STATE)
    estado_actual = Column(String(32), nullable=False, default=DEFAULT_STATE, index=True)

    recibido_por = Column(String, nullable=False, default="")
    tecnico_asignado = Column(String, nullable=False, default="")
    notas_tecnico = Column(Text, nullable=False, default="")

    costo_estimado = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    costo_final = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))

    fecha_ingreso = Column(DateTime(timezone=True), nullable=False, default=_now, index=True)
    fecha_estimada_entrega = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class TicketCounter(Base):
    """Last issued ticket sequence per calendar year."""

    __tablename__ = "ticket_counters"

    year = Column(Integer, primary_key=True, autoincrement=False)
    last_value = Column(Integer, nullable=False, default=0)
