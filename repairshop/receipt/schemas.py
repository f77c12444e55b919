# repairshop/receipt/schemas.py
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from repairshop.ticket.schemas import DeliveryDate, Money, OptionalText


class ReceiptPreview(BaseModel):
    """Intake form contents printed before the ticket is saved.

    Nothing is required here: missing essentials come back as a message
    instead of a schema error.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    nombre_cliente: OptionalText = ""
    telefono: OptionalText = ""
    direccion: OptionalText = ""
    tipo_equipo: OptionalText = ""
    marca: OptionalText = ""
    modelo: OptionalText = ""
    numero_serie: OptionalText = ""
    contrasena_equipo: OptionalText = ""
    accesorios_incluidos: OptionalText = ""
    descripcion_problema: OptionalText = ""
    prioridad: OptionalText = ""
    estado_inicial: OptionalText = ""
    recibido_por: OptionalText = ""
    costo_estimado: Money = Decimal("0")
    fecha_estimada_entrega: DeliveryDate = None
    numero_ticket: str | None = None


class ReceiptError(BaseModel):
    detail: str
    missing: list[str]


__all__ = ["ReceiptPreview", "ReceiptError"]
