# repairshop/receipt/accessories.py
"""Checkbox inference for the receipt's equipment block.

Intake staff type accessories as free text ("Cargador, funda, mouse"), the
printed work order has fixed checkboxes. A box is ticked when any of its
keywords appears in the text, case-insensitively. Keywords cover the Spanish
wording used at the counter and the English one.
"""
from dataclasses import dataclass

ACCESSORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "charger": ("cargador", "charger"),
    "usb_cable": ("cable usb", "usb cable"),
    "power_cable": ("cable energia", "cable energía", "power cable"),
    "case": ("maletin", "maletín", "bolsa", "case", "bag"),
    "monitor": ("monitor",),
    "cpu": ("cpu",),
}

ACCESSORY_LABELS = {
    "charger": "Charger",
    "usb_cable": "USB cable",
    "power_cable": "Power cable",
    "case": "Case / bag",
    "monitor": "Monitor",
    "cpu": "CPU",
}

COMPUTER_KEYWORDS = ("computadora", "computer", "pc", "laptop", "desktop", "all-in-one", "notebook")
PRINTER_KEYWORDS = ("impresora", "printer")


@dataclass(frozen=True)
class AccessoryFlags:
    charger: bool = False
    usb_cable: bool = False
    power_cable: bool = False
    case: bool = False
    monitor: bool = False
    cpu: bool = False

    def checkboxes(self) -> list[tuple[str, bool]]:
        return [(label, getattr(self, key)) for key, label in ACCESSORY_LABELS.items()]


def accessory_flags(text: str | None) -> AccessoryFlags:
    haystack = (text or "").lower()
    return AccessoryFlags(
        **{key: any(word in haystack for word in words) for key, words in ACCESSORY_KEYWORDS.items()}
    )


def split_accessories(text: str | None) -> list[str]:
    return [item.strip() for item in (text or "").split(",") if item.strip()]


def device_category(device_type: str | None) -> str:
    """``computer``, ``printer`` or ``other`` for the header checkboxes."""
    value = (device_type or "").lower()
    if any(word in value for word in COMPUTER_KEYWORDS):
        return "computer"
    if any(word in value for word in PRINTER_KEYWORDS):
        return "printer"
    return "other"
