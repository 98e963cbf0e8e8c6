"""Flat identification summary of a decoded EDID."""

from __future__ import annotations

from pydantic import BaseModel

from edidparse.models import EDID, DigitalInput, ImageSize


class EdidSummary(BaseModel):
    """The handful of fields most callers want to show or index on."""

    manufacturer: str
    product_code: int
    serial_number: int
    manufacture_week: int = 0
    manufacture_year: int = 0
    model_year: bool = False
    version: str
    digital_input: bool
    monitor_name: str | None = None
    monitor_serial: str | None = None
    screen_size_cm: tuple[float, float] | None = None
    gamma: float | None = None
    preferred_mode: str | None = None
    extension_count: int = 0

    @property
    def product_code_hex(self) -> str:
        return f"{self.product_code:04X}"


def summarize(edid: EDID) -> EdidSummary:
    product = edid.product
    display = edid.display

    size = None
    if isinstance(display.max_size, ImageSize):
        size = (display.max_size.width, display.max_size.height)

    preferred = None
    timing = edid.preferred_timing
    if timing is not None:
        h_active, v_active = timing.active
        suffix = "i" if timing.interlaced else ""
        preferred = f"{h_active}x{v_active}{suffix}@{timing.refresh_rate:.2f}Hz"

    return EdidSummary(
        manufacturer=str(product.manufacturer_id),
        product_code=product.product_code,
        serial_number=product.serial_number,
        manufacture_week=product.manufacture_date.week,
        manufacture_year=product.manufacture_date.year,
        model_year=product.manufacture_date.is_model_year,
        version=str(edid.version),
        digital_input=isinstance(display.input, DigitalInput),
        monitor_name=edid.monitor_name,
        monitor_serial=edid.monitor_serial,
        screen_size_cm=size,
        gamma=display.gamma,
        preferred_mode=preferred,
        extension_count=edid.extension_count,
    )
