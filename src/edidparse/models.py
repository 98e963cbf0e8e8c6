"""Immutable decoded EDID structures.

Every value is built once by the decoders and never mutated. Sequences are
tuples so the whole tree is hashable and safe to share.

Each arm of a union carries a ``kind`` literal so serialized output
(``pydantic.TypeAdapter(EDID).dump_python(mode="json")``) names the variant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Literal, Union

from pydantic import PlainSerializer

from edidparse.fields import descriptor_text
from edidparse.types import (
    MODEL_YEAR_WEEK,
    AspectRatio,
    DisplayType,
    EstablishedTiming,
    Orientation,
    StereoMode,
    SyncPolarity,
)

# Raw descriptor bytes are not text; render them as hex in JSON
HexBytes = Annotated[
    bytes, PlainSerializer(lambda data: data.hex(), return_type=str, when_used="json")
]


# --- Product information ---------------------------------------------------


@dataclass(frozen=True)
class ManufacturerID:
    """Three-letter PNP vendor code, e.g. "APP" or "DEL"."""

    code: str
    raw: int = 0  # 16-bit word as stored (bit 15 reserved)

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class ManufactureDate:
    """Week and absolute year of manufacture.

    Week 0 means unspecified; week 0xFF marks ``year`` as a model year.
    """

    week: int
    year: int

    @property
    def is_model_year(self) -> bool:
        return self.week == MODEL_YEAR_WEEK


@dataclass(frozen=True)
class ProductInformation:
    manufacturer_id: ManufacturerID
    product_code: int
    serial_number: int
    manufacture_date: ManufactureDate


@dataclass(frozen=True)
class Version:
    """EDID structure version and revision, e.g. 1.4."""

    version: int
    revision: int

    def __str__(self) -> str:
        return f"{self.version}.{self.revision}"

    def at_least(self, version: int, revision: int) -> bool:
        return (self.version, self.revision) >= (version, revision)


# --- Display parameters ----------------------------------------------------


@dataclass(frozen=True)
class SignalLevel:
    """Video white and sync levels relative to blank, in volts."""

    high: float
    low: float


@dataclass(frozen=True)
class AnalogInput:
    signal_level: SignalLevel
    setup_expected: bool  # blank-to-black setup / pedestal
    separate_sync: bool
    composite_sync: bool
    sync_on_green: bool
    serrated_vsync: bool
    kind: Literal["analog"] = field(default="analog", repr=False)


@dataclass(frozen=True)
class DigitalInput:
    dfp_compatible: bool  # VESA DFP 1.x
    kind: Literal["digital"] = field(default="digital", repr=False)


VideoInput = Union[AnalogInput, DigitalInput]


@dataclass(frozen=True)
class ImageSize:
    """Physical size in centimetres."""

    width: float
    height: float
    kind: Literal["image_size"] = field(default="image_size", repr=False)


@dataclass(frozen=True)
class ScreenAspectRatio:
    """Max-size bytes given as an aspect ratio (width / height) instead of cm."""

    ratio: float
    orientation: Orientation
    kind: Literal["aspect_ratio"] = field(default="aspect_ratio", repr=False)


@dataclass(frozen=True)
class DPMSFeatures:
    standby_supported: bool
    suspend_supported: bool
    low_power_supported: bool
    display_type: DisplayType
    default_srgb: bool
    # Preferred mode is the first detailed timing
    preferred_timing_mode: bool
    default_gtf_supported: bool


@dataclass(frozen=True)
class DisplayParameters:
    input: VideoInput
    max_size: ImageSize | ScreenAspectRatio | None
    gamma: float | None
    dpms: DPMSFeatures


# --- Color characteristics -------------------------------------------------


@dataclass(frozen=True)
class WhitePoint:
    """Additional white point from a color point descriptor (CIE 1931 x, y)."""

    index: int
    x: float
    y: float
    gamma: float | None


@dataclass(frozen=True)
class ColorCharacteristics:
    red: tuple[float, float]
    green: tuple[float, float]
    blue: tuple[float, float]
    white: tuple[float, float]
    white_points: tuple[WhitePoint, ...] = ()


# --- Timings ---------------------------------------------------------------


@dataclass(frozen=True)
class StandardTiming:
    horizontal_resolution: int
    aspect_ratio: AspectRatio
    refresh_rate: int

    @property
    def vertical_resolution(self) -> int:
        return self.aspect_ratio.vertical_for(self.horizontal_resolution)


@dataclass(frozen=True)
class AnalogCompositeSync:
    """Analog composite sync; no polarity is defined for this family."""

    bipolar: bool
    serrated: bool
    sync_on_rgb: bool  # False: sync on green only
    kind: Literal["analog_composite"] = field(default="analog_composite", repr=False)


@dataclass(frozen=True)
class DigitalCompositeSync:
    serrated: bool
    polarity: SyncPolarity
    kind: Literal["digital_composite"] = field(default="digital_composite", repr=False)


@dataclass(frozen=True)
class SeparateSync:
    horizontal: SyncPolarity
    vertical: SyncPolarity
    kind: Literal["separate"] = field(default="separate", repr=False)


SyncType = Union[AnalogCompositeSync, DigitalCompositeSync, SeparateSync]


@dataclass(frozen=True)
class DetailedTiming:
    """A fully specified video mode from an 18-byte timing descriptor.

    Pairs are (horizontal, vertical); horizontal values are in pixels,
    vertical values in lines.
    """

    pixel_clock: int  # Hz
    active: tuple[int, int]
    blanking: tuple[int, int]
    front_porch: tuple[int, int]
    sync_length: tuple[int, int]
    back_porch: tuple[int, int]
    image_size: ImageSize
    border: tuple[int, int]
    interlaced: bool
    stereo: StereoMode | None
    sync_type: SyncType

    @property
    def total(self) -> tuple[int, int]:
        return (
            self.active[0] + self.blanking[0],
            self.active[1] + self.blanking[1],
        )

    @property
    def refresh_rate(self) -> float:
        """Vertical refresh in Hz.

        Interlaced modes store vertical active and blanking per field, so
        this is the field rate (60 Hz for 1080i60).
        """
        h_total, v_total = self.total
        if h_total == 0 or v_total == 0:
            return 0.0
        return self.pixel_clock / (h_total * v_total)


@dataclass(frozen=True)
class Timings:
    established_timings: tuple[EstablishedTiming, ...] = ()
    standard_timings: tuple[StandardTiming, ...] = ()
    detailed_timings: tuple[DetailedTiming, ...] = ()


# --- Monitor descriptors ---------------------------------------------------


@dataclass(frozen=True)
class MonitorName:
    name: str
    kind: Literal["monitor_name"] = field(default="monitor_name", repr=False)


@dataclass(frozen=True)
class MonitorSerialNumber:
    serial: str
    kind: Literal["monitor_serial_number"] = field(
        default="monitor_serial_number", repr=False
    )


@dataclass(frozen=True)
class DefaultGtf:
    """Default GTF supported (timing support code 0x00)."""

    kind: Literal["default_gtf"] = field(default="default_gtf", repr=False)


@dataclass(frozen=True)
class RangeLimitsOnly:
    """No timing formula beyond the limits themselves (code 0x01)."""

    kind: Literal["range_limits_only"] = field(default="range_limits_only", repr=False)


@dataclass(frozen=True)
class SecondaryGtf:
    start_frequency: int  # Hz, horizontal frequency the curve applies from
    c: float
    m: float
    k: float
    j: float
    kind: Literal["secondary_gtf"] = field(default="secondary_gtf", repr=False)


@dataclass(frozen=True)
class TimingFormula:
    """Any other timing support code (CVT, reserved), raw bytes 11-17 kept."""

    code: int
    data: HexBytes
    kind: Literal["timing_formula"] = field(default="timing_formula", repr=False)


SecondaryTiming = Union[DefaultGtf, RangeLimitsOnly, SecondaryGtf, TimingFormula]


@dataclass(frozen=True)
class MonitorRangeLimits:
    vertical_rate: tuple[int, int]  # Hz (min, max)
    horizontal_rate: tuple[int, int]  # Hz (min, max)
    max_pixel_clock: int  # Hz
    secondary_timing: SecondaryTiming
    kind: Literal["range_limits"] = field(default="range_limits", repr=False)


@dataclass(frozen=True)
class ManufacturerDefined:
    """Any descriptor without a dedicated variant; the 13 data bytes verbatim."""

    tag: int
    data: HexBytes
    kind: Literal["manufacturer_defined"] = field(
        default="manufacturer_defined", repr=False
    )

    @property
    def text(self) -> str:
        return descriptor_text(self.data)


@dataclass(frozen=True)
class Unused:
    """Dummy descriptor (tag 0x10)."""

    kind: Literal["unused"] = field(default="unused", repr=False)


MonitorDescriptor = Union[
    MonitorName,
    MonitorSerialNumber,
    MonitorRangeLimits,
    ManufacturerDefined,
    Unused,
]


# --- Root ------------------------------------------------------------------


@dataclass(frozen=True)
class EDID:
    """A decoded 128-byte EDID base block."""

    product: ProductInformation
    version: Version
    display: DisplayParameters
    color: ColorCharacteristics
    timings: Timings
    descriptors: tuple[MonitorDescriptor, ...] = field(default_factory=tuple)
    extension_count: int = 0

    @property
    def monitor_name(self) -> str | None:
        for desc in self.descriptors:
            if isinstance(desc, MonitorName):
                return desc.name
        return None

    @property
    def monitor_serial(self) -> str | None:
        for desc in self.descriptors:
            if isinstance(desc, MonitorSerialNumber):
                return desc.serial
        return None

    @property
    def preferred_timing(self) -> DetailedTiming | None:
        if self.timings.detailed_timings:
            return self.timings.detailed_timings[0]
        return None
