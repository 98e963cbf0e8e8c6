"""Decoder options."""

from __future__ import annotations

import codecs

from pydantic import BaseModel, Field, field_validator


class DecodeOptions(BaseModel):
    """Knobs for a single decode call. Defaults give strict decoding."""
    model_config = {"frozen": True}

    verify_checksum: bool = Field(
        default=True,
        description="Raise ChecksumError on a bad checksum instead of logging it",
    )
    text_encoding: str = Field(
        default="cp437",
        description="Codec for monitor name and serial number strings",
    )

    @field_validator("text_encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            return codecs.lookup(value).name
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding: {value!r}") from exc


DEFAULT_OPTIONS = DecodeOptions()
