from __future__ import annotations

from typing import Tuple

STRIP_BIAS = 0x3F
BAND_HEIGHT = 6
FIRST_DRAWING_BYTE = 0x3F
LAST_DRAWING_BYTE = 0x7E


def is_drawing_byte(byte: int) -> bool:
    """Return True for bytes in the sixel data range ``?``..``~``."""
    return FIRST_DRAWING_BYTE <= byte <= LAST_DRAWING_BYTE


def decode_strip(byte: int) -> Tuple[bool, bool, bool, bool, bool, bool]:
    """Decode a data byte into six row flags, top row first."""
    if not is_drawing_byte(byte):
        raise ValueError(f"Not a sixel data byte: 0x{byte:02X}")
    value = byte - STRIP_BIAS
    return (
        bool(value & 0x01),
        bool(value & 0x02),
        bool(value & 0x04),
        bool(value & 0x08),
        bool(value & 0x10),
        bool(value & 0x20),
    )
