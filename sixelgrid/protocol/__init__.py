from .color import ColorParser, ColorState, InvalidColor, NewColor, SetSlot, scale_percent
from .decoder import (
    MAX_COLOR_REGISTERS,
    MAX_IMAGE_PIXELS,
    DecodeStats,
    DecoderState,
    SixelDecoder,
    decode_sixel,
)
from .header import HeaderParser, HeaderState
from .strip import BAND_HEIGHT, STRIP_BIAS, decode_strip, is_drawing_byte
from .types import Color, RasterAsset

__all__ = [
    "BAND_HEIGHT",
    "Color",
    "ColorParser",
    "ColorState",
    "DecodeStats",
    "DecoderState",
    "HeaderParser",
    "HeaderState",
    "InvalidColor",
    "MAX_COLOR_REGISTERS",
    "MAX_IMAGE_PIXELS",
    "NewColor",
    "RasterAsset",
    "SetSlot",
    "SixelDecoder",
    "STRIP_BIAS",
    "decode_sixel",
    "decode_strip",
    "is_drawing_byte",
    "scale_percent",
]
