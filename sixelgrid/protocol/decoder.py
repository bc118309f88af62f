from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from .color import COLOR_INTRODUCER, ColorParser, InvalidColor, NewColor, SetSlot
from .header import (
    DEFAULT_ASPECT_DENOMINATOR,
    DEFAULT_ASPECT_NUMERATOR,
    RASTER_INTRODUCER,
    HeaderParser,
    HeaderState,
)
from .params import accumulate, is_digit
from .strip import BAND_HEIGHT, decode_strip, is_drawing_byte
from .types import BLACK, Color, RasterAsset

logger = logging.getLogger(__name__)

REPEAT_INTRODUCER = 0x21  # '!'
GRAPHICS_NEW_LINE = 0x2D  # '-'
GRAPHICS_CARRIAGE_RETURN = 0x24  # '$'

# A sub-parser hands its terminating byte back once, so one input byte
# needs at most two dispatch steps.
MAX_DISPATCH_STEPS = 2

# Larger raster attributes leave the image empty.
MAX_IMAGE_PIXELS = 4096 * 4096
# Color registers; higher slot numbers are dropped as invalid colors.
MAX_COLOR_REGISTERS = 1024


class DecoderState(Enum):
    DEFAULT = "default"
    IN_HEADER = "in_header"
    IN_COLOR = "in_color"
    IN_REPEAT = "in_repeat"


@dataclass
class DecodeStats:
    """Counters for input the decoder tolerated instead of rejecting."""

    headers: int = 0
    unhandled_bytes: int = 0
    invalid_colors: int = 0
    column_clamps: int = 0
    skipped_pixels: int = 0
    oversized_images: int = 0

    @property
    def recovered(self) -> bool:
        return bool(
            self.unhandled_bytes or self.invalid_colors or self.column_clamps or self.oversized_images
        )


class SixelDecoder:
    """Byte-at-a-time sixel decoder producing a packed RGB buffer.

    The decoder is not thread-safe; feed it from a single owner and call
    ``finish`` to hand the pixels over as a ``RasterAsset``.
    """

    def __init__(self) -> None:
        self.rgb = bytearray()
        self.colors: List[Color] = []
        self.color = 0
        self.xpos = 0
        self.ypos = 0
        self.xsize = 0
        self.ysize = 0
        self.aspect = (DEFAULT_ASPECT_NUMERATOR, DEFAULT_ASPECT_DENOMINATOR)
        self.repeat = 0
        self.state = DecoderState.IN_HEADER
        self.stats = DecodeStats()
        self._header = HeaderParser()
        self._color_parser = ColorParser()

    @property
    def palette(self) -> Tuple[Color, ...]:
        return tuple(self.colors)

    @property
    def pixel_count(self) -> int:
        return len(self.rgb) // 3

    def current_color(self) -> Color:
        """Return the active palette color, growing the palette with black."""
        self._ensure_slot(self.color)
        return self.colors[self.color]

    def feed(self, data: Iterable[int]) -> None:
        for byte in data:
            if not 0 <= byte <= 0xFF:
                raise ValueError(f"Byte value out of range: {byte}")
            self.put(byte)

    def put(self, byte: int) -> None:
        for _ in range(MAX_DISPATCH_STEPS):
            if not self._step(byte):
                return

    def finish(self, graphics_id: int, cell_height: int = 0) -> RasterAsset:
        """Move the pixel buffer into an immutable ``RasterAsset``.

        Raster attributes still waiting for a terminator are applied first.
        """
        pending = self._header.state is not HeaderState.AWAIT_INTRODUCER
        if self.state is DecoderState.IN_HEADER and pending:
            self._apply_header(self._header)
        rgb = bytes(self.rgb)
        self.rgb = bytearray()
        asset = RasterAsset(
            id=graphics_id,
            width=self.xsize,
            height=self.ysize,
            rgb=rgb,
            cell_height=cell_height,
        )
        asset.validate()
        logger.debug(
            "Finished sixel image %d: %dx%d, %d colors, stats=%s",
            graphics_id,
            self.xsize,
            self.ysize,
            len(self.colors),
            self.stats,
        )
        return asset

    def _step(self, byte: int) -> bool:
        """Apply ``byte`` to the current state; True means dispatch it again."""
        if self.state is DecoderState.IN_COLOR:
            return self._step_color(byte)
        if self.state is DecoderState.IN_REPEAT and is_digit(byte):
            self.repeat = accumulate(self.repeat, byte)
            return False
        if self.state is DecoderState.IN_HEADER:
            return self._step_header(byte)

        if byte == RASTER_INTRODUCER:
            self._header = HeaderParser.after_introducer()
            self.state = DecoderState.IN_HEADER
        elif byte == COLOR_INTRODUCER:
            self._color_parser = ColorParser()
            self.state = DecoderState.IN_COLOR
        elif byte == REPEAT_INTRODUCER:
            self.state = DecoderState.IN_REPEAT
        elif byte == GRAPHICS_NEW_LINE:
            self.xpos = 0
            self.ypos += BAND_HEIGHT
        elif byte == GRAPHICS_CARRIAGE_RETURN:
            self.xpos = 0
        elif is_drawing_byte(byte):
            self._draw(byte)
        else:
            self.stats.unhandled_bytes += 1
            logger.debug("Ignoring unhandled sixel byte 0x%02X", byte)
        return False

    def _step_header(self, byte: int) -> bool:
        header = self._header
        header.put(byte)
        if not header.done:
            return False
        self._apply_header(header)
        return True

    def _apply_header(self, header: HeaderParser) -> None:
        xsize, ysize = header.xsize, header.ysize
        if xsize * ysize > MAX_IMAGE_PIXELS:
            self.stats.oversized_images += 1
            logger.debug("Ignoring oversized raster attributes %dx%d", xsize, ysize)
            xsize = ysize = 0
        self.xsize = xsize
        self.ysize = ysize
        self.aspect = (header.aspect_numerator, header.aspect_denominator)
        self.rgb = bytearray(xsize * ysize * 3)
        self.xpos = 0
        self.ypos = 0
        self.stats.headers += 1
        self.state = DecoderState.DEFAULT

    def _step_color(self, byte: int) -> bool:
        parser = self._color_parser
        outcome = parser.put(byte)
        if outcome is None:
            return False
        if isinstance(outcome, (NewColor, SetSlot)) and outcome.slot >= MAX_COLOR_REGISTERS:
            self.stats.invalid_colors += 1
            logger.debug("Dropping color command for register %d", outcome.slot)
        elif isinstance(outcome, NewColor):
            self._ensure_slot(outcome.slot)
            self.colors[outcome.slot] = outcome.color
            self.color = outcome.slot
        elif isinstance(outcome, SetSlot):
            self.color = outcome.slot
        elif isinstance(outcome, InvalidColor):
            self.stats.invalid_colors += 1
            logger.debug("Dropping malformed color command at byte 0x%02X", outcome.byte)
        self.state = DecoderState.DEFAULT
        return True

    def _draw(self, byte: int) -> None:
        if self.xpos == self.xsize:
            # Tolerated: restart at column 0 of the same band.
            self.stats.column_clamps += 1
            logger.debug("Column %d reached image width, restarting band", self.xpos)
            self.xpos = 0
            self.state = DecoderState.DEFAULT

        color = self.current_color()
        mask = decode_strip(byte)
        self._paint(mask, color)
        self.xpos += 1
        for done in range(1, self.repeat):
            if self.ypos * self.xsize + self.xpos >= self.pixel_count:
                # Past the end of the buffer every further column is a no-op.
                remaining = self.repeat - done
                self.stats.skipped_pixels += remaining * BAND_HEIGHT
                self.xpos += remaining
                break
            self._paint(mask, color)
            self.xpos += 1

        self.repeat = 0
        self.state = DecoderState.DEFAULT

    def _paint(self, mask: Tuple[bool, ...], color: Color) -> None:
        start = self.ypos * self.xsize + self.xpos
        stride = self.xsize
        limit = self.pixel_count
        rgb = self.rgb
        for row, bit in enumerate(mask):
            index = start + row * stride
            if index >= limit:
                self.stats.skipped_pixels += len(mask) - row
                return
            if bit:
                offset = index * 3
                rgb[offset] = color.r
                rgb[offset + 1] = color.g
                rgb[offset + 2] = color.b

    def _ensure_slot(self, slot: int) -> None:
        while len(self.colors) <= slot:
            self.colors.append(BLACK)


def decode_sixel(data: Iterable[int], graphics_id: int, cell_height: int = 0) -> RasterAsset:
    """Decode a complete sixel body into a ``RasterAsset``."""
    decoder = SixelDecoder()
    decoder.feed(data)
    return decoder.finish(graphics_id, cell_height)
