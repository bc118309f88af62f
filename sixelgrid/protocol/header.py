from __future__ import annotations

from enum import Enum

from .params import accumulate

RASTER_INTRODUCER = 0x22  # '"'
FIELD_SEPARATOR = 0x3B  # ';'

DEFAULT_ASPECT_NUMERATOR = 2
DEFAULT_ASPECT_DENOMINATOR = 1


def _digit(byte: int) -> int:
    if 0x30 <= byte <= 0x39:
        return byte - 0x30
    return -1


class HeaderState(Enum):
    AWAIT_INTRODUCER = "await_introducer"
    ASPECT_NUMERATOR = "aspect_numerator"
    ASPECT_DENOMINATOR = "aspect_denominator"
    HORIZONTAL_EXTENT = "horizontal_extent"
    VERTICAL_EXTENT = "vertical_extent"
    DONE = "done"


class HeaderParser:
    """Parse the raster attributes command ``"Pan;Pad;Ph;Pv``.

    Any byte outside the grammar ends the header; the caller then
    re-dispatches that byte. The aspect fields keep only the most recent
    digit, while the extents accumulate decimal digits.
    """

    def __init__(self, state: HeaderState = HeaderState.AWAIT_INTRODUCER) -> None:
        self.state = state
        self.aspect_numerator = DEFAULT_ASPECT_NUMERATOR
        self.aspect_denominator = DEFAULT_ASPECT_DENOMINATOR
        self.xsize = 0
        self.ysize = 0

    @classmethod
    def after_introducer(cls) -> "HeaderParser":
        """Return a parser that has already consumed the ``"`` byte."""
        return cls(HeaderState.ASPECT_NUMERATOR)

    @property
    def done(self) -> bool:
        return self.state is HeaderState.DONE

    def put(self, byte: int) -> HeaderState:
        state = self.state
        digit = _digit(byte)
        if state is HeaderState.AWAIT_INTRODUCER and byte == RASTER_INTRODUCER:
            self.state = HeaderState.ASPECT_NUMERATOR
        elif state is HeaderState.ASPECT_NUMERATOR and digit >= 0:
            self.aspect_numerator = digit
        elif state is HeaderState.ASPECT_NUMERATOR and byte == FIELD_SEPARATOR:
            self.state = HeaderState.ASPECT_DENOMINATOR
        elif state is HeaderState.ASPECT_DENOMINATOR and digit >= 0:
            self.aspect_denominator = digit
        elif state is HeaderState.ASPECT_DENOMINATOR and byte == FIELD_SEPARATOR:
            self.state = HeaderState.HORIZONTAL_EXTENT
        elif state is HeaderState.HORIZONTAL_EXTENT and digit >= 0:
            self.xsize = accumulate(self.xsize, byte)
        elif state is HeaderState.HORIZONTAL_EXTENT and byte == FIELD_SEPARATOR:
            self.state = HeaderState.VERTICAL_EXTENT
        elif state is HeaderState.VERTICAL_EXTENT and digit >= 0:
            self.ysize = accumulate(self.ysize, byte)
        else:
            self.state = HeaderState.DONE
        return self.state
