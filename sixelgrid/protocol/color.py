from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .params import accumulate, is_digit
from .types import Color

COLOR_INTRODUCER = 0x23  # '#'
FIELD_SEPARATOR = 0x3B  # ';'

COLOR_SPACE_HLS = 1
COLOR_SPACE_RGB = 2


class ColorState(Enum):
    SLOT = "slot"
    COLOR_SPACE = "color_space"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


@dataclass(frozen=True)
class NewColor:
    """A completed ``#n;cs;r;g;b`` definition, already scaled to 0-255."""

    slot: int
    color: Color


@dataclass(frozen=True)
class SetSlot:
    """A bare ``#n`` selecting an existing palette slot."""

    slot: int


@dataclass(frozen=True)
class InvalidColor:
    """A color command abandoned on an unexpected byte."""

    byte: int


ColorOutcome = Union[NewColor, SetSlot, InvalidColor]


def scale_percent(value: int) -> int:
    """Map a 0-100 intensity onto 0-255, truncating."""
    value = max(0, min(100, value))
    return value * 255 // 100


class ColorParser:
    """Parse the body of a color introducer one byte at a time.

    ``put`` returns ``None`` while the command is incomplete and a terminal
    outcome otherwise. The byte that produced the outcome has not been
    consumed and must be dispatched again by the caller.
    """

    def __init__(self) -> None:
        self.state = ColorState.SLOT
        self.slot = 0
        self.color_space = COLOR_SPACE_RGB
        self.red = 0
        self.green = 0
        self.blue = 0

    def put(self, byte: int) -> Optional[ColorOutcome]:
        state = self.state
        if byte == FIELD_SEPARATOR:
            if state is ColorState.SLOT:
                self.state = ColorState.COLOR_SPACE
                self.color_space = 0
                return None
            if state is ColorState.COLOR_SPACE:
                self.state = ColorState.RED
                return None
            if state is ColorState.RED:
                self.state = ColorState.GREEN
                return None
            if state is ColorState.GREEN:
                self.state = ColorState.BLUE
                return None
        if is_digit(byte):
            if state is ColorState.SLOT:
                self.slot = accumulate(self.slot, byte)
            elif state is ColorState.COLOR_SPACE:
                self.color_space = accumulate(self.color_space, byte)
            elif state is ColorState.RED:
                self.red = accumulate(self.red, byte)
            elif state is ColorState.GREEN:
                self.green = accumulate(self.green, byte)
            else:
                self.blue = accumulate(self.blue, byte)
            return None
        if state is ColorState.BLUE:
            color = Color(scale_percent(self.red), scale_percent(self.green), scale_percent(self.blue))
            return NewColor(self.slot, color)
        if state is ColorState.SLOT:
            return SetSlot(self.slot)
        return InvalidColor(byte)

    @property
    def is_hls(self) -> bool:
        return self.color_space == COLOR_SPACE_HLS
