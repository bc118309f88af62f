from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class Color(NamedTuple):
    """8-bit RGB palette entry."""

    r: int = 0
    g: int = 0
    b: int = 0


BLACK = Color(0, 0, 0)


@dataclass(frozen=True)
class RasterAsset:
    """Decoded sixel image: row-major RGB triplets, top row first."""

    id: int
    width: int
    height: int
    rgb: bytes
    cell_height: int = 0

    def validate(self) -> None:
        """Validate that the buffer matches the declared dimensions."""
        if self.width < 0 or self.height < 0:
            raise ValueError("Width and height must not be negative")
        if len(self.rgb) != self.width * self.height * 3:
            raise ValueError(
                f"RGB buffer holds {len(self.rgb)} bytes, expected {self.width * self.height * 3}"
            )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def pixel(self, x: int, y: int) -> Color:
        """Return the color at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} raster")
        offset = (y * self.width + x) * 3
        return Color(self.rgb[offset], self.rgb[offset + 1], self.rgb[offset + 2])
