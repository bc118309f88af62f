from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Tuple

from ..protocol.types import RasterAsset


class Vertex(NamedTuple):
    """Normalized screen position plus normalized texture coordinate."""

    x: float
    y: float
    tx: float
    ty: float


@dataclass(frozen=True)
class SizeInfo:
    """Cell and viewport metrics in pixels."""

    cell_width: float
    cell_height: float
    screen_width: float
    screen_height: float

    def __post_init__(self) -> None:
        for name in ("cell_width", "cell_height", "screen_width", "screen_height"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be greater than zero")


@dataclass(frozen=True)
class GraphicsPlacement:
    """What a grid cell records about the image it shows.

    ``start_column`` is the grid column where the image begins and
    ``offset_y`` the image row (in cells) this grid line displays.
    """

    asset: RasterAsset
    start_column: int
    offset_y: int


@dataclass(frozen=True)
class Quad:
    """Two triangles: TL, BL, BR, TL, BR, TR."""

    vertices: Tuple[Vertex, Vertex, Vertex, Vertex, Vertex, Vertex]

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def __getitem__(self, index: int) -> Vertex:
        return self.vertices[index]

    @property
    def top_left(self) -> Vertex:
        return self.vertices[0]

    @property
    def bottom_left(self) -> Vertex:
        return self.vertices[1]

    @property
    def bottom_right(self) -> Vertex:
        return self.vertices[2]

    @property
    def top_right(self) -> Vertex:
        return self.vertices[5]


def _covered_extent(index: int, cell_size: float, image_size: float) -> float:
    overflow = (index + 1) * cell_size - image_size
    if overflow < 0:
        return cell_size
    extent = cell_size - overflow
    if extent < 0:
        return cell_size
    return extent


def map_cell_quad(size_info: SizeInfo, placement: GraphicsPlacement, line: int, column: int) -> Quad:
    """Build the quad drawing ``placement`` into grid cell ``(line, column)``.

    Cells at the right and bottom edge of the image are clipped to the part
    of the cell the image actually covers.
    """
    cell_width = size_info.cell_width
    cell_height = size_info.cell_height
    screen_width = size_info.screen_width
    screen_height = size_info.screen_height
    image_width = float(placement.asset.width)
    image_height = float(placement.asset.height)
    if image_width <= 0 or image_height <= 0:
        raise ValueError("Cannot map an empty image onto the grid")

    top_left_x = column * cell_width
    top_left_y = line * cell_height
    x = 2.0 * top_left_x / screen_width - 1.0
    y = 2.0 * top_left_y / screen_height - 1.0
    tx = (column - placement.start_column) * cell_width / image_width
    ty = placement.offset_y * cell_height / image_height

    width = _covered_extent(column - placement.start_column, cell_width, image_width)
    height = _covered_extent(placement.offset_y, cell_height, image_height)

    right_x = 2.0 * (top_left_x + width) / screen_width - 1.0
    bottom_y = 2.0 * (top_left_y + height) / screen_height - 1.0
    right_tx = tx + width / image_width
    bottom_ty = ty + height / image_height

    top_left = Vertex(x, y, tx, ty)
    bottom_left = Vertex(x, bottom_y, tx, bottom_ty)
    bottom_right = Vertex(right_x, bottom_y, right_tx, bottom_ty)
    top_right = Vertex(right_x, y, right_tx, ty)
    return Quad((top_left, bottom_left, bottom_right, top_left, bottom_right, top_right))
