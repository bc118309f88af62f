from __future__ import annotations

import math
from typing import Iterator, Tuple

from ..protocol.types import RasterAsset
from .quad import GraphicsPlacement, SizeInfo


def cell_span(asset: RasterAsset, size_info: SizeInfo) -> Tuple[int, int]:
    """Return the (columns, rows) of grid cells the image touches."""
    columns = int(math.ceil(asset.width / size_info.cell_width))
    rows = int(math.ceil(asset.height / size_info.cell_height))
    return columns, rows


def iter_cell_placements(
    asset: RasterAsset,
    line: int,
    column: int,
    size_info: SizeInfo,
) -> Iterator[Tuple[int, int, GraphicsPlacement]]:
    """Yield ``(line, column, placement)`` for every cell under the image."""
    columns, rows = cell_span(asset, size_info)
    for offset_y in range(rows):
        placement = GraphicsPlacement(asset, start_column=column, offset_y=offset_y)
        for offset_x in range(columns):
            yield line + offset_y, column + offset_x, placement
