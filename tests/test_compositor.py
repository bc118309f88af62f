from __future__ import annotations

from typing import List, Tuple

import pytest
from PIL import Image

from sixelgrid.protocol import RasterAsset, decode_sixel
from sixelgrid.rendering import (
    GraphicsPlacement,
    GraphicsRenderer,
    PillowRasterizer,
    Quad,
    Rasterizer,
    SizeInfo,
    image_to_raster,
    iter_cell_placements,
)


class RecordingRasterizer(Rasterizer):
    def __init__(self) -> None:
        self.uploads: List[int] = []
        self.draws: List[Tuple[Quad, str]] = []

    def upload(self, asset: RasterAsset) -> str:
        self.uploads.append(asset.id)
        return f"tex-{asset.id}"

    def draw(self, quad: Quad, texture: str) -> None:
        self.draws.append((quad, texture))


def _two_tone(width: int, height: int) -> RasterAsset:
    img = Image.new("RGB", (width, height), (255, 0, 0))
    img.paste((0, 0, 255), (width // 2, 0, width, height))
    return image_to_raster(img, graphics_id=7)


def test_each_image_is_uploaded_once() -> None:
    rasterizer = RecordingRasterizer()
    renderer = GraphicsRenderer(rasterizer)
    size_info = SizeInfo(6, 6, 60, 60)
    asset = _two_tone(12, 12)
    for line, column, placement in iter_cell_placements(asset, 0, 0, size_info):
        renderer.draw(size_info, placement, line, column)
    assert rasterizer.uploads == [7]
    assert len(rasterizer.draws) == 4
    assert {texture for _, texture in rasterizer.draws} == {"tex-7"}
    assert renderer.get_texture(7) == "tex-7"
    assert renderer.get_texture(8) is None


def test_base_rasterizer_is_abstract() -> None:
    with pytest.raises(NotImplementedError):
        Rasterizer().upload(_two_tone(2, 2))


def test_red_block_lands_in_top_left_cell() -> None:
    asset = decode_sixel(b'"1;1;6;6#0;2;100;0;0!6~', graphics_id=1)
    size_info = SizeInfo(6, 6, 480, 144)
    rasterizer = PillowRasterizer(480, 144)
    renderer = GraphicsRenderer(rasterizer)
    renderer.draw(size_info, GraphicsPlacement(asset, 0, 0), 0, 0)
    canvas = rasterizer.canvas
    assert canvas.getpixel((0, 0)) == (255, 0, 0)
    assert canvas.getpixel((5, 5)) == (255, 0, 0)
    assert canvas.getpixel((6, 0)) == (0, 0, 0)
    assert canvas.getpixel((0, 6)) == (0, 0, 0)
    assert rasterizer.draw_calls == 1


def test_image_is_drawn_at_insertion_cell() -> None:
    asset = _two_tone(12, 6)
    size_info = SizeInfo(6, 6, 60, 60)
    rasterizer = PillowRasterizer(60, 60)
    renderer = GraphicsRenderer(rasterizer)
    for line, column, placement in iter_cell_placements(asset, 1, 2, size_info):
        renderer.draw(size_info, placement, line, column)
    canvas = rasterizer.canvas
    assert canvas.getpixel((12, 6)) == (255, 0, 0)
    assert canvas.getpixel((17, 11)) == (255, 0, 0)
    assert canvas.getpixel((18, 6)) == (0, 0, 255)
    assert canvas.getpixel((23, 11)) == (0, 0, 255)
    assert canvas.getpixel((11, 6)) == (0, 0, 0)
    assert canvas.getpixel((24, 6)) == (0, 0, 0)
    assert canvas.getpixel((12, 12)) == (0, 0, 0)


def test_edge_cells_are_clipped() -> None:
    img = Image.new("RGB", (14, 10), (0, 255, 0))
    asset = image_to_raster(img, graphics_id=2)
    size_info = SizeInfo(6, 6, 60, 60)
    rasterizer = PillowRasterizer(60, 60)
    renderer = GraphicsRenderer(rasterizer)
    for line, column, placement in iter_cell_placements(asset, 0, 0, size_info):
        renderer.draw(size_info, placement, line, column)
    canvas = rasterizer.canvas
    assert canvas.getpixel((13, 0)) == (0, 255, 0)
    assert canvas.getpixel((14, 0)) == (0, 0, 0)
    assert canvas.getpixel((0, 9)) == (0, 255, 0)
    assert canvas.getpixel((0, 10)) == (0, 0, 0)
    assert canvas.getpixel((13, 9)) == (0, 255, 0)


def test_unknown_texture_handle_is_rejected() -> None:
    rasterizer = PillowRasterizer(10, 10)
    other = GraphicsRenderer(RecordingRasterizer())
    quad = other.draw(SizeInfo(5, 5, 10, 10), GraphicsPlacement(_two_tone(4, 4), 0, 0), 0, 0)
    with pytest.raises(KeyError):
        rasterizer.draw(quad, 99)
