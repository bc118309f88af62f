from __future__ import annotations

import logging
from typing import Dict, Hashable, Optional, Tuple

from PIL import Image

from ..protocol.types import RasterAsset
from .quad import GraphicsPlacement, Quad, SizeInfo, map_cell_quad
from .renderer import raster_to_image

logger = logging.getLogger(__name__)

TextureHandle = Hashable


class Rasterizer:
    def upload(self, asset: RasterAsset) -> TextureHandle:
        raise NotImplementedError

    def draw(self, quad: Quad, texture: TextureHandle) -> None:
        raise NotImplementedError


class PillowRasterizer(Rasterizer):
    """Software rasterizer compositing quads onto a Pillow canvas.

    Device coordinate -1 is the top/left edge of the canvas, matching the
    row order of the grid.
    """

    def __init__(
        self,
        screen_width: int,
        screen_height: int,
        background: Tuple[int, int, int] = (0, 0, 0),
    ) -> None:
        self.canvas = Image.new("RGB", (screen_width, screen_height), background)
        self._textures: Dict[int, Image.Image] = {}
        self._next_handle = 1
        self.draw_calls = 0

    def upload(self, asset: RasterAsset) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._textures[handle] = raster_to_image(asset)
        logger.debug("Uploaded image %d as texture %d", asset.id, handle)
        return handle

    def draw(self, quad: Quad, texture: TextureHandle) -> None:
        image = self._textures.get(texture)
        if image is None:
            raise KeyError(f"Unknown texture handle: {texture!r}")
        top_left = quad.top_left
        bottom_right = quad.bottom_right
        left = self._to_pixel(top_left.x, self.canvas.width)
        top = self._to_pixel(top_left.y, self.canvas.height)
        right = self._to_pixel(bottom_right.x, self.canvas.width)
        bottom = self._to_pixel(bottom_right.y, self.canvas.height)
        box = (
            int(round(top_left.tx * image.width)),
            int(round(top_left.ty * image.height)),
            int(round(bottom_right.tx * image.width)),
            int(round(bottom_right.ty * image.height)),
        )
        self.draw_calls += 1
        if right <= left or bottom <= top or box[2] <= box[0] or box[3] <= box[1]:
            return
        region = image.crop(box)
        size = (right - left, bottom - top)
        if region.size != size:
            region = region.resize(size, Image.NEAREST)
        self.canvas.paste(region, (left, top))

    @staticmethod
    def _to_pixel(value: float, extent: int) -> int:
        return int(round((value + 1.0) * extent / 2.0))


class GraphicsRenderer:
    """Draws grid cells through a rasterizer, uploading each image once.

    ``texture_map`` is only touched from the rendering path and is not
    synchronized.
    """

    def __init__(self, rasterizer: Rasterizer) -> None:
        self.rasterizer = rasterizer
        self.texture_map: Dict[int, TextureHandle] = {}

    def get_texture(self, graphics_id: int) -> Optional[TextureHandle]:
        return self.texture_map.get(graphics_id)

    def add_image(self, asset: RasterAsset) -> TextureHandle:
        handle = self.texture_map.get(asset.id)
        if handle is None:
            handle = self.rasterizer.upload(asset)
            self.texture_map[asset.id] = handle
        return handle

    def draw(self, size_info: SizeInfo, placement: GraphicsPlacement, line: int, column: int) -> Quad:
        handle = self.add_image(placement.asset)
        quad = map_cell_quad(size_info, placement, line, column)
        self.rasterizer.draw(quad, handle)
        return quad
