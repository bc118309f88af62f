from __future__ import annotations

from PIL import Image

from ..protocol.types import RasterAsset


def raster_to_image(asset: RasterAsset) -> Image.Image:
    asset.validate()
    if asset.width == 0 or asset.height == 0:
        raise ValueError("Raster has no pixels to convert")
    return Image.frombytes("RGB", (asset.width, asset.height), asset.rgb)


def image_to_raster(img: Image.Image, graphics_id: int, cell_height: int = 0) -> RasterAsset:
    if img.mode != "RGB":
        img = img.convert("RGB")
    return RasterAsset(
        id=graphics_id,
        width=img.width,
        height=img.height,
        rgb=img.tobytes(),
        cell_height=cell_height,
    )
