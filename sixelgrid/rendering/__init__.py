from .compositor import GraphicsRenderer, PillowRasterizer, Rasterizer
from .placement import cell_span, iter_cell_placements
from .quad import GraphicsPlacement, Quad, SizeInfo, Vertex, map_cell_quad
from .renderer import image_to_raster, raster_to_image

__all__ = [
    "GraphicsPlacement",
    "GraphicsRenderer",
    "PillowRasterizer",
    "Quad",
    "Rasterizer",
    "SizeInfo",
    "Vertex",
    "cell_span",
    "image_to_raster",
    "iter_cell_placements",
    "map_cell_quad",
    "raster_to_image",
]
