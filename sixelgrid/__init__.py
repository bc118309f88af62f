from .models import TerminalProfile, TerminalProfileRegistry
from .protocol import Color, RasterAsset, SixelDecoder, decode_sixel
from .rendering import GraphicsPlacement, Quad, SizeInfo, Vertex, map_cell_quad

__all__ = [
    "Color",
    "GraphicsPlacement",
    "Quad",
    "RasterAsset",
    "SizeInfo",
    "SixelDecoder",
    "TerminalProfile",
    "TerminalProfileRegistry",
    "Vertex",
    "decode_sixel",
    "map_cell_quad",
]
