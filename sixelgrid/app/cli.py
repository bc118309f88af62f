from __future__ import annotations

import argparse
import itertools
import logging
import os
import sys
from typing import List, Optional, Sequence

from ..models import TerminalProfileRegistry
from ..protocol import RasterAsset, SixelDecoder
from ..rendering import (
    GraphicsRenderer,
    PillowRasterizer,
    Quad,
    SizeInfo,
    iter_cell_placements,
    map_cell_quad,
    raster_to_image,
)
from ..settings import DEFAULT_PROFILE, RenderSettings

logger = logging.getLogger(__name__)

_graphics_ids = itertools.count(1)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="sixelgrid: decode sixel graphics and lay them out on a character-cell grid."
    )
    parser.add_argument("path", nargs="?", help="File holding a sixel body (DCS framing removed)")
    parser.add_argument("--output", "-o", metavar="PNG", help="Save the decoded image as PNG")
    parser.add_argument("--screen", metavar="PNG", help="Composite the image onto a terminal screen and save it")
    parser.add_argument("--quads", action="store_true", help="Print the quad generated for every covered cell")
    parser.add_argument("--profile", default=DEFAULT_PROFILE, help=f"Terminal profile (default: {DEFAULT_PROFILE})")
    parser.add_argument("--line", type=int, default=0, help="Grid line the image is inserted at")
    parser.add_argument("--column", type=int, default=0, help="Grid column the image is inserted at")
    parser.add_argument("--cell-width", type=int, help="Override the profile cell width in pixels")
    parser.add_argument("--cell-height", type=int, help="Override the profile cell height in pixels")
    parser.add_argument("--list-profiles", action="store_true", help="List known terminal profiles and exit")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    return parser.parse_args(argv)


def list_profiles() -> int:
    registry = TerminalProfileRegistry.load()
    for profile in registry.profiles:
        print(
            f"{profile.name}: {profile.columns}x{profile.rows} cells of "
            f"{profile.cell_width}x{profile.cell_height} px ({profile.screen_width}x{profile.screen_height})"
        )
    return 0


def decode_file(path: str) -> SixelDecoder:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "rb") as handle:
        data = handle.read()
    decoder = SixelDecoder()
    decoder.feed(data)
    return decoder


def format_quad(line: int, column: int, quad: Quad) -> str:
    points = " ".join(f"({v.x:.4f},{v.y:.4f}|{v.tx:.4f},{v.ty:.4f})" for v in quad)
    return f"{line:>4} {column:>4} {points}"


def print_quads(asset: RasterAsset, size_info: SizeInfo, line: int, column: int) -> None:
    for cell_line, cell_column, placement in iter_cell_placements(asset, line, column, size_info):
        quad = map_cell_quad(size_info, placement, cell_line, cell_column)
        print(format_quad(cell_line, cell_column, quad))


def render_screen(asset: RasterAsset, size_info: SizeInfo, line: int, column: int, path: str) -> int:
    rasterizer = PillowRasterizer(int(size_info.screen_width), int(size_info.screen_height))
    renderer = GraphicsRenderer(rasterizer)
    drawn = 0
    for cell_line, cell_column, placement in iter_cell_placements(asset, line, column, size_info):
        if cell_line * size_info.cell_height >= size_info.screen_height:
            break
        if cell_column * size_info.cell_width >= size_info.screen_width:
            continue
        renderer.draw(size_info, placement, cell_line, cell_column)
        drawn += 1
    rasterizer.canvas.save(path)
    return drawn


def summarize(decoder: SixelDecoder, asset: RasterAsset) -> List[str]:
    stats = decoder.stats
    lines = [
        f"image {asset.id}: {asset.width}x{asset.height}, {len(decoder.colors)} palette entries",
        f"aspect {decoder.aspect[0]}:{decoder.aspect[1]}",
    ]
    if stats.recovered or stats.skipped_pixels:
        lines.append(
            "recovered from malformed input: "
            f"{stats.unhandled_bytes} unhandled bytes, {stats.invalid_colors} invalid colors, "
            f"{stats.column_clamps} column clamps, {stats.skipped_pixels} clipped pixels, "
            f"{stats.oversized_images} oversized images"
        )
    return lines


def run(args: argparse.Namespace) -> int:
    registry = TerminalProfileRegistry.load()
    settings = RenderSettings(
        profile=args.profile,
        cell_width=args.cell_width,
        cell_height=args.cell_height,
        line=args.line,
        column=args.column,
    )
    profile = registry.require(settings.profile)
    size_info = settings.resolve_size_info(profile)

    decoder = decode_file(args.path)
    asset = decoder.finish(next(_graphics_ids), int(size_info.cell_height))
    if args.output:
        raster_to_image(asset).save(args.output)
        logger.info("Wrote %s", args.output)
    if args.quads:
        print_quads(asset, size_info, settings.line, settings.column)
    if args.screen:
        drawn = render_screen(asset, size_info, settings.line, settings.column, args.screen)
        logger.info("Drew %d cells into %s", drawn, args.screen)
    for line in summarize(decoder, asset):
        print(line)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    if args.list_profiles:
        return list_profiles()
    if not args.path:
        print("Missing sixel file path. Use --help for usage.", file=sys.stderr)
        return 2
    try:
        return run(args)
    except Exception as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
