"""image-tiler: render an image as a mosaic of tile polygons.

    image-tiler [--jpeg | --png | --svg] [-t INDEX] [-s SCALE] [-a ANGLE] input output
    image-tiler --list
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from tiler.config import settings
from tiler.engine.ordering import Order
from tiler.image.io import format_for_path, read_image
from tiler.render import OutputFormat, RenderOptions, render_mosaic
from tiler.tiles.catalog import create_tile_catalog, get_tile

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-tiler",
        description="Render an image as a mosaic of plane-tiling polygons",
    )
    parser.add_argument("input", nargs="?", help="Source image (any format Pillow reads)")
    parser.add_argument("output", nargs="?", help="Output file")

    fmt = parser.add_mutually_exclusive_group()
    fmt.add_argument("-j", "--jpeg", dest="format", action="store_const", const=OutputFormat.JPEG,
                     help="Write a JPEG raster")
    fmt.add_argument("-p", "--png", dest="format", action="store_const", const=OutputFormat.PNG,
                     help="Write a PNG raster")
    fmt.add_argument("--svg", dest="format", action="store_const", const=OutputFormat.SVG,
                     help="Write SVG polygons")

    parser.add_argument("-l", "--list", action="store_true", help="List the tilings and exit")
    parser.add_argument("-t", "--tile-index", default=str(settings.default_tile_index),
                        help="Tiling index or name (default: %(default)s)")
    parser.add_argument("-s", "--scale", type=float, default=settings.default_scale,
                        help="Tile scale in pixels (default: %(default)s)")
    parser.add_argument("-a", "--angle", type=float, default=settings.default_angle,
                        help="Tile rotation in degrees (default: %(default)s)")
    parser.add_argument("-x", "--x-offset", type=float, default=0.0, help="Lattice origin x offset")
    parser.add_argument("-y", "--y-offset", type=float, default=0.0, help="Lattice origin y offset")
    parser.add_argument("--order", choices=[o.value for o in Order], default=Order.INSTANTIATION.value,
                        help="Drawing order of the tiles")
    parser.add_argument("--outline", action="store_true", help="Stroke tile outlines on raster output")
    parser.add_argument("--shuffle", action="store_true", help="Randomly permute tile colors")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --shuffle")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline diagnostics")
    return parser


def _output_format(args: argparse.Namespace) -> OutputFormat:
    if args.format is not None:
        return args.format
    if Path(args.output).suffix.lower() == ".svg":
        return OutputFormat.SVG
    return OutputFormat(format_for_path(args.output).lower())


def run(args: argparse.Namespace) -> int:
    catalog = create_tile_catalog()

    if args.list:
        for tile in catalog:
            print(f"[{tile.index}]\t{tile.name}")
        return 0

    if not args.input:
        raise ValueError("no input filename specified")
    if not args.output:
        raise ValueError("no output filename specified")

    tile = get_tile(catalog, args.tile_index)
    fmt = _output_format(args)
    options = RenderOptions(
        scale=args.scale,
        angle=args.angle,
        offset=(args.x_offset, args.y_offset),
        order=Order(args.order),
        outline=args.outline,
        shuffle=args.shuffle,
        seed=args.seed,
    )

    image = read_image(args.input)
    result = render_mosaic(image, tile, fmt, options, min_scale=settings.min_tile_scale)

    out = Path(args.output)
    try:
        if isinstance(result.data, str):
            out.write_text(result.data, encoding="utf-8")
        else:
            out.write_bytes(result.data)
    except OSError as e:
        raise OSError(f"could not open file for writing: {out}") from e
    logger.info("writing %s", out)
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(logging, settings.tiler_log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        return run(args)
    except (ValueError, OSError) as e:
        logger.error("%s", e)
        print(f"image-tiler: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
