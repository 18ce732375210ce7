#!/usr/bin/env python3
"""
peepgen command line.

Positional arguments follow the historical order; every one is optional and
``-`` (or an empty string) leaves it unset::

    peepgen [seed] [theme] [mirror] [rotate] [background] [skincolor]
            [hairColor] [scale] [translateX] [translateY] [features]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .audit import configure_logging
from .catalog import FilesystemAssetProvider, available_themes
from .compositor import Compositor
from .config import CFG
from .errors import PeepgenError
from .schemas import build_params
from .service import generate_avatar

_log = logging.getLogger(__name__)

POSITIONALS = (
    ("seed", "Selection seed (random when omitted)"),
    ("theme", f"Asset theme (default: {CFG.default_theme})"),
    ("mirror", "'true' to mirror the final image"),
    ("rotate", "Rotation in degrees, clockwise"),
    ("background", "Background hex color (default: #ffffff)"),
    ("skincolor", "Skin hex color"),
    ("hairColor", "Hair hex color"),
    ("scale", "Output size multiplier"),
    ("translateX", "Horizontal layer offset in pixels"),
    ("translateY", "Vertical layer offset in pixels"),
    ("features", "Comma-separated features: head,face,facialHair"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="peepgen",
        description="Generate a deterministic layered avatar from a seed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s foo                                  # head + face for seed 'foo'
  %(prog)s foo open-peeps true 15               # mirrored, rotated 15 degrees
  %(prog)s foo - - - "#ffcc00" - - 0.5          # yellow background, half size
  %(prog)s foo - - - - - - - - - head,facialHair
        """,
    )
    for name, help_text in POSITIONALS:
        parser.add_argument(name, nargs="?", default=None, help=help_text)

    parser.add_argument(
        "--format",
        choices=["png", "webp", "jpeg"],
        default=None,
        help="Output image format (default: png)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help=f"Where rendered files are written (default: {CFG.output_dir})",
    )
    parser.add_argument(
        "--assets-dir",
        type=Path,
        help="Override the theme assets root",
    )
    parser.add_argument(
        "--list-themes",
        action="store_true",
        help="Print available themes and exit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else CFG.log_level)

    provider = FilesystemAssetProvider(args.assets_dir)

    if args.list_themes:
        for theme in available_themes(provider):
            print(theme)
        return 0

    try:
        params = build_params(
            seed=args.seed,
            theme=args.theme,
            mirror=args.mirror,
            rotate=args.rotate,
            background=args.background,
            skin_color=args.skincolor,
            hair_color=args.hairColor,
            scale=args.scale,
            translate_x=args.translateX,
            translate_y=args.translateY,
            features=[args.features] if args.features else [],
            output_format=args.format,
        )
        path = generate_avatar(
            params,
            provider=provider,
            compositor=Compositor(output_dir=args.output_dir),
        )
    except (PeepgenError, ValidationError, OSError) as e:
        _log.debug("Generation failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
