"""
Pillow raster engine.

The compositor only decides *which* operations run and in *what order*; the
pixel work lives here. SVG assets are rasterized with cairosvg at their
intrinsic size, everything else is decoded by Pillow. All images handed back
are RGBA.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from .colors import RGBA
from .errors import AssetIOError, RenderError

_log = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)

_PIL_FORMATS = {
    "png": "PNG",
    "webp": "WEBP",
    "jpeg": "JPEG",
}


def _svg_to_png(data: bytes) -> bytes:
    # cairosvg needs the native cairo library; import lazily so raster-only
    # themes work on hosts without it.
    try:
        import cairosvg  # type: ignore
    except (ImportError, OSError) as exc:
        raise RenderError(f"SVG assets require cairosvg and libcairo: {exc}") from exc
    return cairosvg.svg2png(bytestring=data)


class PillowEngine:
    """Stateless; one instance can serve concurrent renders."""

    def load(self, path: str) -> Image.Image:
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise AssetIOError(f"Cannot read asset {path}: {exc}") from exc

        try:
            if path.lower().endswith(".svg"):
                data = _svg_to_png(data)
            img = Image.open(io.BytesIO(data))
            img.load()
        except RenderError:
            raise
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise RenderError(f"Cannot decode asset {path}: {exc}") from exc
        except Exception as exc:
            # cairosvg surfaces XML/parse problems with assorted exception types
            raise RenderError(f"Cannot rasterize asset {path}: {exc}") from exc
        return img.convert("RGBA")

    def canvas(self, size: Tuple[int, int], color: RGBA) -> Image.Image:
        return Image.new("RGBA", size, color.to_pil())

    def overlay(self, base: Image.Image, layer: Image.Image, left: int, top: int) -> Image.Image:
        """Alpha-composite *layer* at (left, top); parts outside the canvas are clipped."""
        sheet = Image.new("RGBA", base.size, TRANSPARENT)
        sheet.paste(layer, (left, top))
        return Image.alpha_composite(base, sheet)

    def mirror(self, img: Image.Image) -> Image.Image:
        return ImageOps.mirror(img)

    def rotate(self, img: Image.Image, degrees: float) -> Image.Image:
        # Positive degrees turn clockwise; the canvas grows to fit and the
        # exposed corners stay transparent.
        return img.rotate(
            -degrees,
            resample=Image.BICUBIC,
            expand=True,
            fillcolor=TRANSPARENT,
        )

    def scale(self, img: Image.Image, factor: float) -> Image.Image:
        w, h = img.size
        size = (max(1, round(w * factor)), max(1, round(h * factor)))
        return img.resize(size, Image.LANCZOS)

    def encode(self, img: Image.Image, path: Path, output_format: str) -> None:
        pil_format = _PIL_FORMATS.get(output_format)
        if pil_format is None:
            raise RenderError(f"Unsupported output format: {output_format}")

        if pil_format == "JPEG":
            # No alpha channel in JPEG; flatten onto white.
            flat = Image.new("RGB", img.size, (255, 255, 255))
            flat.paste(img, mask=img.getchannel("A"))
            img = flat

        try:
            with open(path, "wb") as f:
                img.save(f, format=pil_format)
        except OSError as exc:
            raise AssetIOError(f"Cannot write {path}: {exc}") from exc
        except (ValueError, KeyError) as exc:
            raise RenderError(f"Cannot encode {output_format}: {exc}") from exc
