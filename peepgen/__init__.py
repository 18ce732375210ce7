"""
peepgen — deterministic layered avatars from a seed string.

A seed picks one asset per feature (head, face, facial hair) of a theme, the
picks are stacked on a colored canvas, optionally mirrored, rotated and
scaled, and the result is written to a fingerprint-named file that doubles as
the render cache.
"""

__version__ = "0.1.0"

from .catalog import Feature, build_catalog
from .colors import RGBA, hex_to_rgba
from .compositor import Compositor
from .schemas import RenderParameters
from .seeding import select_choices, string_hash
from .service import generate_avatar

__all__ = [
    "Compositor",
    "Feature",
    "RGBA",
    "RenderParameters",
    "build_catalog",
    "generate_avatar",
    "hex_to_rgba",
    "select_choices",
    "string_hash",
]
