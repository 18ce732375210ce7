"""
peepgen configuration — reads from environment variables with safe defaults.
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, field

# Repository root (one level above the package); bundled themes live here.
_PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class PeepgenConfig:
    """Immutable config read once at import time."""

    assets_dir: str = field(
        default_factory=lambda: os.getenv("PEEPGEN_ASSETS_DIR", str(_PROJECT_ROOT / "assets"))
    )
    output_dir: str = field(
        default_factory=lambda: os.getenv("PEEPGEN_OUTPUT_DIR", "_output")
    )
    default_theme: str = field(
        default_factory=lambda: os.getenv("PEEPGEN_DEFAULT_THEME", "open-peeps").strip()
    )
    # Base canvas edge in pixels (the canvas is square).
    canvas_size: int = field(
        default_factory=lambda: int(os.getenv("PEEPGEN_CANVAS_SIZE", "1000"))
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("PEEPGEN_LOG_LEVEL", "INFO").upper()
    )
    port: int = field(
        default_factory=lambda: int(os.getenv("PORT", "3000"))
    )


CFG = PeepgenConfig()
