"""
peepgen — request parameters and response models.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .colors import RGBA, hex_to_rgba
from .config import CFG

_log = logging.getLogger(__name__)

OutputFormat = Literal["png", "webp", "jpeg"]

MEDIA_TYPES = {
    "png": "image/png",
    "webp": "image/webp",
    "jpeg": "image/jpeg",
}

DEFAULT_BACKGROUND = "#ffffff"


class Palette(BaseModel):
    model_config = ConfigDict(frozen=True)

    background: RGBA
    skin: Optional[RGBA] = None
    hair: Optional[RGBA] = None


class RenderParameters(BaseModel):
    """Everything a single render depends on. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    seed: Optional[str] = Field(default=None, description="Selection seed; random when absent")
    theme: str = Field(default_factory=lambda: CFG.default_theme)
    features: Tuple[str, ...] = Field(default=(), description="Feature names; empty => head, face")
    mirror: bool = False
    rotate: float = Field(default=0, description="Degrees, applied to the final composite")
    scale: Optional[float] = Field(default=None, gt=0, description="Canvas size multiplier")
    translate_x: float = 0
    translate_y: float = 0
    background: str = DEFAULT_BACKGROUND
    skin_color: Optional[str] = None
    hair_color: Optional[str] = None
    output_format: OutputFormat = "png"

    @field_validator("seed", mode="before")
    @classmethod
    def _blank_seed_is_absent(cls, v):
        if v is None or (isinstance(v, str) and v == ""):
            return None
        return v

    @field_validator("theme", mode="before")
    @classmethod
    def _blank_theme_is_default(cls, v):
        return v or CFG.default_theme

    @field_validator("background", mode="before")
    @classmethod
    def _blank_background_is_default(cls, v):
        return v or DEFAULT_BACKGROUND

    @field_validator("features", mode="before")
    @classmethod
    def _normalize_features(cls, v):
        return tuple(sorted(set(split_features(v))))

    def with_seed(self, seed: str) -> "RenderParameters":
        return self.model_copy(update={"seed": seed})

    def palette(self) -> Palette:
        """Parse every color override; raises ``ColorParseError`` on bad hex."""
        return Palette(
            background=hex_to_rgba(self.background),
            skin=hex_to_rgba(self.skin_color) if self.skin_color else None,
            hair=hex_to_rgba(self.hair_color) if self.hair_color else None,
        )

    @property
    def media_type(self) -> str:
        return MEDIA_TYPES[self.output_format]


# ---------------------------------------------------------------------------
# Loose input coercion shared by the CLI and the HTTP handler
# ---------------------------------------------------------------------------

_UNSET = ("", "-")


def split_features(value: Union[None, str, Iterable[str]]) -> List[str]:
    """Accept ``"head,face"``, ``["head", "face"]`` or a mix of both."""
    if value is None:
        return []
    items = [value] if isinstance(value, str) else list(value)
    names: list[str] = []
    for item in items:
        names.extend(part.strip() for part in str(item).split(",") if part.strip())
    return names


def coerce_bool(raw: Optional[str]) -> bool:
    return raw == "true"


def coerce_number(raw: Optional[str], kind: type = float, name: str = "") -> Optional[float]:
    """
    Parse a numeric argument. Missing or unparsable values count as unset,
    the same way the HTTP query and CLI positional arguments always behaved.
    """
    if raw is None or raw in _UNSET:
        return None
    try:
        value = float(raw)
    except ValueError:
        _log.warning("Ignoring non-numeric %s=%r", name or "value", raw)
        return None
    if not math.isfinite(value):
        _log.warning("Ignoring non-finite %s=%r", name or "value", raw)
        return None
    return int(value) if kind is int else value


def coerce_text(raw: Optional[str]) -> Optional[str]:
    if raw is None or raw in _UNSET:
        return None
    return raw


def build_params(
    *,
    seed: Optional[str],
    theme: Optional[str],
    mirror: Optional[str],
    rotate: Optional[str],
    background: Optional[str],
    skin_color: Optional[str],
    hair_color: Optional[str],
    scale: Optional[str],
    translate_x: Optional[str],
    translate_y: Optional[str],
    features: List[str],
    output_format: Optional[str] = None,
) -> RenderParameters:
    """Coerce raw string inputs into :class:`RenderParameters`; unset values take defaults."""
    raw = {
        "seed": coerce_text(seed),
        "theme": coerce_text(theme),
        "mirror": coerce_bool(mirror),
        "rotate": coerce_number(rotate, int, "rotate"),
        "background": coerce_text(background),
        "skin_color": coerce_text(skin_color),
        "hair_color": coerce_text(hair_color),
        "scale": coerce_number(scale, float, "scale"),
        "translate_x": coerce_number(translate_x, int, "translateX"),
        "translate_y": coerce_number(translate_y, int, "translateY"),
        "features": split_features(features),
        "output_format": coerce_text(output_format),
    }
    return RenderParameters(**{k: v for k, v in raw.items() if v is not None})
