"""
Deterministic compositor.

Given a catalog and a seed, picks one asset per feature, stacks the picks
bottom-to-top on a colored canvas and applies whole-image transforms in a
fixed order:

    mirror  ->  rotate  ->  scale

Transforms are applied once to the finished composite, never per layer, so
every layer is placed on the same base canvas geometry.
"""

from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .audit import audit_event
from .cache import fingerprint as make_fingerprint
from .catalog import Feature
from .config import CFG
from .engine import PillowEngine
from .errors import AssetIOError, PeepgenError, RenderError
from .schemas import Palette, RenderParameters
from .seeding import select_features

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Layer:
    """One selected asset and where it lands on the canvas."""
    feature: str
    z_index: int
    path: str
    left: int = 0
    top: int = 0


def plan_layers(catalog: Sequence[Feature], seed: str, params: RenderParameters) -> List[Layer]:
    """Selection + placement, sorted by z-index (bottom first)."""
    dx = round(params.translate_x)
    dy = round(params.translate_y)
    layers = [
        Layer(
            feature=feature.name,
            z_index=feature.z_index,
            path=path,
            left=(feature.left or 0) + dx,
            top=(feature.top or 0) + dy,
        )
        for feature, path in select_features(catalog, seed)
    ]
    return sorted(layers, key=lambda layer: layer.z_index)


def transform_steps(params: RenderParameters) -> List[Tuple[str, Optional[float]]]:
    """Whole-image operations requested by *params*, in application order."""
    steps: list[tuple[str, Optional[float]]] = []
    if params.mirror:
        steps.append(("mirror", None))
    if params.rotate:
        steps.append(("rotate", params.rotate))
    if params.scale and params.scale != 1:
        steps.append(("scale", params.scale))
    return steps


class Compositor:
    def __init__(
        self,
        output_dir: Optional[Path | str] = None,
        canvas_size: Optional[int] = None,
        engine=None,
    ):
        self.output_dir = Path(output_dir if output_dir is not None else CFG.output_dir)
        self.canvas_size = canvas_size or CFG.canvas_size
        self.engine = engine or PillowEngine()

    def compose(self, layers: Sequence[Layer], palette: Palette, params: RenderParameters):
        """Build the in-memory image: canvas, layers, then transforms."""
        engine = self.engine
        image = engine.canvas((self.canvas_size, self.canvas_size), palette.background)
        for layer in layers:
            image = engine.overlay(image, engine.load(layer.path), layer.left, layer.top)

        for op, arg in transform_steps(params):
            if op == "mirror":
                image = engine.mirror(image)
            elif op == "rotate":
                image = engine.rotate(image, arg)
            elif op == "scale":
                image = engine.scale(image, arg)
        return image

    def render(
        self,
        catalog: Sequence[Feature],
        seed: str,
        params: RenderParameters,
        fingerprint: Optional[str] = None,
    ) -> str:
        """
        Render *catalog* for *seed* and write the artifact.

        The file is named after the input fingerprint and appears atomically;
        a failed render leaves nothing behind.
        """
        palette = params.palette()
        fingerprint = fingerprint or make_fingerprint(seed, params.theme, params)
        layers = plan_layers(catalog, seed, params)
        _log.debug("Layers for seed %r: %s", seed, [(layer.feature, layer.path) for layer in layers])

        try:
            image = self.compose(layers, palette, params)
        except PeepgenError:
            raise
        except Exception as exc:
            raise RenderError(f"Compositing failed: {exc}") from exc

        return self._write(image, fingerprint, params.output_format)

    def _write(self, image, fingerprint: str, output_format: str) -> str:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise AssetIOError(f"Cannot create output directory {self.output_dir}: {exc}") from exc

        final = self.output_dir / f"{fingerprint}.{output_format}"
        tmp = self.output_dir / f".{fingerprint}.{uuid.uuid4().hex[:8]}.tmp"
        try:
            self.engine.encode(image, tmp, output_format)
            os.replace(tmp, final)
        except PeepgenError:
            tmp.unlink(missing_ok=True)
            raise
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise AssetIOError(f"Cannot write {final}: {exc}") from exc
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

        audit_event("render_written", path=str(final), format=output_format)
        return str(final)
