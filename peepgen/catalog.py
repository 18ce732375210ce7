"""
Feature catalog. Resolves requested feature names to ordered, selectable
asset lists for a theme.

A theme is a directory under the assets root with one sub-directory per
feature::

    assets/<theme>/head/*.svg
    assets/<theme>/face/*.png
    assets/<theme>/facial-hair/*.svg

Catalog order is fixed by :data:`FEATURE_SLOTS` and defines the z-index of
each feature, lowest first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Tuple

from .config import CFG
from .errors import AssetIOError, CatalogError

_log = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".svg", ".png", ".jpg", ".jpeg"})


@dataclass(frozen=True)
class FeatureSlot:
    """Static layering metadata for a recognized feature name."""
    name: str
    dir_name: str
    top: Optional[int] = None
    left: Optional[int] = None


# Canonical render order: head is drawn first, facial hair last.
FEATURE_SLOTS: Tuple[FeatureSlot, ...] = (
    FeatureSlot("head", "head"),
    FeatureSlot("face", "face", top=375, left=400),
    FeatureSlot("facialHair", "facial-hair", top=515, left=360),
)

DEFAULT_FEATURES: Tuple[str, ...] = ("head", "face")


@dataclass(frozen=True)
class Feature:
    """A named, z-ordered layer with its candidate asset files."""
    name: str
    z_index: int
    choices: Tuple[str, ...] = field(default_factory=tuple)
    top: Optional[int] = None
    left: Optional[int] = None


class AssetProvider(Protocol):
    def has_theme(self, theme: str) -> bool: ...

    def list_choices(self, theme: str, dir_name: str) -> List[str]: ...

    def themes(self) -> List[str]: ...


def is_image_path(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


class FilesystemAssetProvider:
    """Lists theme assets from ``<root>/<theme>/<feature dir>``."""

    def __init__(self, root: Optional[Path | str] = None):
        self.root = Path(root if root is not None else CFG.assets_dir)

    def has_theme(self, theme: str) -> bool:
        return (self.root / theme).is_dir()

    def themes(self) -> List[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.name for p in self.root.iterdir() if p.is_dir())

    def list_choices(self, theme: str, dir_name: str) -> List[str]:
        """
        Return image files directly inside the feature directory, sorted by
        name so selection stays stable across runs and platforms.
        """
        feature_dir = self.root / theme / dir_name
        if not feature_dir.is_dir():
            raise CatalogError(f"Feature directory not found: {feature_dir}")
        try:
            entries = list(feature_dir.iterdir())
        except OSError as exc:
            raise AssetIOError(f"Cannot list {feature_dir}: {exc}") from exc
        images = [p for p in entries if p.is_file() and is_image_path(p)]
        return [str(p) for p in sorted(images, key=lambda p: p.name)]


def resolve_slots(requested: Optional[Iterable[str]]) -> List[FeatureSlot]:
    """Map requested names to slots in canonical order, dropping unknown names."""
    wanted = {name.strip() for name in (requested or ()) if name and name.strip()}
    if not wanted:
        wanted = set(DEFAULT_FEATURES)

    known = {slot.name for slot in FEATURE_SLOTS}
    unknown = wanted - known
    if unknown:
        _log.debug("Ignoring unknown features: %s", sorted(unknown))

    return [slot for slot in FEATURE_SLOTS if slot.name in wanted]


def build_catalog(
    theme: Optional[str],
    requested_features: Optional[Iterable[str]] = None,
    provider: Optional[AssetProvider] = None,
) -> List[Feature]:
    """Build the ordered feature list for *theme*."""
    theme = theme or CFG.default_theme
    provider = provider or FilesystemAssetProvider()

    if not provider.has_theme(theme):
        raise CatalogError(f"Unknown theme: '{theme}'")

    features: list[Feature] = []
    for z_index, slot in enumerate(resolve_slots(requested_features)):
        choices = provider.list_choices(theme, slot.dir_name)
        if not choices:
            raise CatalogError(
                f"Feature '{slot.name}' of theme '{theme}' has no usable assets "
                f"(supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))})"
            )
        features.append(
            Feature(
                name=slot.name,
                z_index=z_index,
                choices=tuple(choices),
                top=slot.top,
                left=slot.left,
            )
        )

    _log.debug("Catalog for theme '%s': %s", theme, [f.name for f in features])
    return features


def available_themes(provider: Optional[AssetProvider] = None) -> List[str]:
    return (provider or FilesystemAssetProvider()).themes()
