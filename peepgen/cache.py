"""
Render cache: maps an input fingerprint to a previously written artifact.

The cache is keyed by what was *asked for* (seed, theme, parameters), not by
pixel content, so a hit skips catalog building and rendering entirely.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Dict, Optional, Protocol

from .config import CFG
from .schemas import MEDIA_TYPES, RenderParameters


class RenderCache(Protocol):
    def get(self, fingerprint: str) -> Optional[str]: ...

    def put(self, fingerprint: str, path: str) -> None: ...


def fingerprint(seed: str, theme: str, params: RenderParameters) -> str:
    """Stable SHA-256 over the seed, theme and the remaining parameters."""
    payload = {
        "seed": seed,
        "theme": theme,
        "params": params.model_dump(mode="json", exclude={"seed", "theme"}),
    }
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(blob.encode("utf-8")).hexdigest()


class MemoryRenderCache:
    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def get(self, fingerprint: str) -> Optional[str]:
        path = self._entries.get(fingerprint)
        if path is not None and not Path(path).is_file():
            # Artifact was removed behind our back.
            del self._entries[fingerprint]
            return None
        return path

    def put(self, fingerprint: str, path: str) -> None:
        self._entries[fingerprint] = path

    def __len__(self) -> int:
        return len(self._entries)


class DirectoryRenderCache:
    """
    Uses the output directory itself as the cache: an artifact named
    ``<fingerprint>.<ext>`` is a hit. No index file, no locking; two writers
    racing on one fingerprint produce identical bytes.
    """

    def __init__(self, root: Optional[Path | str] = None):
        self.root = Path(root if root is not None else CFG.output_dir)

    def path_for(self, fingerprint: str, output_format: str = "png") -> Path:
        return self.root / f"{fingerprint}.{output_format}"

    def get(self, fingerprint: str) -> Optional[str]:
        # The fingerprint already covers the output format, so at most one matches.
        for fmt in MEDIA_TYPES:
            path = self.path_for(fingerprint, fmt)
            if path.is_file():
                return str(path)
        return None

    def put(self, fingerprint: str, path: str) -> None:
        artifact = Path(path)
        if artifact.stem != fingerprint or artifact.parent.resolve() != self.root.resolve():
            raise ValueError(f"Artifact {path} is not at its cache location under {self.root}")
