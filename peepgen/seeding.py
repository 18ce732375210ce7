"""
Seed hashing and per-feature choice selection.

The hash is the classic ``s[0]*31^(n-1) + ... + s[n-1]`` string hash with
signed 32-bit wraparound, computed over UTF-16 code units. Existing seeds
depend on this exact arithmetic, including the fact that one hash value is
shared by every feature.
"""

from __future__ import annotations

import random
import string
from typing import TYPE_CHECKING, List, Sequence, Tuple

from .errors import CatalogError, HashError

if TYPE_CHECKING:
    from .catalog import Feature

_MASK_32 = 0xFFFFFFFF
_SEED_ALPHABET = string.ascii_lowercase + string.digits


def _to_int32(value: int) -> int:
    value &= _MASK_32
    return value - 0x100000000 if value & 0x80000000 else value


def string_hash(seed: str) -> int:
    """Return the signed 32-bit rolling hash of *seed* (``0`` for ``""``)."""
    if not isinstance(seed, str):
        raise HashError(f"Seed must be a string, got {type(seed).__name__}")
    try:
        units = seed.encode("utf-16-le", "surrogatepass")
    except UnicodeEncodeError as exc:
        raise HashError(f"Seed cannot be hashed: {exc}") from exc

    h = 0
    for i in range(0, len(units), 2):
        h = _to_int32(h * 31 + (units[i] | units[i + 1] << 8))
    return h


def seed_index(seed: str) -> int:
    """Non-negative selector shared by every feature for this seed."""
    return abs(string_hash(seed))


def choice_index(selector: int, choice_count: int, feature_name: str = "") -> int:
    if choice_count <= 0:
        raise CatalogError(f"Feature '{feature_name}' has no choices to select from")
    return selector % choice_count


def select_choices(features: Sequence[Feature], seed: str) -> List[str]:
    """Pick one asset path per feature, in catalog order."""
    return [path for _, path in select_features(features, seed)]


def select_features(features: Sequence[Feature], seed: str) -> List[Tuple[Feature, str]]:
    """Like :func:`select_choices` but keeps each feature next to its pick."""
    selector = seed_index(seed)
    picks = []
    for feature in features:
        idx = choice_index(selector, len(feature.choices), feature.name)
        picks.append((feature, feature.choices[idx]))
    return picks


def random_seed(length: int = 10) -> str:
    """Fresh seed for requests that did not supply one (non-deterministic path)."""
    return "".join(random.choices(_SEED_ALPHABET, k=length))
