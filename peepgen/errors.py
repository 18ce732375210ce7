"""
peepgen errors.

Every failure is terminal for the request that raised it; the CLI turns these
into a non-zero exit and the HTTP layer into a 500 response.
"""

from __future__ import annotations


class PeepgenError(Exception):
    """Base class for all avatar generation failures."""


class CatalogError(PeepgenError):
    """Theme or feature directory is missing, or a feature has no usable assets."""


class ColorParseError(PeepgenError, ValueError):
    """A color override is not a valid 3- or 6-digit hex string."""


class HashError(PeepgenError, TypeError):
    """The seed cannot be hashed."""


class RenderError(PeepgenError):
    """An asset could not be decoded, transformed or encoded."""


class AssetIOError(PeepgenError, OSError):
    """Reading assets or writing the rendered artifact failed."""
