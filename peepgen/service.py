"""
Request orchestration.

One call per CLI invocation or HTTP request:

  1. default the seed (random when absent),
  2. validate colors and fingerprint the request,
  3. return the cached artifact if one exists,
  4. otherwise build the catalog and render.
"""

from __future__ import annotations

import logging
from typing import Optional

from .audit import audit_event
from .cache import DirectoryRenderCache, RenderCache, fingerprint
from .catalog import AssetProvider, build_catalog
from .compositor import Compositor
from .schemas import RenderParameters
from .seeding import random_seed

_log = logging.getLogger(__name__)


def generate_avatar(
    params: RenderParameters,
    *,
    provider: Optional[AssetProvider] = None,
    cache: Optional[RenderCache] = None,
    compositor: Optional[Compositor] = None,
) -> str:
    """Return the path of the rendered (or previously rendered) avatar."""
    compositor = compositor or Compositor()
    if cache is None:
        cache = DirectoryRenderCache(compositor.output_dir)

    if params.seed is None:
        params = params.with_seed(random_seed())
        audit_event("random_seed", seed=params.seed)
    seed = params.seed

    # Fail on bad colors before touching the cache or the assets.
    params.palette()

    key = fingerprint(seed, params.theme, params)
    cached = cache.get(key)
    if cached:
        _log.info("File exists: %s", cached)
        audit_event("cache_hit", fingerprint=key, path=cached)
        return cached

    audit_event(
        "render_request",
        seed=seed,
        theme=params.theme,
        features=list(params.features),
        fingerprint=key,
    )
    catalog = build_catalog(params.theme, params.features, provider)
    path = compositor.render(catalog, seed, params, fingerprint=key)
    cache.put(key, path)
    return path
