"""
peepgen — FastAPI router.

``GET /`` renders (or fetches from cache) one avatar and returns the image
bytes. Query names match the CLI, including the historical ``transalteX`` /
``transalteY`` spelling.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Query
from fastapi.responses import FileResponse, PlainTextResponse, Response

from .schemas import build_params, split_features
from .service import generate_avatar

_log = logging.getLogger(__name__)

router = APIRouter(tags=["avatars"])


@router.get("/")
def render_avatar(
    seed: Optional[str] = None,
    theme: Optional[str] = None,
    mirror: Optional[str] = None,
    rotate: Optional[str] = None,
    background: Optional[str] = None,
    skincolor: Optional[str] = None,
    hairColor: Optional[str] = None,
    scale: Optional[str] = None,
    transalteX: Optional[str] = None,
    transalteY: Optional[str] = None,
    translateX: Optional[str] = None,
    translateY: Optional[str] = None,
    features_list: List[str] = Query(default=[], alias="features[]"),
    features: Optional[str] = None,
    output_format: Optional[str] = Query(default=None, alias="format"),
) -> Response:
    try:
        params = build_params(
            seed=seed,
            theme=theme,
            mirror=mirror,
            rotate=rotate,
            background=background,
            skin_color=skincolor,
            hair_color=hairColor,
            scale=scale,
            translate_x=transalteX if transalteX is not None else translateX,
            translate_y=transalteY if transalteY is not None else translateY,
            features=features_list + split_features(features),
            output_format=output_format,
        )
        path = generate_avatar(params)
    except Exception as exc:
        _log.exception("Avatar generation failed")
        return PlainTextResponse(
            f"An error occurred while generating the image.: {exc}",
            status_code=500,
        )

    return FileResponse(path, media_type=params.media_type)

