"""
peepgen HTTP service.

Run with ``peepgen-server`` or ``uvicorn peepgen.main:app``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .audit import configure_logging
from .config import CFG
from .router import router

_log = logging.getLogger(__name__)

app = FastAPI(title="peepgen", version=__version__)
app.include_router(router)


@app.exception_handler(StarletteHTTPException)
async def invalid_request_handler(request: Request, exc: StarletteHTTPException):
    # No routing table beyond "/": unknown paths and methods are plain 500s.
    return PlainTextResponse(f"Invalid request.: {request.url.path}", status_code=500)


def run() -> None:
    import uvicorn

    configure_logging(CFG.log_level)
    _log.info("Server running on port %s", CFG.port)
    uvicorn.run(app, host="0.0.0.0", port=CFG.port)


if __name__ == "__main__":
    run()
