"""
peepgen — audit logging for render traceability.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("peepgen")


def audit_event(event: str, **kwargs: object) -> None:
    """Log a structured audit event."""
    logger.info("peepgen_event=%s %s", event, kwargs)


def configure_logging(level: str = "INFO") -> None:
    """Install a basic root handler; entry points call this once."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
