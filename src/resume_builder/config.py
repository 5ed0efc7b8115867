"""Runtime settings and logging setup.

Settings are read from environment variables (optionally loaded from a
``.env`` file) each time :func:`get_settings` is called, so overrides
take effect without restarting the process.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from resume_builder.constants.layout_constants import A4_WIDTH_PX, PAGE_MARGIN_PX

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "professional"
DEFAULT_COALESCE_MS = 250
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    page_width: float = A4_WIDTH_PX
    page_margin: float = PAGE_MARGIN_PX
    coalesce_ms: int = DEFAULT_COALESCE_MS
    default_template: str = DEFAULT_TEMPLATE
    log_level: str = "INFO"
    print_command: str | None = None

    @property
    def coalesce_seconds(self) -> float:
        return self.coalesce_ms / 1000


def _env_float(name: str, default: float, *, minimum: float = 0.0) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default
    if value < minimum:
        logger.warning("Ignoring %s=%r: must be >= %s", name, raw, minimum)
        return default
    return value


def get_settings() -> Settings:
    """Return settings resolved from the environment."""
    page_width = _env_float("RESUME_PAGE_WIDTH_PX", A4_WIDTH_PX, minimum=1.0)
    margin = _env_float("RESUME_PAGE_MARGIN_PX", PAGE_MARGIN_PX)
    if 2 * margin >= page_width:
        logger.warning("Ignoring RESUME_PAGE_MARGIN_PX=%s: wider than the page", margin)
        margin = PAGE_MARGIN_PX if 2 * PAGE_MARGIN_PX < page_width else 0.0

    return Settings(
        page_width=page_width,
        page_margin=margin,
        coalesce_ms=int(_env_float("RESUME_COALESCE_MS", DEFAULT_COALESCE_MS)),
        default_template=os.getenv("RESUME_DEFAULT_TEMPLATE", DEFAULT_TEMPLATE).strip().lower()
        or DEFAULT_TEMPLATE,
        log_level=os.getenv("RESUME_LOG_LEVEL", "INFO").upper(),
        print_command=os.getenv("RESUME_PRINT_COMMAND") or None,
    )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the CLI and API entry points."""
    resolved = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
