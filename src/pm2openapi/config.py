"""pm2openapi runtime configuration helpers."""

from __future__ import annotations

import logging
import os

from .transpiler import OutputFormat, TransformError

_FORMAT_ENV = "PM2OPENAPI_FORMAT"
_LIVE_ENV = "PM2OPENAPI_LIVE"
_LOG_LEVEL_ENV = "PM2OPENAPI_LOG_LEVEL"

DEFAULT_FORMAT = OutputFormat.YAML
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

LOGGER = logging.getLogger(__name__)


def _env_value(env_name: str) -> str | None:
    value = os.getenv(env_name)
    if not value:
        return None
    return value.strip().lower() or None


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in {"", "0", "false", "no"}:
        return False
    if raw in {"1", "true", "yes"}:
        return True
    return default


def resolve_output_format(preferred: str | OutputFormat | None = None) -> OutputFormat:
    """Resolve the output format requested by CLI flag or environment."""

    requested = preferred or _env_value(_FORMAT_ENV)
    if requested is None:
        fmt = DEFAULT_FORMAT
    else:
        try:
            fmt = OutputFormat.coerce(requested)
        except TransformError as exc:
            raise ValueError(str(exc)) from exc
    LOGGER.debug(
        "resolve_output_format format=%s preferred=%s env=%s",
        fmt.value,
        preferred,
        _env_value(_FORMAT_ENV),
    )
    return fmt


def live_updates_enabled(preferred: bool | None = None) -> bool:
    if preferred is not None:
        return preferred
    return _env_bool(_LIVE_ENV, default=True)


def configure_logging(level: str | None = None) -> int:
    """Install a root handler at ``level`` (or ``PM2OPENAPI_LOG_LEVEL``)."""

    name = (level or os.getenv(_LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{name}'.")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
    return numeric


__all__ = [
    "configure_logging",
    "live_updates_enabled",
    "resolve_output_format",
]
