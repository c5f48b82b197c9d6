from __future__ import annotations
import logging
import os

_TRUTHY = {"1", "true", "yes", "on"}

# Defaults
_DEFAULT_LOG_LEVEL = "WARNING"


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if not raw:
        return default
    return raw.strip().lower() in _TRUTHY


def trace_enabled() -> bool:
    """Whether every trampoline step is logged at DEBUG (KONT_TRACE)."""
    return flag_from_env('KONT_TRACE')


def get_log_level() -> int:
    raw = os.environ.get('KONT_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName returns a "Level X" string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int | None = None) -> None:
    """Attach a stderr handler to the `kont` logger at the configured level."""
    logger = logging.getLogger('kont')
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level if level is not None else get_log_level())
