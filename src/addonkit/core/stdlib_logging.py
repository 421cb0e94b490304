from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_CONFIGURED_TARGET: str | None = None
_ADDONKIT_HANDLER: logging.Handler | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Route addonkit logging to stderr, or to ``log_path`` when given.

    Idempotent per-process: configuring the same target twice is a no-op.
    Only the ``addonkit`` logger is touched; host handlers are left alone.
    """
    global _CONFIGURED_TARGET, _ADDONKIT_HANDLER

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    pkg_logger = logging.getLogger("addonkit")
    pkg_logger.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _ADDONKIT_HANDLER is not None:
        _ADDONKIT_HANDLER.setLevel(_level_from_name(level))
        return

    # Replace the addonkit-installed handler when switching targets.
    if _ADDONKIT_HANDLER is not None:
        pkg_logger.removeHandler(_ADDONKIT_HANDLER)
        _ADDONKIT_HANDLER.close()
        _ADDONKIT_HANDLER = None

    handler: logging.Handler
    if log_path:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    pkg_logger.addHandler(handler)

    _ADDONKIT_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by ``configure_logging``."""
    global _CONFIGURED_TARGET, _ADDONKIT_HANDLER
    if _ADDONKIT_HANDLER is not None:
        logging.getLogger("addonkit").removeHandler(_ADDONKIT_HANDLER)
        _ADDONKIT_HANDLER.close()
    logging.getLogger("addonkit").setLevel(logging.NOTSET)
    _CONFIGURED_TARGET = None
    _ADDONKIT_HANDLER = None


__all__ = ["configure_logging", "reset_logging_for_tests", "LOG_FORMAT"]
