"""
Unified logging module
======================

Every deepfwd module obtains its logger through ``get_logger`` so that the
whole package shares one configured root logger (``deepfwd``).

Usage:
    from deepfwd.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Extraction start (%d chars)", len(text))
    logger.debug("Detector %s matched at offset %d", name, offset)
"""

import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = logging.INFO
ROOT_LOGGER_NAME = "deepfwd"

_root_configured = False


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        return DEFAULT_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else DEFAULT_LEVEL


def _configure_root_logger() -> None:
    """
    Attach a stdout handler to the project root logger.

    Runs once; the level comes from ``Settings.LOG_LEVEL`` when settings
    can be loaded, otherwise ``DEFAULT_LEVEL``.
    """
    global _root_configured
    if _root_configured:
        return

    level = DEFAULT_LEVEL
    try:
        from deepfwd.config import get_settings

        level = _resolve_level(get_settings().LOG_LEVEL)
    except Exception:  # invalid settings: keep DEFAULT_LEVEL
        level = DEFAULT_LEVEL

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    root_logger.propagate = False

    _root_configured = True


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Return the logger called *name*, configuring the project root on first use.

    Args:
        name: logger name, normally the calling module's ``__name__``
        level: optional explicit level for this logger only
    """
    _configure_root_logger()

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_level(level: Union[int, str], logger_name: Optional[str] = None) -> None:
    """
    Change the level of one logger, or of the project root logger.

    Example:
        set_level(logging.DEBUG)                          # whole package
        set_level("DEBUG", "deepfwd.detectors.registry")  # registry only
    """
    logger = logging.getLogger(logger_name or ROOT_LOGGER_NAME)
    logger.setLevel(_resolve_level(level))
