"""
Pointer settings
Timing defaults for synthesized input, overridable through environment variables
"""

import math
import os
from typing import NamedTuple, Optional

from loguru import logger

from os_detector import os_detector

ENV_PREFIX = "POINTER_"


class MouseSettings(NamedTuple):
    """Pacing used by the controller between synthesized input steps"""

    click_pause: float = 0.05  # gap between the two clicks of a double click
    multi_click_pause: float = 0.05
    poll_interval: float = 0.01  # hover / circle tick
    log_level: str = "INFO"


_DEFAULTS = MouseSettings._field_defaults


def _read_float(name: str, default: float) -> float:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring {}{}={!r}: not a number", ENV_PREFIX, name, raw)
        return default
    if not math.isfinite(value):
        logger.warning("Ignoring {}{}={!r}: must be a finite number", ENV_PREFIX, name, raw)
        return default
    if value < 0:
        logger.warning("Ignoring {}{}={!r}: must not be negative", ENV_PREFIX, name, raw)
        return default
    return value


def _read_log_level(raw: Optional[str]) -> str:
    if raw is None or raw.strip() == "":
        return _DEFAULTS["log_level"]
    name = raw.strip().upper()
    try:
        logger.level(name)
    except ValueError:
        logger.warning("Unknown log level {!r} - using {}", raw, _DEFAULTS["log_level"])
        return _DEFAULTS["log_level"]
    return name


def load_settings(log_level: Optional[str] = None) -> MouseSettings:
    """Build settings from OS defaults and POINTER_* environment variables"""
    click_delay = os_detector.get_os_specific_delay("click")
    return MouseSettings(
        click_pause=_read_float("CLICK_PAUSE", click_delay),
        multi_click_pause=_read_float("MULTI_CLICK_PAUSE", click_delay),
        poll_interval=_read_float("POLL_INTERVAL", _DEFAULTS["poll_interval"]),
        log_level=_read_log_level(log_level or os.environ.get(ENV_PREFIX + "LOG_LEVEL")),
    )
