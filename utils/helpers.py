# File: utils/helpers.py
import logging
import math
import numbers
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_main_logging(level: Optional[str] = None) -> int:
    """
    Configures root logging for the API and the CLI.

    `level` is a level name such as "DEBUG" (usually settings.LOG_LEVEL).
    Unknown names fall back to INFO with a warning rather than aborting
    start-up. Returns the numeric level applied.
    """
    name = (level or "INFO").strip().upper()
    resolved = logging.getLevelName(name)
    known = isinstance(resolved, int)
    if not known:
        resolved = logging.INFO
    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    if not known:
        logging.getLogger(__name__).warning(f"Unknown log level '{level}', using INFO.")
    return resolved


def is_finite_number(value: Any) -> bool:
    """True for real, finite numbers. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:  # ints beyond float range
        return False


def round_half_up(value: float, places: int) -> float:
    """
    Rounds to a fixed number of decimals, ties away from zero.

    The decimal expansion of the float is used as-is (Decimal(float) is exact),
    so 0.0003881499999 stays below the tie instead of being nudged up by a
    string round-trip.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
