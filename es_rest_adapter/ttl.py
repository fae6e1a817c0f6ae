"""Document TTL specifier parsing.

Elasticsearch accepts TTL values such as ``1d``, ``1w``, ``1ms``, ``1s``,
``1h`` and ``1m``. The settings hold the same notation and it is converted
to milliseconds here.
"""

import re
from re import Pattern
from typing import Dict, Optional

from es_rest_adapter.logging.logger import log_debug, log_info
from es_rest_adapter.logging.schema import DebugCategory

# TTL not configured
DEFAULT_TTL = -1
# Unknown qualifier, TTL disabled
DISABLED_TTL = 0

TTL_PATTERN: Pattern[str] = re.compile(r"^(\d+)(\D*)", re.IGNORECASE | re.ASCII)

MS_PER_DAY = 24 * 60 * 60 * 1000

TTL_QUALIFIER_MS: Dict[str, int] = {
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": MS_PER_DAY,
    "w": 7 * MS_PER_DAY,
}


def parse_ttl(ttl: Optional[str]) -> int:
    """Return the TTL in milliseconds for a specifier like ``5s`` or ``2w``.

    A specifier without qualifier is read as a number of days. An unknown
    qualifier disables the TTL and returns 0. A value that does not start
    with digits is treated as not provided and returns -1.

    Args:
        ttl: TTL specifier

    Returns:
        TTL in milliseconds, 0 or -1
    """
    match = TTL_PATTERN.match(ttl) if ttl else None
    if match is None:
        log_info("TTL not provided, skipping the TTL config")
        return DEFAULT_TTL

    try:
        amount = int(match.group(1))
    except ValueError:
        # More digits than the interpreter converts
        log_debug(
            f"TTL amount too long ({len(match.group(1))} digits), setting TTL to 0",
            debug_category=DebugCategory.TTL_AMOUNT_TOO_LONG,
        )
        return DISABLED_TTL
    qualifier = match.group(2).lower()

    if qualifier == "":
        log_info("TTL qualifier is empty, defaulting to day qualifier")
        return amount * MS_PER_DAY

    multiplier = TTL_QUALIFIER_MS.get(qualifier)
    if multiplier is None:
        log_debug(
            f"unknown TTL qualifier provided: {qualifier!r}, setting TTL to 0",
            debug_category=DebugCategory.UNKNOWN_TTL_QUALIFIER,
        )
        return DISABLED_TTL

    return amount * multiplier
