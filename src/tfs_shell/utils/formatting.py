"""Human-readable rendering of sizes and timestamps."""

from __future__ import annotations

from datetime import datetime

_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB")
_UNIT_THRESHOLD: int = 1024 * 5


def format_size(size_bytes: int) -> str:
    """Render *size_bytes* with two decimals in the largest fitting unit.

    A unit is kept while the value is at most five times 1024, so
    ``4096`` stays ``"4096.00 B"`` and ``6144`` becomes ``"6.00 KB"``.
    Anything past the terabyte range is shown in petabytes.
    """
    value = float(size_bytes)
    for unit in _SIZE_UNITS:
        if value <= _UNIT_THRESHOLD:
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} PB"


def format_timestamp_ms(millis: int) -> str:
    """Render epoch milliseconds as local ``MM-dd-yyyy HH:mm:ss:SSS``.

    Values outside the range the platform clock can represent are
    returned as the raw millisecond count.
    """
    try:
        moment = datetime.fromtimestamp(millis / 1000)
    except (OverflowError, OSError, ValueError):
        return str(millis)
    return moment.strftime("%m-%d-%Y %H:%M:%S:") + f"{millis % 1000:03d}"
