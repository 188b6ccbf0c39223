"""Julian date helpers and date-string parsing via rms-julian."""

from __future__ import annotations

import logging
import re

import julian

from celestial_positions.config import get_leapsecs_path
from celestial_positions.constants import (
    DAYS_PER_JULIAN_CENTURY,
    DAYS_PER_JULIAN_MILLENNIUM,
    J2000_JD,
    SECONDS_PER_DAY,
)

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load leap seconds for rms-julian if not already loaded.

    A configured LSK that is missing or malformed falls back to the rms-julian
    bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    if path is not None:
        try:
            julian.load_lsk(path)
            _leapsecs_loaded = True
            return
        except (OSError, KeyError, ValueError) as e:
            logger.info(
                'Leap seconds from %s not used (%s); using rms-julian bundled LSK.', path, e
            )
    julian.load_lsk()
    _leapsecs_loaded = True


def julian_millennia(jd: float) -> float:
    """Return Julian millennia since J2000.0 (time argument of VSOP87 series).

    Parameters:
        jd: Julian Date (TDB).

    Returns:
        (jd - 2451545.0) / 365250.
    """
    return (jd - J2000_JD) / DAYS_PER_JULIAN_MILLENNIUM


def julian_centuries(jd: float) -> float:
    """Return Julian centuries since J2000.0.

    Parameters:
        jd: Julian Date (TDB).

    Returns:
        (jd - 2451545.0) / 36525.
    """
    return (jd - J2000_JD) / DAYS_PER_JULIAN_CENTURY


def jd_from_string(string: str) -> float:
    """Parse a UTC date/time string and return the Julian Date on the TDB scale.

    Accepts anything rms-julian parses, an ISO trailing 'Z', or a bare Julian
    Date prefixed with 'JD' (taken as TDB as-is).

    Parameters:
        string: Date/time string (e.g. '2024-03-01 12:00' or 'JD 2460371.0').

    Returns:
        Julian Date (TDB).

    Raises:
        ValueError: If the string cannot be parsed.
    """
    stripped = string.strip()
    jd_match = re.fullmatch(r'JD\s*([-+]?\d+(?:\.\d*)?)', stripped, flags=re.IGNORECASE)
    if jd_match is not None:
        return float(jd_match.group(1))
    _ensure_leapsecs()
    candidates = [stripped]
    if stripped.endswith(('Z', 'z')):
        # rms-julian does not accept the ISO "Z" suffix; the value is UTC either way.
        candidates.append(stripped[:-1])
    for candidate in candidates:
        try:
            day, sec = julian.day_sec_from_string(candidate)[:2]
        except (ValueError, TypeError, LookupError, OSError):
            continue
        tai = julian.tai_from_day_sec(int(day), float(sec))
        tdb = float(julian.tdb_from_tai(tai))
        # TDB seconds are measured from J2000.0 (JD 2451545.0 TDB)
        return J2000_JD + tdb / SECONDS_PER_DAY
    raise ValueError(f'Invalid date/time {string!r}')
