"""Angle conversion, normalization, parsing and sexagesimal formatting."""

from __future__ import annotations

import math

from celestial_positions.constants import (
    ARCMIN_PER_DEGREE,
    ARCSEC_PER_DEGREE,
    DEGREES_PER_CIRCLE,
)


def deg_from_dms(degrees: int, minutes: int, seconds: float) -> float:
    """Convert degrees, arcminutes and arcseconds to decimal degrees.

    The sign is taken from the most significant non-zero field, so (0, -30, 0)
    is -0.5 degrees.

    Parameters:
        degrees: Whole degrees.
        minutes: Arcminutes.
        seconds: Arcseconds.

    Returns:
        Angle in degrees.
    """
    value = abs(degrees) + abs(minutes) / ARCMIN_PER_DEGREE + abs(seconds) / ARCSEC_PER_DEGREE
    for field in (degrees, minutes, seconds):
        if field != 0:
            return math.copysign(value, field)
    return 0.0


def limited_to_360(angle_deg: float) -> float:
    """Return angle reduced to the range [0, 360) degrees.

    Parameters:
        angle_deg: Angle in degrees (any finite value).

    Returns:
        Equivalent angle in [0, 360).
    """
    reduced = math.fmod(angle_deg, DEGREES_PER_CIRCLE)
    if reduced < 0.0:
        reduced += DEGREES_PER_CIRCLE
    # fmod of a tiny negative value can round up to exactly 360
    if reduced >= DEGREES_PER_CIRCLE:
        reduced = 0.0
    return reduced


def parse_angle(string: str) -> float | None:
    """Parse "d m s", "d m" or "d" (degrees or hours) to a decimal value.

    Minutes and seconds must be non-negative; a leading minus sign on the whole
    string makes the result negative, so "-0 30" is -0.5.

    Parameters:
        string: Whitespace-separated numbers (e.g. "12 30 45" or "-5 30").

    Returns:
        Angle in the unit of the first field, or None on parse failure.
    """
    text = string.strip()
    parts = text.split()
    if not 1 <= len(parts) <= 3:
        return None
    try:
        fields = [float(p) for p in parts]
    except ValueError:
        return None
    if any(f < 0 for f in fields[1:]):
        return None
    angle = abs(fields[0])
    for scale, f in zip((ARCMIN_PER_DEGREE, ARCSEC_PER_DEGREE), fields[1:]):
        angle += f / scale
    if text.startswith('-'):
        angle = -angle
    return angle


def dms_string(
    value: float, separator: str = 'dms', ndecimal: int = 3, modulus: int | None = None
) -> str:
    """Format an angle as degrees (or hours), minutes and seconds.

    Parameters:
        value: Angle in degrees (or hours for right ascension).
        separator: 3-character string of field suffixes (e.g. 'hms' or 'dms');
            shorter strings use blanks.
        ndecimal: Decimal places for the seconds field.
        modulus: Wrap the leading field after rounding (24 for right ascension).

    Returns:
        Formatted string (e.g. " 12d 30m 45.123s").
    """
    if len(separator) < 3:
        separator = '   '
    scale = 10**ndecimal
    units = round(abs(value) * ARCSEC_PER_DEGREE * scale)
    # values that round to zero print unsigned
    negative = value < 0 and units > 0
    whole_sec, frac = divmod(units, scale)
    whole_min, sec = divmod(whole_sec, 60)
    deg, minutes = divmod(whole_min, 60)
    if modulus is not None:
        deg %= modulus
    sign = '-' if negative else ' '
    out = f'{sign}{deg:02d}{separator[0]} {minutes:02d}{separator[1]} {sec:02d}'
    if ndecimal > 0:
        out += f'.{frac:0{ndecimal}d}'
    return out + separator[2]
