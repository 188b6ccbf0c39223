"""Spherical/rectangular conversion, mean obliquity, and the Sun's equatorial position."""

from __future__ import annotations

import math

import cspyce

from celestial_positions.constants import (
    ARCSEC_PER_DEGREE,
    OBLIQUITY_J2000_ARCSEC,
    OBLIQUITY_RATE_ARCSEC,
)
from celestial_positions.time_utils import julian_centuries


def rectangular_from_spherical(
    longitude: float, latitude: float, radius: float
) -> tuple[float, float, float]:
    """Rectangular (x, y, z) from longitude, latitude (radians) and radius.

    x = R cos(B) cos(L), y = R cos(B) sin(L), z = R sin(B).
    """
    x, y, z = cspyce.latrec(radius, longitude, latitude)
    return (float(x), float(y), float(z))


def spherical_from_rectangular(x: float, y: float, z: float) -> tuple[float, float, float]:
    """Longitude, latitude (radians) and radius from rectangular (x, y, z).

    Longitude is in (-pi, pi]; the zero vector maps to (0, 0, 0).
    """
    radius, longitude, latitude = cspyce.reclat([x, y, z])
    return (float(longitude), float(latitude), float(radius))


def mean_obliquity(jd: float) -> float:
    """Mean obliquity of the ecliptic (IAU 1980), radians.

    Parameters:
        jd: Julian Date (TDB).

    Returns:
        Obliquity in radians (about 0.4091 near J2000).
    """
    t = julian_centuries(jd)
    arcsec = OBLIQUITY_J2000_ARCSEC
    for power, rate in enumerate(OBLIQUITY_RATE_ARCSEC, start=1):
        arcsec += rate * t**power
    return math.radians(arcsec / ARCSEC_PER_DEGREE)


def sun_rectangular(
    earth_longitude: float, earth_latitude: float, earth_radius: float, obliquity: float
) -> tuple[float, float, float]:
    """Geocentric equatorial rectangular position of the Sun (AU).

    The Sun's geocentric ecliptic direction is opposite to Earth's heliocentric
    one (longitude + pi, latitude negated); the result is rotated about the
    x axis by the obliquity.

    Parameters:
        earth_longitude: Earth's heliocentric ecliptic longitude L (radians).
        earth_latitude: Earth's heliocentric ecliptic latitude B (radians).
        earth_radius: Earth's radius vector R (AU).
        obliquity: Obliquity of the ecliptic (radians).

    Returns:
        (X, Y, Z) in AU.
    """
    ecliptic = rectangular_from_spherical(earth_longitude + math.pi, -earth_latitude, earth_radius)
    # rotate() gives the frame rotation; its transpose turns the vector by +obliquity
    x, y, z = cspyce.mtxv(cspyce.rotate(obliquity, 1), list(ecliptic))
    return (float(x), float(y), float(z))
