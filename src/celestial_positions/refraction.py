"""Atmospheric refraction terms for altitude (radians in, radians out).

The rigorous tan/tan**3 formulas are validated above 15 degrees of altitude
and issue a DomainWarning below it. The approximate formulas hold from 0 to 90
degrees (about 0.07 arcminute accuracy) and never warn.
"""

from __future__ import annotations

import logging
import math
import warnings

from celestial_positions.angle_utils import deg_from_dms
from celestial_positions.constants import (
    ARCMIN_PER_DEGREE,
    RIGOROUS_REFRACTION_MIN_ALTITUDE_DEG,
    STANDARD_PRESSURE_MBAR,
    STANDARD_TEMPERATURE_K,
)
from celestial_positions.errors import DomainWarning

logger = logging.getLogger(__name__)

_HALF_PI = math.pi / 2.0


def _check_rigorous_range(altitude: float, name: str) -> None:
    if math.degrees(altitude) < RIGOROUS_REFRACTION_MIN_ALTITUDE_DEG:
        logger.debug('%s called at altitude %.3f deg', name, math.degrees(altitude))
        warnings.warn(
            f'{name} is only valid above {RIGOROUS_REFRACTION_MIN_ALTITUDE_DEG:g} degrees '
            f'altitude (got {math.degrees(altitude):.3f})',
            DomainWarning,
            stacklevel=3,
        )


def _tan_series(altitude: float, first_arcsec: float, third_arcsec: float) -> float:
    tan_z = math.tan(_HALF_PI - altitude)
    return (
        math.radians(deg_from_dms(0, 0, first_arcsec)) * tan_z
        - math.radians(deg_from_dms(0, 0, third_arcsec)) * tan_z**3
    )


def refraction_from_apparent_altitude(apparent_alt: float) -> float:
    """Refraction to subtract from the apparent altitude to get the true altitude.

    Valid above 15 degrees; warns DomainWarning below and still computes.
    """
    _check_rigorous_range(apparent_alt, 'refraction_from_apparent_altitude')
    return _tan_series(apparent_alt, 58.294, 0.0668)


def refraction_from_true_altitude(true_alt: float) -> float:
    """Refraction to add to the true altitude to get the apparent altitude.

    Valid above 15 degrees; warns DomainWarning below and still computes.
    """
    _check_rigorous_range(true_alt, 'refraction_from_true_altitude')
    return _tan_series(true_alt, 58.276, 0.0824)


def approx_refraction_from_apparent_altitude(apparent_alt: float) -> float:
    """Approximate refraction (to subtract) for an apparent altitude in [0, 90] degrees."""
    h = math.degrees(apparent_alt)
    if math.isclose(h, 90.0, abs_tol=1e-12):
        return 0.0
    arcmin = 1.0 / math.tan(math.radians(h + 7.31 / (h + 4.4)))
    return math.radians(arcmin / ARCMIN_PER_DEGREE)


def approx_refraction_from_true_altitude(true_alt: float) -> float:
    """Approximate refraction (to add) for a true altitude in [0, 90] degrees.

    Consistent with approx_refraction_from_apparent_altitude to about 4 arcseconds.
    """
    h = math.degrees(true_alt)
    if math.isclose(h, 90.0, abs_tol=1e-12):
        return 0.0
    arcmin = 1.02 / math.tan(math.radians(h + 10.3 / (h + 5.11)))
    return math.radians(arcmin / ARCMIN_PER_DEGREE)


def pressure_factor(pressure_mbar: float) -> float:
    """Multiplier on a refraction term for local pressure (millibars)."""
    return pressure_mbar / STANDARD_PRESSURE_MBAR


def temperature_factor(temperature_k: float) -> float:
    """Multiplier on a refraction term for local temperature (kelvins)."""
    return STANDARD_TEMPERATURE_K / temperature_k
