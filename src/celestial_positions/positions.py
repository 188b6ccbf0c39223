"""Planet positions from periodic series: heliocentric L/B/R, geocentric ecliptic, light-time."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from celestial_positions.constants import LIGHT_TIME_DAYS_PER_AU, TWOPI
from celestial_positions.frames import rectangular_from_spherical
from celestial_positions.series import assemble_coordinate
from celestial_positions.tables import Body, SeriesRegistry, default_registry
from celestial_positions.time_utils import julian_millennia

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeliocentricCoordinate:
    """Heliocentric ecliptic position of a body at one instant."""

    longitude: float  # L, radians in [0, 2pi)
    latitude: float  # B, radians
    radius: float  # R, AU

    def rectangular(self) -> tuple[float, float, float]:
        """Heliocentric ecliptic rectangular (x, y, z) in AU."""
        return rectangular_from_spherical(self.longitude, self.latitude, self.radius)


@dataclass(frozen=True)
class GeocentricEclipticCoordinate:
    """Geocentric ecliptic direction of a body plus its light-time.

    ``tan_latitude`` is the slope z / sqrt(x**2 + y**2), not an angle; use
    ``latitude`` for the angle itself.
    """

    longitude: float  # radians, (-pi, pi]
    tan_latitude: float
    light_time: float  # days

    @property
    def latitude(self) -> float:
        """Geocentric ecliptic latitude (radians)."""
        return math.atan(self.tan_latitude)


def light_time(x: float, y: float, z: float) -> float:
    """Light travel time (days) over a displacement (x, y, z) in AU.

    Parameters:
        x, y, z: Rectangular displacement in AU.

    Returns:
        0.0057755183 * |(x, y, z)| days.
    """
    return LIGHT_TIME_DAYS_PER_AU * math.sqrt(x * x + y * y + z * z)


def heliocentric_coords(
    body: Body, jd: float, registry: SeriesRegistry | None = None
) -> HeliocentricCoordinate:
    """Heliocentric ecliptic L, B, R of a planet from its VSOP87 series.

    Parameters:
        body: Planet to compute.
        jd: Julian Date (TDB).
        registry: Coefficient tables; the process-wide default registry if None.

    Returns:
        HeliocentricCoordinate with L normalized to [0, 2pi).

    Raises:
        DataError: If no coefficient table is bound to the body.
    """
    if registry is None:
        registry = default_registry()
    tables = registry[body]
    t = julian_millennia(jd)
    longitude = math.fmod(assemble_coordinate(t, tables.L), TWOPI)
    if longitude < 0.0:
        longitude += TWOPI
    return HeliocentricCoordinate(
        longitude=longitude,
        latitude=assemble_coordinate(t, tables.B),
        radius=assemble_coordinate(t, tables.R),
    )


def geocentric_ecliptic(
    target: HeliocentricCoordinate, reference: HeliocentricCoordinate
) -> GeocentricEclipticCoordinate:
    """Geocentric ecliptic longitude, tangent of latitude and light-time.

    The reference body (normally Earth) is subtracted in rectangular
    coordinates. Single pass: the target is not re-evaluated at the retarded
    time t - light_time, so the target's motion during the light travel time is
    ignored.

    When target and reference coincide in projection (zero x/y separation) the
    direction is degenerate: ``tan_latitude`` is 0.0 for a zero separation and
    +/-inf when the target lies on the ecliptic pole axis.

    Parameters:
        target: Heliocentric position of the observed body.
        reference: Heliocentric position of the observer's body.

    Returns:
        GeocentricEclipticCoordinate.
    """
    tx, ty, tz = target.rectangular()
    rx, ry, rz = reference.rectangular()
    dx = tx - rx
    dy = ty - ry
    dz = tz - rz
    projected = math.sqrt(dx * dx + dy * dy)
    if projected == 0.0:
        logger.debug('Degenerate geocentric direction: dx=dy=0, dz=%r', dz)
        tan_latitude = 0.0 if dz == 0.0 else math.copysign(math.inf, dz)
    else:
        tan_latitude = dz / projected
    return GeocentricEclipticCoordinate(
        longitude=math.atan2(dy, dx),
        tan_latitude=tan_latitude,
        light_time=light_time(dx, dy, dz),
    )


def geocentric_ecliptic_lbr(
    L: float, B: float, R: float, L0: float, B0: float, R0: float
) -> GeocentricEclipticCoordinate:
    """Geocentric ecliptic coordinates from bare (L, B, R) and reference (L0, B0, R0)."""
    return geocentric_ecliptic(
        HeliocentricCoordinate(L, B, R), HeliocentricCoordinate(L0, B0, R0)
    )


def geocentric_position(
    body: Body, jd: float, registry: SeriesRegistry | None = None
) -> GeocentricEclipticCoordinate:
    """Geocentric ecliptic coordinates of a planet as seen from Earth at jd (TDB).

    Raises:
        DataError: If the body or Earth has no coefficient table.
    """
    if registry is None:
        registry = default_registry()
    target = heliocentric_coords(body, jd, registry)
    earth = heliocentric_coords(Body.EARTH, jd, registry)
    return geocentric_ecliptic(target, earth)
