"""Positions of comets and asteroids from classical orbital elements.

Two transforms are provided: the Gauss vector method giving geocentric
equatorial right ascension and declination, and the direct heliocentric
ecliptic longitude/latitude.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from celestial_positions.angle_utils import limited_to_360
from celestial_positions.constants import TWOPI
from celestial_positions.errors import DegenerateOrbitError
from celestial_positions.kepler import eccentric_anomaly, radius_vector, true_anomaly
from celestial_positions.positions import light_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitalElements:
    """Osculating orbit at one epoch; angles in radians, distances in AU.

    The optional fields are carried for derived uses; the transforms only need
    inclination, node, perihelion, true_anomaly and radius.
    """

    inclination: float  # i
    node: float  # longitude of the ascending node, sigma
    perihelion: float  # argument of perihelion, w
    true_anomaly: float  # v
    radius: float  # r
    mean_anomaly: float | None = None  # M
    eccentric_anomaly: float | None = None  # E
    eccentricity: float | None = None  # e
    semi_major_axis: float | None = None  # a
    mean_motion: float | None = None  # n, radians per day

    @classmethod
    def from_mean_anomaly(
        cls,
        inclination: float,
        node: float,
        perihelion: float,
        mean_anomaly: float,
        eccentricity: float,
        semi_major_axis: float,
        mean_motion: float | None = None,
    ) -> OrbitalElements:
        """Build elements from M, e and a, solving Kepler's equation for v and r.

        Raises:
            ValueError: If the orbit is not elliptic.
            KeplerConvergenceError: If Kepler's equation does not converge.
        """
        e_anom = eccentric_anomaly(mean_anomaly, eccentricity)
        return cls(
            inclination=inclination,
            node=node,
            perihelion=perihelion,
            true_anomaly=true_anomaly(e_anom, eccentricity),
            radius=radius_vector(semi_major_axis, eccentricity, e_anom),
            mean_anomaly=mean_anomaly,
            eccentric_anomaly=e_anom,
            eccentricity=eccentricity,
            semi_major_axis=semi_major_axis,
            mean_motion=mean_motion,
        )

    def heliocentric(self) -> tuple[float, float]:
        """Heliocentric ecliptic (longitude, latitude) in radians."""
        return heliocentric_from_elements(
            self.inclination, self.node, self.perihelion, self.true_anomaly, self.radius
        )


@dataclass(frozen=True)
class EquatorialCoordinate:
    """Geocentric equatorial direction of a body plus its light-time."""

    right_ascension: float  # radians, [0, 2pi)
    declination: float  # radians, [-pi/2, pi/2]
    light_time: float  # days


def _gauss_vectors(
    node: float, inclination: float, obliquity: float
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Angles (A, B, C) and magnitudes (a, b, c) orienting the orbit in the equatorial frame."""
    sin_node, cos_node = math.sin(node), math.cos(node)
    sin_i, cos_i = math.sin(inclination), math.cos(inclination)
    sin_eps, cos_eps = math.sin(obliquity), math.cos(obliquity)

    f = cos_node
    g = sin_node * cos_eps
    h = sin_node * sin_eps
    p = -sin_node * cos_i
    q = cos_node * cos_i * cos_eps - sin_i * sin_eps
    r = cos_node * cos_i * sin_eps + sin_i * cos_eps

    angles = (math.atan2(f, p), math.atan2(g, q), math.atan2(h, r))
    magnitudes = (math.hypot(f, p), math.hypot(g, q), math.hypot(h, r))
    return angles, magnitudes


def geocentric_equatorial(
    elements: OrbitalElements,
    sun: tuple[float, float, float],
    obliquity: float,
    *,
    raw_angle_product: bool = False,
) -> EquatorialCoordinate:
    """Geocentric right ascension and declination by the Gauss vector method.

    The body's equatorial rectangular position relative to the Sun is
    ``x = r a sin(A + w + v)`` (likewise y with B, b and z with C, c); adding
    the Sun's geocentric position gives the geocentric vector.

    Parameters:
        elements: Orbital elements (i, node, w, v, r are used).
        sun: Geocentric equatorial rectangular position of the Sun (X, Y, Z), AU.
        obliquity: Obliquity of the ecliptic (radians).
        raw_angle_product: Use ``x = r a (A + w + v)`` without the sine, as in the
            legacy closed form; only for comparison with old results.

    Returns:
        EquatorialCoordinate; light-time is taken over the heliocentric vector
        (x, y, z), not the geocentric one.

    Raises:
        DegenerateOrbitError: If the orbital plane orientation is undefined
            (a = b = c = 0) or an input is not finite.
    """
    inputs = (
        elements.inclination,
        elements.node,
        elements.perihelion,
        elements.true_anomaly,
        elements.radius,
        obliquity,
        *sun,
    )
    if not all(math.isfinite(value) for value in inputs):
        raise DegenerateOrbitError(f'non-finite orbital elements or Sun position: {inputs!r}')
    angles, magnitudes = _gauss_vectors(elements.node, elements.inclination, obliquity)
    if not any(magnitudes):
        raise DegenerateOrbitError(
            f'orbital plane undefined for node={elements.node!r}, '
            f'inclination={elements.inclination!r}, obliquity={obliquity!r}'
        )

    u = elements.perihelion + elements.true_anomaly
    if raw_angle_product:
        logger.debug('Gauss vectors with raw angle product (legacy form)')
        x, y, z = (elements.radius * m * (angle + u) for angle, m in zip(angles, magnitudes))
    else:
        x, y, z = (
            elements.radius * m * math.sin(angle + u) for angle, m in zip(angles, magnitudes)
        )

    xi = sun[0] + x
    nu = sun[1] + y
    et = sun[2] + z

    ra = math.radians(limited_to_360(math.degrees(math.atan2(nu, xi))))
    if ra >= TWOPI:
        ra = 0.0
    dec = math.atan2(et, math.hypot(xi, nu))
    return EquatorialCoordinate(right_ascension=ra, declination=dec, light_time=light_time(x, y, z))


def heliocentric_from_elements(
    inclination: float, node: float, perihelion: float, true_anom: float, radius: float
) -> tuple[float, float]:
    """Heliocentric ecliptic longitude and latitude of a body on its orbit.

    Parameters:
        inclination: i (radians).
        node: Longitude of the ascending node (radians).
        perihelion: Argument of perihelion w (radians).
        true_anom: True anomaly v (radians).
        radius: Heliocentric distance r (AU).

    Returns:
        (longitude, latitude) in radians; longitude in (-pi, pi].
    """
    u = perihelion + true_anom
    sin_node, cos_node = math.sin(node), math.cos(node)
    sin_u, cos_u = math.sin(u), math.cos(u)
    cos_i = math.cos(inclination)
    x = radius * (cos_node * cos_u - sin_node * sin_u * cos_i)
    y = radius * (sin_node * cos_u + cos_node * sin_u * cos_i)
    z = radius * math.sin(inclination) * sin_u
    return (math.atan2(y, x), math.atan2(z, math.hypot(x, y)))
