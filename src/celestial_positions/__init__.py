"""Celestial body positions from periodic series and orbital elements.

- Planets: heliocentric ecliptic L, B, R from VSOP87-style periodic series, and
  geocentric ecliptic direction with light-time.
- Comets and asteroids: geocentric equatorial RA/Dec from classical orbital
  elements (Gauss vector method), or heliocentric ecliptic longitude/latitude.

Coefficient tables are not bundled; point CELESTIAL_SERIES_PATH at VSOP87 files
or a CSV term table, or build a SeriesRegistry directly.
"""

from celestial_positions.elements import (
    EquatorialCoordinate,
    OrbitalElements,
    geocentric_equatorial,
    heliocentric_from_elements,
)
from celestial_positions.errors import (
    CelestialPositionsError,
    DataError,
    DegenerateOrbitError,
    DomainWarning,
    KeplerConvergenceError,
)
from celestial_positions.positions import (
    GeocentricEclipticCoordinate,
    HeliocentricCoordinate,
    geocentric_ecliptic,
    heliocentric_coords,
    light_time,
)
from celestial_positions.tables import Body, SeriesRegistry, load_registry

__all__: list[str] = [
    'Body',
    'CelestialPositionsError',
    'DataError',
    'DegenerateOrbitError',
    'DomainWarning',
    'EquatorialCoordinate',
    'GeocentricEclipticCoordinate',
    'HeliocentricCoordinate',
    'KeplerConvergenceError',
    'OrbitalElements',
    'SeriesRegistry',
    'geocentric_ecliptic',
    'geocentric_equatorial',
    'heliocentric_coords',
    'heliocentric_from_elements',
    'light_time',
    'load_registry',
]
