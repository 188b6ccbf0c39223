"""Exception and warning types raised by the position pipeline."""


class CelestialPositionsError(Exception):
    """Base class for errors raised by celestial_positions."""


class DataError(CelestialPositionsError, LookupError):
    """Coefficient table missing for a body, or unreadable/malformed table data."""


class DegenerateOrbitError(CelestialPositionsError, ValueError):
    """Orbital plane orientation is undefined (all direction cosines vanish)."""


class KeplerConvergenceError(CelestialPositionsError, ArithmeticError):
    """Kepler's equation did not converge within the iteration limit."""


class DomainWarning(UserWarning):
    """Formula evaluated outside its validated range; the result may be inaccurate."""
