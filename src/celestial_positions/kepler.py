"""Kepler's equation for elliptic orbits: mean anomaly to eccentric/true anomaly and radius."""

from __future__ import annotations

import math

from celestial_positions.constants import KEPLER_MAX_ITERATIONS, KEPLER_TOLERANCE, TWOPI
from celestial_positions.errors import KeplerConvergenceError


def eccentric_anomaly(
    mean_anomaly: float,
    eccentricity: float,
    *,
    tol: float = KEPLER_TOLERANCE,
    max_iter: int = KEPLER_MAX_ITERATIONS,
) -> float:
    """Solve E - e sin(E) = M by Newton iteration.

    Parameters:
        mean_anomaly: M (radians, any revolution).
        eccentricity: e, 0 <= e < 1.
        tol: Convergence threshold on the Newton step (radians).
        max_iter: Iteration limit.

    Returns:
        E (radians), in the same revolution as M.

    Raises:
        ValueError: If the orbit is not elliptic or M is not finite.
        KeplerConvergenceError: If the iteration limit is reached.
    """
    if not 0.0 <= eccentricity < 1.0:
        raise ValueError(
            f'eccentricity must be in [0, 1) for an elliptic orbit, got {eccentricity}'
        )
    if not math.isfinite(mean_anomaly):
        raise ValueError(f'mean anomaly must be finite, got {mean_anomaly}')
    m = math.remainder(mean_anomaly, TWOPI)
    # start at pi for highly eccentric orbits
    e_anom = m if eccentricity < 0.8 else math.copysign(math.pi, m)
    for _ in range(max_iter):
        step = (e_anom - eccentricity * math.sin(e_anom) - m) / (
            1.0 - eccentricity * math.cos(e_anom)
        )
        e_anom -= step
        if abs(step) < tol:
            return e_anom + (mean_anomaly - m)
    raise KeplerConvergenceError(
        f'Kepler equation did not converge after {max_iter} iterations '
        f'(M={mean_anomaly}, e={eccentricity})'
    )


def true_anomaly(eccentric_anom: float, eccentricity: float) -> float:
    """True anomaly v (radians) from eccentric anomaly E."""
    half = eccentric_anom / 2.0
    return 2.0 * math.atan2(
        math.sqrt(1.0 + eccentricity) * math.sin(half),
        math.sqrt(1.0 - eccentricity) * math.cos(half),
    )


def radius_vector(semi_major_axis: float, eccentricity: float, eccentric_anom: float) -> float:
    """Heliocentric distance r = a (1 - e cos E), same unit as a."""
    return semi_major_axis * (1.0 - eccentricity * math.cos(eccentric_anom))
