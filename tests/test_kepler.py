"""Tests for Kepler's equation helpers."""

from __future__ import annotations

import math

import pytest

from celestial_positions.errors import KeplerConvergenceError
from celestial_positions.kepler import eccentric_anomaly, radius_vector, true_anomaly


@pytest.mark.parametrize('eccentricity', [0.0, 0.1, 0.5, 0.9, 0.99])
@pytest.mark.parametrize('mean_anomaly', [-2.5, 0.0, 0.3, 3.0, 10.0])
def test_eccentric_anomaly_solves_kepler(mean_anomaly: float, eccentricity: float) -> None:
    """E - e sin E reproduces M, in the same revolution as M."""
    e_anom = eccentric_anomaly(mean_anomaly, eccentricity)
    assert e_anom - eccentricity * math.sin(e_anom) == pytest.approx(mean_anomaly, abs=1e-12)


def test_eccentric_anomaly_rejects_open_orbits() -> None:
    """Only elliptic orbits are supported."""
    with pytest.raises(ValueError, match='elliptic'):
        eccentric_anomaly(1.0, 1.0)
    with pytest.raises(ValueError):
        eccentric_anomaly(math.nan, 0.5)


def test_eccentric_anomaly_iteration_limit() -> None:
    """Hitting the iteration limit raises KeplerConvergenceError."""
    with pytest.raises(KeplerConvergenceError, match='did not converge'):
        eccentric_anomaly(0.3, 0.9, max_iter=1)


def test_true_anomaly_at_apsides() -> None:
    """E = 0 is perihelion (v = 0) and E = pi is aphelion (v = pi)."""
    assert true_anomaly(0.0, 0.5) == 0.0
    assert true_anomaly(math.pi, 0.5) == pytest.approx(math.pi)


def test_radius_vector_at_apsides() -> None:
    """r ranges from a (1 - e) to a (1 + e)."""
    assert radius_vector(2.0, 0.25, 0.0) == pytest.approx(1.5)
    assert radius_vector(2.0, 0.25, math.pi) == pytest.approx(2.5)
