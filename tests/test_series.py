"""Tests for periodic series evaluation and Horner assembly."""

from __future__ import annotations

import math
import random

import numpy as np
import pytest

from celestial_positions.series import (
    EMPTY_SERIES,
    PeriodicTerm,
    SeriesSet,
    assemble_coordinate,
    evaluate_series,
    make_series,
)


def test_empty_series_is_zero() -> None:
    """An empty series sums to exactly 0 at any time."""
    assert evaluate_series(0.0, EMPTY_SERIES) == 0.0
    assert evaluate_series(12.5, make_series([])) == 0.0


def test_single_term_matches_cosine() -> None:
    """One term evaluates to A * cos(B + C*t)."""
    series = make_series([PeriodicTerm(amplitude=2.0, phase=0.3, frequency=5.0)])
    t = 0.17
    assert evaluate_series(t, series) == pytest.approx(2.0 * math.cos(0.3 + 5.0 * t))


def test_finite_coefficients_give_finite_result() -> None:
    """Finite coefficients yield a finite sum; a non-finite amplitude does not."""
    finite = make_series([(1.0e3, 1.0, 1.0e4), (-2.5, 0.1, 0.0)])
    assert math.isfinite(evaluate_series(-3.2, finite))
    infinite = make_series([(math.inf, 0.0, 0.0)])
    assert not math.isfinite(evaluate_series(0.0, infinite))


def test_reordering_terms_does_not_change_sum() -> None:
    """Term order within one series only affects rounding."""
    rng = random.Random(1234)
    terms = [(rng.uniform(-1, 1), rng.uniform(0, 6.3), rng.uniform(0, 1e4)) for _ in range(50)]
    shuffled = list(terms)
    rng.shuffle(shuffled)
    t = 0.0421
    assert evaluate_series(t, make_series(shuffled)) == pytest.approx(
        evaluate_series(t, make_series(terms)), rel=1e-12, abs=1e-12
    )


def test_series_arrays_are_read_only() -> None:
    """Series built by make_series cannot be modified in place."""
    series = make_series([(1.0, 2.0, 3.0)])
    assert series.shape == (1, 3)
    assert not series.flags.writeable
    with pytest.raises(ValueError):
        series[0, 0] = 5.0


def test_make_series_rejects_wrong_arity() -> None:
    """A term must have exactly amplitude, phase and frequency."""
    with pytest.raises(ValueError, match='3 values'):
        make_series([(1.0, 2.0)])


def test_series_set_pads_missing_degrees() -> None:
    """Missing trailing degrees become empty series."""
    series_set = SeriesSet.from_terms([[(1.0, 0.0, 0.0)]])
    assert len(series_set.degrees) == 6
    assert series_set.term_count() == 1
    assert not series_set.is_empty()
    assert all(len(s) == 0 for s in series_set.degrees[1:])


def test_series_set_rejects_too_many_degrees() -> None:
    """Only degrees 0..5 exist."""
    with pytest.raises(ValueError):
        SeriesSet(tuple(EMPTY_SERIES for _ in range(7)))


def test_assemble_matches_power_expansion() -> None:
    """Horner combination equals T0 + t*T1 + ... + t**5*T5."""
    degrees = [[(float(d + 1), 0.1 * d, 10.0 * d)] for d in range(6)]
    series_set = SeriesSet.from_terms(degrees)
    t = 0.35
    expected = sum(
        t**d * evaluate_series(t, make_series(rows)) for d, rows in enumerate(degrees)
    )
    assert assemble_coordinate(t, series_set) == pytest.approx(expected, rel=1e-14)


def test_assemble_empty_degrees_contribute_zero() -> None:
    """Empty degrees do not raise and add nothing."""
    assert assemble_coordinate(1.5, SeriesSet()) == 0.0
    only_t2 = SeriesSet.from_terms([[], [], [(3.0, 0.0, 0.0)]])
    assert assemble_coordinate(2.0, only_t2) == pytest.approx(12.0)


def test_assemble_at_epoch_is_degree_zero_sum() -> None:
    """At t = 0 only the degree-0 series contributes."""
    series_set = SeriesSet.from_terms([[(1.5, 0.0, 0.0), (0.5, math.pi, 7.0)], [(9.0, 0.0, 0.0)]])
    assert assemble_coordinate(0.0, series_set) == pytest.approx(1.0)
    assert isinstance(assemble_coordinate(0.0, series_set), float)
    assert np.isfinite(assemble_coordinate(0.0, series_set))


def test_assembled_coordinate_ignores_term_order() -> None:
    """Shuffling terms within every degree leaves the assembled coordinate unchanged."""
    rng = random.Random(87)
    degrees = [
        [(rng.uniform(-1, 1), rng.uniform(0, 6.3), rng.uniform(0, 1e4)) for _ in range(20)]
        for _ in range(4)
    ]
    shuffled = []
    for rows in degrees:
        rows = list(rows)
        rng.shuffle(rows)
        shuffled.append(rows)
    t = -0.0734
    assert assemble_coordinate(t, SeriesSet.from_terms(shuffled)) == pytest.approx(
        assemble_coordinate(t, SeriesSet.from_terms(degrees)), rel=1e-12, abs=1e-12
    )
