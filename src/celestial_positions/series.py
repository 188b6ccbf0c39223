"""Periodic series evaluation and Horner assembly of VSOP87-style coordinates.

A coordinate (L, B or R) of one body is expressed as

    X(t) = T0 + t*T1 + t**2*T2 + ... + t**5*T5,   Td = sum(A * cos(B + C*t))

with ``t`` in Julian millennia from J2000.0. Each degree ``d`` is one series of
(amplitude, phase, frequency) terms, stored as a read-only ``(n, 3)`` array.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from celestial_positions.constants import SERIES_DEGREES

Series = np.ndarray


@dataclass(frozen=True)
class PeriodicTerm:
    """One term ``amplitude * cos(phase + frequency * t)`` of a series."""

    amplitude: float
    phase: float  # radians
    frequency: float  # radians per Julian millennium


def make_series(terms: Iterable[PeriodicTerm | Sequence[float]]) -> Series:
    """Build a read-only series array from terms or (A, B, C) triples.

    Parameters:
        terms: PeriodicTerm objects or 3-sequences (amplitude, phase, frequency).

    Returns:
        Read-only float64 array of shape (n, 3); (0, 3) for no terms.

    Raises:
        ValueError: If a triple does not have exactly three values.
    """
    rows = []
    for term in terms:
        if isinstance(term, PeriodicTerm):
            rows.append((term.amplitude, term.phase, term.frequency))
        else:
            row = tuple(float(x) for x in term)
            if len(row) != 3:
                raise ValueError(f'series term must have 3 values (A, B, C), got {len(row)}')
            rows.append(row)
    arr = np.array(rows, dtype=np.float64).reshape(len(rows), 3)
    arr.flags.writeable = False
    return arr


EMPTY_SERIES: Series = make_series(())


def evaluate_series(t: float, series: Series) -> float:
    """Evaluate ``sum(A * cos(B + C*t))`` over all terms of one series.

    Parameters:
        t: Time argument in Julian millennia from J2000.0.
        series: Array of shape (n, 3) with columns (amplitude, phase, frequency).

    Returns:
        Sum of the terms; exactly 0.0 for an empty series.
    """
    if len(series) == 0:
        return 0.0
    amplitude = series[:, 0]
    phase = series[:, 1]
    frequency = series[:, 2]
    return float(np.sum(amplitude * np.cos(phase + t * frequency)))


@dataclass(frozen=True)
class SeriesSet:
    """Six series (degrees 0..5) for one coordinate of one body."""

    degrees: tuple[Series, ...] = field(default_factory=lambda: (EMPTY_SERIES,) * SERIES_DEGREES)

    def __post_init__(self) -> None:
        if len(self.degrees) > SERIES_DEGREES:
            raise ValueError(
                f'a series set has at most {SERIES_DEGREES} degrees, got {len(self.degrees)}'
            )
        padded = tuple(self.degrees) + (EMPTY_SERIES,) * (SERIES_DEGREES - len(self.degrees))
        object.__setattr__(self, 'degrees', padded)

    @classmethod
    def from_terms(
        cls, degrees: Sequence[Iterable[PeriodicTerm | Sequence[float]]]
    ) -> SeriesSet:
        """Build a set from per-degree term lists (missing trailing degrees are empty)."""
        return cls(tuple(make_series(terms) for terms in degrees))

    def is_empty(self) -> bool:
        """True if no degree has any term."""
        return all(len(s) == 0 for s in self.degrees)

    def term_count(self) -> int:
        """Total number of terms over all degrees."""
        return sum(len(s) for s in self.degrees)


def assemble_coordinate(t: float, series_set: SeriesSet) -> float:
    """Combine the six degree series into one coordinate value (Horner's scheme).

    Computes ``T0 + t*(T1 + t*(T2 + t*(T3 + t*(T4 + t*T5))))``. Empty degrees
    contribute 0.

    Parameters:
        t: Time argument in Julian millennia from J2000.0.
        series_set: The six degree series for one coordinate.

    Returns:
        Coordinate value (radians for L and B, AU for R).
    """
    value = 0.0
    for series in reversed(series_set.degrees):
        value = value * t + evaluate_series(t, series)
    return value
