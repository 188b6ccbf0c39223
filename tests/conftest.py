"""Shared fixtures: small coefficient tables built from leading VSOP87D terms."""

from __future__ import annotations

from pathlib import Path

import pytest

from celestial_positions.series import SeriesSet
from celestial_positions.tables import Body, BodySeries, SeriesRegistry

# Leading terms only; enough for deterministic, hand-checkable values.
EARTH_TERMS = {
    'L': [[(1.75347045673, 0.0, 0.0)], [(6283.07584999140, 0.0, 0.0)]],
    'B': [[(0.00000279620, 3.19870156017, 84334.66158130829)]],
    'R': [[(1.00013988784, 0.0, 0.0), (0.01670699632, 3.09846350258, 6283.07584999140)]],
}
MARS_TERMS = {
    'L': [[(6.20347711581, 0.0, 0.0)], [(3340.61242669980, 0.0, 0.0)]],
    'B': [[(0.03197134986, 3.76832042431, 3340.61242669980)]],
    'R': [[(1.53033488271, 0.0, 0.0), (0.14184953160, 3.47971283528, 3340.61242669980)]],
}


def _body_series(terms: dict[str, list[list[tuple[float, float, float]]]]) -> BodySeries:
    return BodySeries(**{name: SeriesSet.from_terms(degrees) for name, degrees in terms.items()})


@pytest.fixture
def registry() -> SeriesRegistry:
    """Registry with Earth and Mars bound; every other planet unbound."""
    return SeriesRegistry(
        {Body.EARTH: _body_series(EARTH_TERMS), Body.MARS: _body_series(MARS_TERMS)},
        source='conftest',
    )


@pytest.fixture
def csv_table(tmp_path: Path) -> Path:
    """CSV term table with the same Earth and Mars terms as the registry fixture."""
    lines = ['body,coordinate,degree,amplitude,phase,frequency', '! leading VSOP87D terms']
    for body, terms in (('earth', EARTH_TERMS), ('mars', MARS_TERMS)):
        for name, degrees in terms.items():
            for degree, rows in enumerate(degrees):
                for a, b, c in rows:
                    lines.append(f'{body},{name},{degree},{a!r},{b!r},{c!r}')
    path = tmp_path / 'terms.csv'
    path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
    return path
