"""Tests for the Body enum, the read-only registry and the table loaders."""

from __future__ import annotations

from pathlib import Path

import pytest

from celestial_positions import tables
from celestial_positions.errors import DataError
from celestial_positions.series import SeriesSet
from celestial_positions.tables import Body, BodySeries, SeriesRegistry, load_registry

VSOP87_EARTH = """\
 VSOP87 VERSION D4    EARTH     VARIABLE 1 (LBR)       *T**0      2 TERMS    HELIOCENTRIC DYNAMICAL ECLIPTIC AND EQUINOX OF THE DATE
 4310    1  0  0  0  0  0  0  0  0  0  0  0  0  0  0 0.00000000000     0.00000000000 1.75347045673 0.00000000000        0.00000000000
 4310    2  0  0  1  0  0  0  0  0  0  0  0  0  0  0 0.00000000000     0.00000000000 0.03341656456 4.66925680417     6283.07584999140
 VSOP87 VERSION D4    EARTH     VARIABLE 1 (LBR)       *T**1      1 TERMS    HELIOCENTRIC DYNAMICAL ECLIPTIC AND EQUINOX OF THE DATE
 4311    1  0  0  0  0  0  0  0  0  0  0  0  0  0  0 0.00000000000     0.00000000000 6283.07584999140 0.00000000000        0.00000000000
 VSOP87 VERSION D4    EARTH     VARIABLE 2 (LBR)       *T**0      1 TERMS    HELIOCENTRIC DYNAMICAL ECLIPTIC AND EQUINOX OF THE DATE
 4320    1  0  0  0  0  0  0  0  0  0  0  0  0  0  0 0.00000000000     0.00000000000 0.00000279620 3.19870156017    84334.66158130829
 VSOP87 VERSION D4    EARTH     VARIABLE 3 (LBR)       *T**0      1 TERMS    HELIOCENTRIC DYNAMICAL ECLIPTIC AND EQUINOX OF THE DATE
 4330    1  0  0  0  0  0  0  0  0  0  0  0  0  0  0 0.00000000000     0.00000000000 1.00013988784 0.00000000000        0.00000000000
"""


def test_body_parse_accepts_names_and_extensions() -> None:
    """Body.parse matches planet names and VSOP87 extensions case-insensitively."""
    assert Body.parse('Mars') is Body.MARS
    assert Body.parse(' NEPTUNE ') is Body.NEPTUNE
    assert Body.parse('jup') is Body.JUPITER
    assert len(Body) == 8


def test_body_parse_rejects_unknown_name() -> None:
    """Unknown names raise ValueError listing the planets."""
    with pytest.raises(ValueError, match='pluto'):
        Body.parse('pluto')


def test_unbound_body_raises_data_error(registry: SeriesRegistry) -> None:
    """Looking up a planet with no table is a DataError, never a default."""
    with pytest.raises(DataError, match='Jupiter'):
        registry[Body.JUPITER]
    assert isinstance(DataError('x'), LookupError)


def test_registry_membership_and_get(registry: SeriesRegistry) -> None:
    """Membership and get follow Mapping semantics for unbound and foreign keys."""
    assert Body.MARS in registry
    assert Body.JUPITER not in registry
    assert 'mars' not in registry
    assert registry.get(Body.JUPITER) is None
    assert registry.get(Body.MARS) is registry[Body.MARS]
    with pytest.raises(DataError, match="'mars'"):
        registry['mars']  # type: ignore[index]


def test_registry_is_read_only(registry: SeriesRegistry) -> None:
    """The registry exposes read access only."""
    assert set(registry) == {Body.EARTH, Body.MARS}
    assert len(registry) == 2
    with pytest.raises(TypeError):
        registry[Body.JUPITER] = registry[Body.MARS]  # type: ignore[index]
    with pytest.raises(TypeError):
        registry._tables[Body.JUPITER] = registry[Body.MARS]  # type: ignore[index]


def test_registry_rejects_empty_coordinate() -> None:
    """A body bound with an empty L, B or R table is rejected at construction."""
    full = SeriesSet.from_terms([[(1.0, 0.0, 0.0)]])
    with pytest.raises(DataError, match='no B terms'):
        SeriesRegistry({Body.VENUS: BodySeries(L=full, B=SeriesSet(), R=full)})


def test_load_csv_table(csv_table: Path) -> None:
    """CSV tables skip header and comment lines and bind each body found."""
    registry = load_registry(csv_table)
    assert set(registry) == {Body.EARTH, Body.MARS}
    earth = registry[Body.EARTH]
    assert earth.L.term_count() == 2
    assert len(earth.L.degrees[1]) == 1
    assert earth.R.term_count() == 2
    assert registry.source == str(csv_table)


def test_load_csv_rejects_malformed_row(tmp_path: Path) -> None:
    """A bad row raises DataError instead of being dropped."""
    path = tmp_path / 'bad.csv'
    path.write_text('earth,L,0,1.0,0.0\n', encoding='utf-8')
    with pytest.raises(DataError, match='expected 6 fields'):
        load_registry(path)
    path.write_text('earth,Q,0,1.0,0.0,0.0\n', encoding='utf-8')
    with pytest.raises(DataError, match='coordinate'):
        load_registry(path)
    path.write_text('earth,L,9,1.0,0.0,0.0\n', encoding='utf-8')
    with pytest.raises(DataError, match='degree'):
        load_registry(path)
    path.write_text('earth,L,0,one,0.0,0.0\n', encoding='utf-8')
    with pytest.raises(DataError, match='numeric'):
        load_registry(path)


def test_load_vsop87_directory(tmp_path: Path) -> None:
    """A directory binds the bodies whose VSOP87D files exist."""
    (tmp_path / 'VSOP87D.ear').write_text(VSOP87_EARTH, encoding='ascii')
    registry = load_registry(tmp_path)
    assert set(registry) == {Body.EARTH}
    earth = registry[Body.EARTH]
    assert earth.L.term_count() == 3
    assert earth.L.degrees[0][1, 0] == pytest.approx(0.03341656456)
    assert earth.L.degrees[0][1, 2] == pytest.approx(6283.07584999140)
    assert earth.L.degrees[1][0, 0] == pytest.approx(6283.07584999140)
    assert earth.B.degrees[0][0, 1] == pytest.approx(3.19870156017)
    assert earth.R.degrees[0][0, 0] == pytest.approx(1.00013988784)
    with pytest.raises(DataError):
        registry[Body.MARS]


def test_vsop87_term_before_header(tmp_path: Path) -> None:
    """Terms outside a VARIABLE/T** block are a DataError."""
    path = tmp_path / 'VSOP87D.mar'
    path.write_text(VSOP87_EARTH.split('\n', 1)[1], encoding='ascii')
    with pytest.raises(DataError, match='before any VSOP87 header'):
        tables.read_vsop87_file(path, Body.MARS)


def test_missing_path_raises_data_error(tmp_path: Path) -> None:
    """A configured path that does not exist is a DataError."""
    with pytest.raises(DataError, match='does not exist'):
        load_registry(tmp_path / 'nowhere')


def test_default_registry_reads_env_once(monkeypatch: pytest.MonkeyPatch, csv_table: Path) -> None:
    """default_registry loads CELESTIAL_SERIES_PATH once and caches it."""
    monkeypatch.setenv('CELESTIAL_SERIES_PATH', str(csv_table))
    tables.default_registry.cache_clear()
    try:
        first = tables.default_registry()
        assert Body.MARS in first
        assert tables.default_registry() is first
    finally:
        tables.default_registry.cache_clear()


def test_csv_undecodable_bytes_raise_data_error(tmp_path: Path) -> None:
    """Bytes that are not UTF-8 are reported as DataError."""
    path = tmp_path / 'terms.csv'
    path.write_bytes(b'earth,L,0,1.0,0.0,0.0\n\xff\xfe,L,0,1.0,0.0,0.0\n')
    with pytest.raises(DataError, match='terms.csv'):
        load_registry(path)


def test_csv_oversized_field_raises_data_error(tmp_path: Path) -> None:
    """csv module errors surface as DataError."""
    path = tmp_path / 'huge.csv'
    path.write_text('earth,L,0,' + '1' * 200_000 + ',0.0,0.0\n', encoding='utf-8')
    with pytest.raises(DataError, match='huge.csv'):
        load_registry(path)


def test_vsop87_undecodable_bytes_raise_data_error(tmp_path: Path) -> None:
    """Non-ASCII bytes in a VSOP87 file are reported as DataError."""
    path = tmp_path / 'VSOP87D.ear'
    path.write_bytes(VSOP87_EARTH.encode('ascii') + b' caf\xe9\n')
    with pytest.raises(DataError, match='VSOP87D.ear'):
        load_registry(tmp_path)
