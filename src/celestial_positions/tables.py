"""Body enumeration and the read-only coefficient registry (Body -> L, B, R series).

Tables are loaded once, either from VSOP87 ASCII files (one file per body,
``VSOP87D.<ext>``) or from a single CSV term table, and never mutated.
"""

from __future__ import annotations

import csv
import enum
import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from celestial_positions.config import get_series_path
from celestial_positions.constants import COORDINATES, SERIES_DEGREES
from celestial_positions.errors import DataError
from celestial_positions.series import SeriesSet, make_series

logger = logging.getLogger(__name__)


class Body(enum.Enum):
    """The eight major planets; value is the VSOP87 file extension."""

    MERCURY = 'mer'
    VENUS = 'ven'
    EARTH = 'ear'
    MARS = 'mar'
    JUPITER = 'jup'
    SATURN = 'sat'
    URANUS = 'ura'
    NEPTUNE = 'nep'

    @classmethod
    def parse(cls, name: str) -> Body:
        """Return the Body for a name or VSOP87 extension (case-insensitive).

        Raises:
            ValueError: If the name matches no planet.
        """
        key = name.strip().lower()
        for body in cls:
            if key in (body.name.lower(), body.value):
                return body
        names = ', '.join(b.name.lower() for b in cls)
        raise ValueError(f'Unknown body {name!r}; expected one of {names}')


@dataclass(frozen=True)
class BodySeries:
    """Series sets for the three heliocentric coordinates of one body."""

    L: SeriesSet
    B: SeriesSet
    R: SeriesSet

    def coordinate(self, name: str) -> SeriesSet:
        """Return the series set for 'L', 'B' or 'R'."""
        if name not in COORDINATES:
            raise KeyError(name)
        return getattr(self, name)


class SeriesRegistry(Mapping[Body, BodySeries]):
    """Immutable mapping of Body to its coefficient tables.

    A body is only bound when all three coordinates have at least one term;
    lookups of unbound bodies raise DataError.
    """

    def __init__(self, tables: Mapping[Body, BodySeries], source: str = '<memory>') -> None:
        for body, series in tables.items():
            for name in COORDINATES:
                if series.coordinate(name).is_empty():
                    raise DataError(f'{body.name.title()} has no {name} terms in {source}')
        self._tables = MappingProxyType(dict(tables))
        self.source = source

    def __getitem__(self, body: Body) -> BodySeries:
        try:
            return self._tables[body]
        except KeyError:
            name = body.name.title() if isinstance(body, Body) else repr(body)
            raise DataError(
                f'No coefficient table bound to {name} (source: {self.source})'
            ) from None

    def __contains__(self, body: object) -> bool:
        return body in self._tables

    def get(  # type: ignore[override]
        self, body: Body, default: BodySeries | None = None
    ) -> BodySeries | None:
        """Return the tables bound to body, or default when unbound."""
        return self._tables.get(body, default)

    def __iter__(self) -> Iterator[Body]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        bodies = ', '.join(b.name.title() for b in self._tables)
        return f'SeriesRegistry({bodies}; source={self.source!r})'


class _TableBuilder:
    """Accumulates (body, coordinate, degree) -> term rows while a file is read."""

    def __init__(self) -> None:
        self._rows: dict[tuple[Body, str, int], list[tuple[float, float, float]]] = {}

    def add(
        self, body: Body, coordinate: str, degree: int, term: tuple[float, float, float]
    ) -> None:
        self._rows.setdefault((body, coordinate, degree), []).append(term)

    def bodies(self) -> set[Body]:
        return {key[0] for key in self._rows}

    def build(self) -> dict[Body, BodySeries]:
        out: dict[Body, BodySeries] = {}
        for body in self.bodies():
            sets = {}
            for name in COORDINATES:
                sets[name] = SeriesSet(
                    tuple(
                        make_series(self._rows.get((body, name, d), ()))
                        for d in range(SERIES_DEGREES)
                    )
                )
            out[body] = BodySeries(**sets)
        return out


def _parse_degree(value: str, where: str) -> int:
    try:
        degree = int(value)
    except ValueError:
        raise DataError(f'{where}: degree must be an integer, got {value!r}') from None
    if not 0 <= degree < SERIES_DEGREES:
        raise DataError(f'{where}: degree must be 0-{SERIES_DEGREES - 1}, got {degree}')
    return degree


def _parse_term(fields: list[str], where: str) -> tuple[float, float, float]:
    try:
        a, b, c = (float(x) for x in fields)
    except ValueError:
        raise DataError(f'{where}: amplitude/phase/frequency must be numeric: {fields!r}') from None
    return (a, b, c)


# "VSOP87 VERSION D1    EARTH     VARIABLE 1 (LBR)       *T**0    559 TERMS ..."
_VSOP87_HEADER = re.compile(r'VARIABLE\s+(\d)\b.*\*T\*\*(\d)', re.IGNORECASE)


def read_vsop87_file(
    path: str | Path, body: Body, builder: _TableBuilder | None = None
) -> _TableBuilder:
    """Read one VSOP87 ASCII file (version D, spherical L/B/R) into a builder.

    Header lines carry the coordinate (``VARIABLE n``) and degree (``*T**d``);
    every other non-blank line is a term whose last three fields are A, B, C.

    Parameters:
        path: VSOP87 file for the body.
        body: Body the file describes.
        builder: Builder to add to; a new one is created when None.

    Returns:
        The builder holding the file's terms.

    Raises:
        DataError: If the file cannot be read or a line is malformed.
    """
    builder = builder or _TableBuilder()
    path = Path(path)
    coordinate: str | None = None
    degree = 0
    try:
        f = path.open(encoding='ascii')
    except OSError as e:
        raise DataError(f'Cannot read VSOP87 file {path}: {e}') from e
    with f:
        try:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                where = f'{path.name} line {line_no}'
                header = _VSOP87_HEADER.search(line)
                if header is not None:
                    variable = int(header.group(1))
                    if not 1 <= variable <= len(COORDINATES):
                        raise DataError(f'{where}: VARIABLE must be 1-3, got {variable}')
                    coordinate = COORDINATES[variable - 1]
                    degree = _parse_degree(header.group(2), where)
                    continue
                if coordinate is None:
                    logger.error(
                        '%s: term line before any VSOP87 header: %r', where, line.rstrip()
                    )
                    raise DataError(f'{where}: term line before any VSOP87 header')
                fields = line.split()
                if len(fields) < 3:
                    logger.error(
                        '%s: expected at least 3 fields, got %d: %r',
                        where,
                        len(fields),
                        line.rstrip(),
                    )
                    raise DataError(f'{where}: expected A B C at end of term line')
                builder.add(body, coordinate, degree, _parse_term(fields[-3:], where))
        except UnicodeDecodeError as e:
            logger.error('Cannot decode VSOP87 file %s: %s', path, e)
            raise DataError(f'{path}: {e}') from e
    logger.debug('Read VSOP87 terms for %s from %s', body.name.title(), path)
    return builder


def read_csv_table(path: str | Path) -> _TableBuilder:
    """Read a CSV term table: ``body,coordinate,degree,amplitude,phase,frequency``.

    Blank lines and lines starting with '!' or '#' are ignored; a first row whose
    degree field is not numeric is treated as a header.

    Raises:
        DataError: If the file cannot be read or a row is malformed.
    """
    builder = _TableBuilder()
    path = Path(path)
    try:
        f = path.open(newline='', encoding='utf-8')
    except OSError as e:
        raise DataError(f'Cannot read coefficient table {path}: {e}') from e
    first_row = True
    with f:
        try:
            for line_no, row in enumerate(csv.reader(f), start=1):
                if not row or not ''.join(row).strip() or row[0].lstrip().startswith(('!', '#')):
                    continue
                row = [x.strip() for x in row]
                where = f'{path.name} line {line_no}'
                if len(row) != 6:
                    logger.error('%s: expected 6 fields, got %d: %r', where, len(row), row)
                    raise DataError(f'{where}: expected 6 fields, got {len(row)}')
                if first_row:
                    first_row = False
                    if not row[2].lstrip('-').isdigit():
                        continue
                try:
                    body = Body.parse(row[0])
                except ValueError as e:
                    raise DataError(f'{where}: {e}') from None
                coordinate = row[1].upper()
                if coordinate not in COORDINATES:
                    raise DataError(f'{where}: coordinate must be L, B or R, got {row[1]!r}')
                degree = _parse_degree(row[2], where)
                builder.add(body, coordinate, degree, _parse_term(row[3:], where))
        except (UnicodeDecodeError, csv.Error) as e:
            logger.error('Cannot read coefficient table %s: %s', path, e)
            raise DataError(f'{path}: {e}') from e
    return builder


def load_registry(path: str | Path) -> SeriesRegistry:
    """Build a registry from a VSOP87 directory or a CSV table file.

    A directory contributes every ``VSOP87D.<ext>`` file present; bodies with no
    file stay unbound.

    Raises:
        DataError: If the path does not exist or its content is malformed.
    """
    base = Path(path)
    if base.is_dir():
        builder = _TableBuilder()
        for body in Body:
            candidate = base / f'VSOP87D.{body.value}'
            if candidate.exists():
                read_vsop87_file(candidate, body, builder)
    elif base.is_file():
        builder = read_csv_table(base)
    else:
        raise DataError(f'Coefficient table path does not exist: {base}')
    registry = SeriesRegistry(builder.build(), source=str(base))
    logger.info('Loaded coefficient tables for %d bodies from %s', len(registry), base)
    return registry


@lru_cache(maxsize=1)
def default_registry() -> SeriesRegistry:
    """Return the process-wide registry, loaded once from CELESTIAL_SERIES_PATH."""
    return load_registry(get_series_path())
