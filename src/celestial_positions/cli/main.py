"""CLI entry point: celestial-positions helio|geo|elements subcommands."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import NoReturn, cast

from celestial_positions.angle_utils import dms_string, parse_angle
from celestial_positions.config import get_log_level
from celestial_positions.constants import DEGREES_PER_HOUR_RA
from celestial_positions.elements import OrbitalElements, geocentric_equatorial
from celestial_positions.errors import CelestialPositionsError
from celestial_positions.frames import mean_obliquity, sun_rectangular
from celestial_positions.positions import geocentric_position, heliocentric_coords
from celestial_positions.tables import Body, SeriesRegistry, default_registry, load_registry
from celestial_positions.time_utils import jd_from_string

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or CELESTIAL_POSITIONS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = get_log_level()
    if env_level is not None:
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _parse_time(text: str) -> float:
    """Julian Date (TDB) from a bare JD number or a date/time string."""
    try:
        return float(text)
    except ValueError:
        return jd_from_string(text)


def _parse_angle_deg(text: str) -> float:
    """argparse type: sexagesimal or decimal degrees to radians."""
    value = parse_angle(text)
    if value is None:
        raise argparse.ArgumentTypeError(f'invalid angle {text!r}')
    return math.radians(value)


def _parse_body(text: str) -> Body:
    try:
        return Body.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _registry(args: argparse.Namespace) -> SeriesRegistry:
    if args.tables:
        return load_registry(args.tables)
    return default_registry()


def _helio_cmd(args: argparse.Namespace) -> int:
    """Print heliocentric L, B, R of a planet (helio subcommand)."""
    jd = _parse_time(args.time)
    coord = heliocentric_coords(args.body, jd, _registry(args))
    print(f'JD (TDB)   {jd:.6f}')
    print(f'L          {math.degrees(coord.longitude):.8f} deg')
    print(f'B          {math.degrees(coord.latitude):.8f} deg')
    print(f'R          {coord.radius:.9f} AU')
    return 0


def _geo_cmd(args: argparse.Namespace) -> int:
    """Print geocentric ecliptic longitude, latitude and light-time (geo subcommand)."""
    jd = _parse_time(args.time)
    geo = geocentric_position(args.body, jd, _registry(args))
    lon_deg = math.degrees(geo.longitude) % 360.0
    print(f'JD (TDB)   {jd:.6f}')
    print(f'Longitude  {lon_deg:.8f} deg')
    print(f'Latitude   {math.degrees(geo.latitude):.8f} deg')
    print(f'Light-time {geo.light_time:.8f} days')
    return 0


def _elements_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print geocentric RA/Dec of a body on a Keplerian orbit (elements subcommand)."""
    if args.radius is not None and args.true_anomaly is not None:
        elements = OrbitalElements(
            inclination=args.inclination,
            node=args.node,
            perihelion=args.perihelion,
            true_anomaly=args.true_anomaly,
            radius=args.radius,
        )
    elif None not in (args.mean_anomaly, args.eccentricity, args.semi_major_axis):
        elements = OrbitalElements.from_mean_anomaly(
            inclination=args.inclination,
            node=args.node,
            perihelion=args.perihelion,
            mean_anomaly=args.mean_anomaly,
            eccentricity=args.eccentricity,
            semi_major_axis=args.semi_major_axis,
        )
    else:
        parser.error(
            'elements needs --true-anomaly and --radius, '
            'or --mean-anomaly, --eccentricity and --semi-major-axis'
        )
    jd = _parse_time(args.time)
    earth = heliocentric_coords(Body.EARTH, jd, _registry(args))
    obliquity = mean_obliquity(jd)
    sun = sun_rectangular(earth.longitude, earth.latitude, earth.radius, obliquity)
    logger.debug('Sun (X, Y, Z) = %r AU, obliquity = %r rad', sun, obliquity)
    eq = geocentric_equatorial(
        elements, sun, obliquity, raw_angle_product=args.raw_angle_product
    )
    ra_deg = math.degrees(eq.right_ascension)
    print(f'JD (TDB)   {jd:.6f}')
    print(f'RA         {dms_string(ra_deg / DEGREES_PER_HOUR_RA, "hms", modulus=24)}')
    print(f'Dec        {dms_string(math.degrees(eq.declination), "dms")}')
    print(f'Light-time {eq.light_time:.8f} days')
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the celestial-positions CLI (helio | geo | elements).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='celestial-positions',
        description='Planet positions from VSOP87 series and body positions from orbital elements.',
    )
    parser.add_argument(
        '--tables',
        type=str,
        default=None,
        help='VSOP87 directory or CSV term table; env: CELESTIAL_SERIES_PATH',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    subparsers = parser.add_subparsers(dest='command', required=True)

    helio_parser = subparsers.add_parser('helio', help='Heliocentric L, B, R of a planet')
    helio_parser.add_argument('body', type=_parse_body, help='Planet name (e.g. mars)')
    helio_parser.add_argument('time', help="Julian Date or UTC date/time (e.g. '2024-03-01 12:00')")
    helio_parser.set_defaults(func=_helio_cmd)

    geo_parser = subparsers.add_parser('geo', help='Geocentric ecliptic position of a planet')
    geo_parser.add_argument('body', type=_parse_body, help='Planet name (e.g. jupiter)')
    geo_parser.add_argument('time', help='Julian Date or UTC date/time')
    geo_parser.set_defaults(func=_geo_cmd)

    elem_parser = subparsers.add_parser(
        'elements', help='Geocentric RA/Dec of a comet or asteroid from orbital elements'
    )
    elem_parser.add_argument('time', help='Julian Date or UTC date/time')
    elem_parser.add_argument(
        '--inclination', type=_parse_angle_deg, required=True, help='i (degrees or "d m s")'
    )
    elem_parser.add_argument(
        '--node', type=_parse_angle_deg, required=True, help='Longitude of ascending node'
    )
    elem_parser.add_argument(
        '--perihelion', type=_parse_angle_deg, required=True, help='Argument of perihelion'
    )
    elem_parser.add_argument('--true-anomaly', type=_parse_angle_deg, default=None)
    elem_parser.add_argument('--radius', type=float, default=None, help='r (AU)')
    elem_parser.add_argument('--mean-anomaly', type=_parse_angle_deg, default=None)
    elem_parser.add_argument('--eccentricity', type=float, default=None)
    elem_parser.add_argument('--semi-major-axis', type=float, default=None, help='a (AU)')
    elem_parser.add_argument(
        '--raw-angle-product',
        action='store_true',
        help='Legacy Gauss form r*a*(A+w+v) without the sine',
    )
    elem_parser.set_defaults(func=lambda a: _elements_cmd(elem_parser, a))

    args = parser.parse_args(argv)
    _configure_logging(verbose=args.verbose)
    try:
        return cast(int, args.func(args))
    except (CelestialPositionsError, ValueError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
