"""Configuration: coefficient table and leap-second paths from environment."""

from __future__ import annotations

import os
from pathlib import Path

# Env var overrides with sensible defaults.
DEFAULT_SERIES_PATH = '/usr/local/share/vsop87/'
LOG_LEVEL_ENV = 'CELESTIAL_POSITIONS_LOG'


def get_series_path() -> str:
    """Return the coefficient table location (CELESTIAL_SERIES_PATH env var or default).

    The path is either a directory of VSOP87 files (VSOP87D.mer ... VSOP87D.nep)
    or a single CSV term table.

    Returns:
        Path string.
    """
    return os.environ.get('CELESTIAL_SERIES_PATH', DEFAULT_SERIES_PATH)


def get_log_level() -> str | None:
    """Return the log level name from CELESTIAL_POSITIONS_LOG, or None if unset/invalid.

    Returns:
        One of 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', or None.
    """
    level = os.environ.get(LOG_LEVEL_ENV, '').strip().upper()
    if level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        return level
    return None


def get_leapsecs_path() -> str | None:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Prefers JULIAN_LEAPSECS, then a .tls file beside the coefficient tables.

    Returns:
        Path string to an LSK, or None to use the rms-julian bundled LSK.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    if path:
        return path
    base = Path(get_series_path())
    if base.is_file():
        base = base.parent
    for name in ('naif0012.tls', 'naif0011.tls', 'naif0010.tls', 'leapseconds.tls'):
        p = base / name
        if p.exists():
            return str(p)
    return None
