"""Fixed constants: epochs, time and angle units, light-time, obliquity, series layout."""

import math

# Time
J2000_JD = 2451545.0  # Julian Date of J2000.0 (TDB)
DAYS_PER_JULIAN_CENTURY = 36525.0
DAYS_PER_JULIAN_MILLENNIUM = 365250.0
SECONDS_PER_DAY = 86400.0

# Angle
TWOPI = 2.0 * math.pi
DEGREES_PER_CIRCLE = 360.0
ARCMIN_PER_DEGREE = 60.0
ARCSEC_PER_DEGREE = 3600.0
DEGREES_PER_HOUR_RA = 15.0  # right ascension: 360° / 24 h

# Light-time for one astronomical unit, in days
LIGHT_TIME_DAYS_PER_AU = 0.0057755183

# Mean obliquity of the ecliptic, IAU 1980 (arcseconds and polynomial in centuries)
OBLIQUITY_J2000_ARCSEC = 84381.448
OBLIQUITY_RATE_ARCSEC = (-46.8150, -0.00059, 0.001813)

# Number of harmonic degrees (T**0 .. T**5) per coordinate in a VSOP87 table
SERIES_DEGREES = 6

# Coordinate tags in table order (VSOP87 "VARIABLE 1..3")
COORDINATES = ('L', 'B', 'R')

# Refraction formulas
RIGOROUS_REFRACTION_MIN_ALTITUDE_DEG = 15.0
STANDARD_PRESSURE_MBAR = 1010.0
STANDARD_TEMPERATURE_K = 283.0

# Kepler solver
KEPLER_MAX_ITERATIONS = 50
KEPLER_TOLERANCE = 1e-14
