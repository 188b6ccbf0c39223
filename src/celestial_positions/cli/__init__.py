"""Command-line interface: celestial-positions helio|geo|elements."""
