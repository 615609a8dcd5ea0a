"""Diagnostics package.

- round_trip: randomized conversion checks, standard library only
- leap_rules: leap-rule comparison; plotting needs the `diagnostics` extra (numpy, matplotlib)
"""

__all__ = ["round_trip", "leap_rules"]
