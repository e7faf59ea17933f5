# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Astronomical arguments driving the ocean tide constituent phases.

Delaunay fundamental arguments as linear functions of the days elapsed
since J2000.0, and Greenwich Mean Sidereal Time.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import numpy as np

from geotide.domain.time_conversion import days_since_j2000

if TYPE_CHECKING:
    from geotide.ports import FrameReduction

# (value at J2000 [deg], rate [deg/day]) for l, l', F, D, Ω
_DELAUNAY_POLYNOMIALS: tuple[tuple[float, float], ...] = (
    (134.96, 13.064993),   # l   mean anomaly of the Moon
    (357.53, 0.985600),    # l'  mean anomaly of the Sun
    (93.27, 13.229350),    # F   mean argument of latitude of the Moon
    (297.85, 12.190749),   # D   mean elongation of the Moon from the Sun
    (125.04, -0.052954),   # Ω   longitude of the Moon's ascending node
)


def delaunay_arguments(epoch: datetime) -> np.ndarray:
    """Delaunay arguments (l, l', F, D, Ω) in radians.

    Not reduced to [0, 2π); they only enter through sines and cosines.
    """
    d = days_since_j2000(epoch)
    return np.radians(
        [value + rate * d for value, rate in _DELAUNAY_POLYNOMIALS]
    )


def sidereal_time(epoch: datetime, reduction: FrameReduction) -> float:
    """Greenwich Mean Sidereal Time in radians, from the reduction service."""
    return float(reduction.greenwich_mean_sidereal_time(epoch))


def gmst_rad(epoch: datetime) -> float:
    """
    Compute Greenwich Mean Sidereal Time for a given UTC epoch.

    Uses the IAU formula based on Julian centuries from J2000.0:
        GMST(°) = 280.46061837 + 360.98564736629 * (JD - 2451545.0)
                  + 0.000387933 * T² - T³/38710000

    Args:
        epoch: UTC datetime.

    Returns:
        GMST in radians, normalized to [0, 2π).
    """
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)

    j2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    jd_since_j2000 = (epoch - j2000).total_seconds() / 86400.0
    t_centuries = jd_since_j2000 / 36525.0

    gmst_deg = (
        280.46061837
        + 360.98564736629 * jd_since_j2000
        + 0.000387933 * t_centuries**2
        - t_centuries**3 / 38710000.0
    ) % 360.0

    return math.radians(gmst_deg)
