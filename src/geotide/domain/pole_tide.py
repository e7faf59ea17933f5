# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Pole tide corrections to the (2, 1) geopotential coefficients.

Polar motion deforms the solid Earth and the ocean surface. The wobble
variables are the deviation of the instantaneous pole from its running
average:

    m1 = xp - x̄p
    m2 = -(yp - ȳp)

Both corrections are only applied when Earth orientation data is
available; otherwise the (2, 1) terms are left untouched.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geotide.ports import FrameReduction

_log = logging.getLogger(__name__)

# Solid Earth pole tide
_SOLID_POLE_SCALE: float = 1.721e-9
_SOLID_POLE_COUPLING: float = 0.0115

# Ocean pole tide
_OCEAN_POLE_SCALE_C: float = 2.1778e-10
_OCEAN_POLE_SCALE_S: float = 1.7232e-10
_OCEAN_POLE_COUPLING_C: float = 0.01724
_OCEAN_POLE_COUPLING_S: float = 0.03365
_OCEAN_POLE_NORM: float = math.sqrt(5.0 / 3.0)


def polar_wobble(
    reduction: FrameReduction, epoch: datetime,
) -> tuple[float, float] | None:
    """Wobble variables (m1, m2) in radians, or None without EOP data."""
    if not reduction.is_earth_orientation_initialized():
        _log.debug("Earth orientation not initialized; pole tide skipped")
        return None

    xp, yp = reduction.polar_motion(epoch)
    xp_avg, yp_avg = reduction.polar_motion_running_average(epoch)

    return (xp - xp_avg, yp_avg - yp)


def solid_pole_tide(m1: float, m2: float) -> tuple[float, float]:
    """(ΔC21, ΔS21) due to the solid Earth pole tide."""
    return (
        -_SOLID_POLE_SCALE * (m1 - _SOLID_POLE_COUPLING * m2),
        -_SOLID_POLE_SCALE * (m2 + _SOLID_POLE_COUPLING * m1),
    )


def ocean_pole_tide(m1: float, m2: float) -> tuple[float, float]:
    """(ΔC21, ΔS21) due to the ocean pole tide."""
    return (
        -_OCEAN_POLE_SCALE_C * (m1 - _OCEAN_POLE_COUPLING_C * m2) * _OCEAN_POLE_NORM,
        -_OCEAN_POLE_SCALE_S * (m2 - _OCEAN_POLE_COUPLING_S * m1) * _OCEAN_POLE_NORM,
    )
