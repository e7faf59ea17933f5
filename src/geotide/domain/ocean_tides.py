# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Ocean tide corrections to the geopotential coefficients.

The FES2004 amplitudes of each constituent f are turned into unnormalized
coefficient deviations:

    ΔC_lm = F_lm Σ_f [(C+ + C-) cos θ_f + (S+ + S-) sin θ_f]
    ΔS_lm = F_lm Σ_f [(C- - C+) sin θ_f + (S+ - S-) cos θ_f]    (m > 0)

    F_lm  = 4πGρ_w/g_e · (1 + k'_l)/(2l+1) · sqrt((l-m)! dm (2l+1) / (l+m)!)

where θ_f = m (θ_g + π) - N_f · F, θ_g is GMST, F the Delaunay
arguments and k'_l the load deformation coefficients.

References:
    IERS Conventions 2010, Chapter 6.3
    Lyard et al. (2006), FES2004
"""

import math

import numpy as np

from geotide.domain.coefficient_deviations import MAX_TIDE_DEGREE, CoefficientDeviations
from geotide.domain.ocean_tide_table import CONSTITUENT_MULTIPLIERS, OceanTideTable
from geotide.domain.pole_tide import ocean_pole_tide

OCEAN_TIDE_MAX_DEGREE: int = MAX_TIDE_DEGREE

_WATER_DENSITY: float = 1025.0e9  # kg/km³
_GRAVITATIONAL_CONSTANT: float = 6.67408e-20  # km³/(kg s²)
_MEAN_EQUATORIAL_GRAVITY: float = 9.7803278e-3  # km/s²

# Load deformation coefficients k'_l, l = 2..6
LOAD_DEFORMATION: dict[int, float] = {
    2: -0.3075,
    3: -0.1950,
    4: -0.1320,
    5: -0.1032,
    6: -0.0892,
}


def ocean_scale_factor(l: int, m: int) -> float:
    """F_lm: amplitude to unnormalized coefficient conversion."""
    const = 4.0 * math.pi * _GRAVITATIONAL_CONSTANT * _WATER_DENSITY / _MEAN_EQUATORIAL_GRAVITY
    dm = 1 if m == 0 else 2
    return (
        const
        * (1.0 + LOAD_DEFORMATION[l])
        / (2.0 * l + 1.0)
        * math.sqrt(
            math.factorial(l - m) * dm * (2.0 * l + 1.0) / math.factorial(l + m)
        )
    )


def constituent_phases(
    order: int, delaunay: np.ndarray, theta_g: float,
) -> np.ndarray:
    """θ_f for every constituent at the given order m."""
    return order * (theta_g + math.pi) - CONSTITUENT_MULTIPLIERS @ delaunay


def ocean_tide_deviations(
    table: OceanTideTable,
    delaunay: np.ndarray,
    theta_g: float,
    wobble: tuple[float, float] | None = None,
    max_degree: int = OCEAN_TIDE_MAX_DEGREE,
) -> CoefficientDeviations:
    """Coefficient deviations from ocean tides, degree 2 to max_degree.

    Args:
        table: Parsed constituent amplitudes.
        delaunay: Delaunay arguments (l, l', F, D, Ω) in radians.
        theta_g: Greenwich Mean Sidereal Time in radians.
        wobble: Pole tide wobble variables (m1, m2), or None to skip the
            ocean pole tide.
        max_degree: Highest degree synthesized; capped by the table.

    Returns:
        CoefficientDeviations with the requested max_degree.
    """
    max_degree = min(max_degree, table.max_degree)
    dev = CoefficientDeviations(max_degree=max_degree)

    c_sum = table.dc_plus + table.dc_minus
    s_sum = table.ds_plus + table.ds_minus
    c_diff = table.dc_minus - table.dc_plus
    s_diff = table.ds_plus - table.ds_minus

    for m in range(max_degree + 1):
        theta = constituent_phases(m, delaunay, theta_g)
        cos_t = np.cos(theta)
        sin_t = np.sin(theta)

        for l in range(max(2, m), max_degree + 1):
            fac = ocean_scale_factor(l, m)
            dev.dc[l, m] = fac * float(
                np.dot(c_sum[:, l, m], cos_t) + np.dot(s_sum[:, l, m], sin_t)
            )
            if m > 0:
                dev.ds[l, m] = fac * float(
                    np.dot(c_diff[:, l, m], sin_t) + np.dot(s_diff[:, l, m], cos_t)
                )

    if wobble is not None:
        dev.add_pole_tide(*ocean_pole_tide(*wobble))

    return dev
