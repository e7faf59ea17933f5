# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Solid Earth tide corrections to the geopotential coefficients.

Frequency-independent model: the Moon and Sun deform the solid Earth and
the resulting change of the unnormalized coefficients is, for degree
l = 2, 3 (IERS Conventions, Ch. 6, converted to unnormalized form):

    ΔC_lm - i ΔS_lm = k_lm dm (l-m)!/(l+m)! / GM_E
                      * Σ_j GM_j (R_E/r_j)^(l+1) P_lm(sin φ_j) e^(-i m λ_j)

with dm = 1 for m = 0 and 2 otherwise. Degree-2 tides additionally
change the degree-4 coefficients through the k+_2m Love numbers.

References:
    IERS Conventions 2010, Chapter 6.2
    Montenbruck & Gill, "Satellite Orbits", Ch. 3.7
"""

import math
from collections.abc import Sequence

from geotide.domain.coefficient_deviations import CoefficientDeviations
from geotide.domain.perturbing_bodies import CelestialBody
from geotide.domain.pole_tide import solid_pole_tide

SOLID_TIDE_MAX_DEGREE: int = 4

# Nominal Love numbers k_lm, degree 2 and 3
LOVE_NUMBERS: dict[tuple[int, int], float] = {
    (2, 0): 0.29525,
    (2, 1): 0.29470,
    (2, 2): 0.29801,
    (3, 0): 0.093,
    (3, 1): 0.093,
    (3, 2): 0.093,
    (3, 3): 0.094,
}

# k+_2m: degree-4 response to degree-2 forcing
LOVE_NUMBERS_DEGREE4: tuple[float, float, float] = (-0.00087, -0.00079, -0.00057)


def _order_factor(m: int) -> int:
    return 1 if m == 0 else 2


def _factorial_ratio(l: int, m: int) -> float:
    """(l-m)! / (l+m)!"""
    return math.factorial(l - m) / math.factorial(l + m)


def solid_tide_deviations(
    bodies: Sequence[CelestialBody],
    mu_earth: float,
    r_earth: float,
    wobble: tuple[float, float] | None = None,
) -> CoefficientDeviations:
    """Coefficient deviations from solid Earth tides, degree 2 to 4.

    Args:
        bodies: Tide-raising bodies (normally Sun and Moon).
        mu_earth: GM of the Earth (km³/s²).
        r_earth: Earth reference radius (km).
        wobble: Pole tide wobble variables (m1, m2) in radians, or None
            to skip the pole tide.

    Returns:
        CoefficientDeviations with max_degree 4.
    """
    dev = CoefficientDeviations(max_degree=SOLID_TIDE_MAX_DEGREE)
    legendre = [body.legendre(SOLID_TIDE_MAX_DEGREE) for body in bodies]

    for l in (2, 3):
        for m in range(l + 1):
            templ = (
                LOVE_NUMBERS.get((l, m), 0.0)
                * _order_factor(m)
                * _factorial_ratio(l, m)
                / mu_earth
            )
            for body, p in zip(bodies, legendre):
                term = templ * body.gm * (r_earth / body.distance) ** (l + 1) * p[l, m]
                dev.dc[l, m] += term * math.cos(m * body.longitude)
                dev.ds[l, m] += term * math.sin(m * body.longitude)

    # Degree 4 changes caused by the degree 2 tides
    for m in range(3):
        templ = (
            LOVE_NUMBERS_DEGREE4[m]
            * _order_factor(m)
            * math.sqrt(1.8 * (4 - m) * (3 - m) / ((4.0 + m) * (3.0 + m)))
            * _factorial_ratio(2, m)
            / mu_earth
        )
        for body, p in zip(bodies, legendre):
            term = templ * body.gm * (r_earth / body.distance) ** 3 * p[2, m]
            dev.dc[4, m] += term * math.cos(m * body.longitude)
            dev.ds[4, m] += term * math.sin(m * body.longitude)

    if wobble is not None:
        dev.add_pole_tide(*solid_pole_tide(*wobble))

    return dev
