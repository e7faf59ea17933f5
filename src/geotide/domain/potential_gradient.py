# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Gradient of the tidal disturbing potential.

The disturbing potential of the coefficient deviations is

    U = GM/r Σ_l Σ_m (R/r)^l P_lm(sin φ) [ΔC_lm cos mλ + ΔS_lm sin mλ]

potential_partials() returns its partial derivatives in spherical
coordinates, inertial_acceleration() maps them onto Cartesian axes
(Montenbruck & Gill, eq. 3.33; Vallado, eq. 8-25).

Note: ``dudr`` is (1/r)·∂U/∂r, i.e. it carries one extra 1/r so that
the assembler can multiply it directly by the Cartesian coordinates.
"""

import math
from dataclasses import dataclass

import numpy as np

from geotide.domain.coefficient_deviations import CoefficientDeviations
from geotide.domain.legendre import legendre_table

# latitudes are held no closer than this to the poles
_POLE_LIMIT: float = math.pi / 2.0 - 1e-12


@dataclass(frozen=True)
class PotentialPartials:
    """Partial derivatives of the disturbing potential."""

    dudr: float
    dudphi: float
    dudlambda: float


def _longitude_harmonics(longitude: float, max_degree: int) -> tuple[list[float], list[float]]:
    """cos(mλ), sin(mλ) for m = 0..max_degree by the Chebyshev recursion."""
    cos_l = math.cos(longitude)
    costerm = [1.0, cos_l]
    sinterm = [0.0, math.sin(longitude)]
    for m in range(2, max_degree + 1):
        costerm.append(2.0 * cos_l * costerm[m - 1] - costerm[m - 2])
        sinterm.append(2.0 * cos_l * sinterm[m - 1] - sinterm[m - 2])
    return costerm, sinterm


def potential_partials(
    radius: float,
    latitude: float,
    longitude: float,
    deviations: CoefficientDeviations,
    mu_earth: float,
    r_earth: float,
    max_degree: int | None = None,
) -> PotentialPartials:
    """Partials of the disturbing potential at a geocentric position.

    Args:
        radius: Geocentric distance (km).
        latitude: Geocentric latitude (rad). Clamped to ±(π/2 - 1e-12); the
            clamped value feeds both the Legendre table and tan φ.
        longitude: Geocentric longitude (rad).
        deviations: ΔC, ΔS tables.
        mu_earth: GM of the Earth (km³/s²).
        r_earth: Earth reference radius (km).
        max_degree: Highest degree summed; defaults to deviations.max_degree.
    """
    if max_degree is None:
        max_degree = deviations.max_degree

    latitude = max(-_POLE_LIMIT, min(_POLE_LIMIT, latitude))
    p = legendre_table(latitude, max_degree)
    costerm, sinterm = _longitude_harmonics(longitude, max_degree)
    tanphi = math.tan(latitude)

    dc = deviations.dc
    ds = deviations.ds

    sigma_r = 0.0
    sigma_phi = 0.0
    sigma_lambda = 0.0

    for l in range(2, max_degree + 1):
        rrfac = (r_earth / radius) ** l

        for m in range(l + 1):
            in_phase = dc[l, m] * costerm[m] + ds[l, m] * sinterm[m]
            quadrature = ds[l, m] * costerm[m] - dc[l, m] * sinterm[m]

            sigma_r += rrfac * (l + 1) * p[l, m] * in_phase
            sigma_phi += rrfac * (p[l, m + 1] - m * tanphi * p[l, m]) * in_phase
            sigma_lambda += rrfac * m * p[l, m] * quadrature

    gm_r = mu_earth / radius
    return PotentialPartials(
        dudr=-gm_r / (radius * radius) * sigma_r,
        dudphi=gm_r * sigma_phi,
        dudlambda=gm_r * sigma_lambda,
    )


def inertial_acceleration(
    partials: PotentialPartials,
    position: tuple[float, float, float],
) -> np.ndarray:
    """Cartesian acceleration from the spherical partials.

    Args:
        partials: Output of potential_partials().
        position: Position (x, y, z) in km in the frame the acceleration
            is wanted in.

    Raises:
        ValueError: If the position lies on the z-axis, where longitude
            is undefined.
    """
    x, y, z = position
    r2 = x * x + y * y + z * z
    r1r2 = x * x + y * y
    if r1r2 == 0.0:
        raise ValueError("Position on the polar axis: longitude undefined")

    sqrt_r1r2 = math.sqrt(r1r2)
    t1 = partials.dudlambda / r1r2
    t2 = partials.dudr - z / (r2 * sqrt_r1r2) * partials.dudphi

    return np.array([
        t2 * x - t1 * y,
        t2 * y + t1 * x,
        partials.dudr * z + sqrt_r1r2 / r2 * partials.dudphi,
    ])
