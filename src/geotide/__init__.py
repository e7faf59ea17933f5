# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""
geotide

Solid Earth and ocean tide accelerations for numerical orbit propagation.
Computes tide-induced deviations of the degree 2-6 geopotential
coefficients from Sun/Moon forcing (solid tides) or FES2004 constituent
amplitudes (ocean tides), and turns them into an inertial acceleration.
"""

from geotide.domain.tide_errors import (
    TideModelError,
    EphemerisNotInitializedError,
    BodyLookupError,
    CoefficientTableUnavailableError,
)
from geotide.domain.legendre import legendre_table
from geotide.domain.astronomical_arguments import (
    delaunay_arguments,
    gmst_rad,
    sidereal_time,
)
from geotide.domain.coefficient_deviations import CoefficientDeviations
from geotide.domain.perturbing_bodies import BodyId, CelestialBody
from geotide.domain.solid_tides import solid_tide_deviations
from geotide.domain.ocean_tide_table import (
    CONSTITUENTS,
    OceanTideTable,
    OceanTideTableLoader,
    classify_doodson,
    parse_ocean_tide_table,
)
from geotide.domain.ocean_tides import ocean_tide_deviations
from geotide.domain.potential_gradient import (
    PotentialPartials,
    potential_partials,
    inertial_acceleration,
)
from geotide.domain.tidal_forces import (
    TideKind,
    TideEnvironment,
    TidalAccelerationModel,
    SolidTideForce,
    OceanTideForce,
)
from geotide.domain.config import TideModelConfig
