# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Sun and Moon states as seen by the tide models.

A CelestialBody is built fresh for every evaluation from the ephemeris,
frame reduction and coordinate conversion collaborators.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from geotide.domain.legendre import legendre_table
from geotide.domain.tide_errors import BodyLookupError, TideModelError

if TYPE_CHECKING:
    from geotide.ports import CoordinateConversion, EphemerisProvider, FrameReduction


class BodyId(Enum):
    """Tide-raising bodies."""

    SUN = "sun"
    MOON = "moon"


@dataclass(frozen=True)
class CelestialBody:
    """Instantaneous state of a tide-raising body.

    Positions in km, gm in km³/s², angles in radians.
    """

    body: BodyId
    position_inertial: tuple[float, float, float]
    position_earth_fixed: tuple[float, float, float]
    gm: float
    distance: float
    latitude: float
    longitude: float

    def legendre(self, max_degree: int) -> np.ndarray:
        """Legendre table evaluated at the body's latitude."""
        return legendre_table(self.latitude, max_degree)


def locate_body(
    body: BodyId,
    epoch: datetime,
    ephemeris: EphemerisProvider,
    reduction: FrameReduction,
    conversion: CoordinateConversion,
) -> CelestialBody:
    """Query the collaborators for one body.

    Raises:
        BodyLookupError: If any collaborator fails. The collaborator's
            exception is chained as the cause.
    """
    try:
        r_gcrf = tuple(float(c) for c in ephemeris.body_position(epoch, body))
        gm = float(ephemeris.body_gm(body))
        r_itrf = tuple(
            float(c) for c in reduction.inertial_to_earth_fixed(r_gcrf, epoch)
        )
        lat, lon = conversion.geodetic_lat_lon(r_itrf)
    except TideModelError:
        raise
    except Exception as exc:
        raise BodyLookupError(
            f"Lookup of {body.value} failed at {epoch.isoformat()}: {exc}"
        ) from exc

    return CelestialBody(
        body=body,
        position_inertial=r_gcrf,
        position_earth_fixed=r_itrf,
        gm=gm,
        distance=math.sqrt(sum(c * c for c in r_gcrf)),
        latitude=float(lat),
        longitude=float(lon),
    )


def locate_sun_and_moon(
    epoch: datetime,
    ephemeris: EphemerisProvider,
    reduction: FrameReduction,
    conversion: CoordinateConversion,
) -> tuple[CelestialBody, CelestialBody]:
    """Sun and Moon, in that order."""
    return (
        locate_body(BodyId.SUN, epoch, ephemeris, reduction, conversion),
        locate_body(BodyId.MOON, epoch, ephemeris, reduction, conversion),
    )
