# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Tidal acceleration models for high-fidelity orbit propagation.

Two tide kinds share one evaluation pipeline:

- SOLID: frequency-independent solid Earth tides raised by Sun and Moon,
  degree 2-3 plus the degree-4 correction and the solid pole tide.
  Magnitude at LEO: ~1e-12 to 1e-11 km/s².

- OCEAN: FES2004 ocean tides from 17 constituents, degree 2-6, plus the
  ocean pole tide. Magnitude at LEO: roughly 1/10th of solid tides.

Pipeline per call:
    1. Sun and Moon states from the ephemeris/reduction collaborators
    2. Coefficient deviations ΔC_lm, ΔS_lm (kind-specific corrector)
    3. Partials of the disturbing potential at the satellite
    4. Cartesian acceleration in the inertial frame

Units: km, s, rad.

References:
    IERS Conventions 2010, Chapter 6
    Montenbruck & Gill, "Satellite Orbits", Ch. 3.2 and 3.7
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol, TypeVar

import numpy as np

from geotide.domain.astronomical_arguments import delaunay_arguments, sidereal_time
from geotide.domain.coefficient_deviations import CoefficientDeviations
from geotide.domain.ocean_tide_table import OceanTideTableLoader
from geotide.domain.ocean_tides import OCEAN_TIDE_MAX_DEGREE, ocean_tide_deviations
from geotide.domain.perturbing_bodies import CelestialBody, locate_sun_and_moon
from geotide.domain.pole_tide import ocean_pole_tide, polar_wobble
from geotide.domain.potential_gradient import inertial_acceleration, potential_partials
from geotide.domain.solid_tides import SOLID_TIDE_MAX_DEGREE, solid_tide_deviations
from geotide.domain.tide_errors import (
    BodyLookupError,
    EphemerisNotInitializedError,
    TideModelError,
)
from geotide.ports import (
    CoordinateConversion,
    EarthConstants,
    EphemerisProvider,
    FrameReduction,
)

_OMEGA_EARTH: float = 7.292115e-5  # rad/s

_T = TypeVar("_T")


class TideKind(Enum):
    """Tide model selector."""

    SOLID = 1
    OCEAN = 2

    @property
    def max_degree(self) -> int:
        if self is TideKind.SOLID:
            return SOLID_TIDE_MAX_DEGREE
        return OCEAN_TIDE_MAX_DEGREE


@dataclass(frozen=True)
class TideEnvironment:
    """Collaborators needed to evaluate a tide model."""

    ephemeris: EphemerisProvider
    reduction: FrameReduction
    constants: EarthConstants
    conversion: CoordinateConversion


class CoefficientCorrector(Protocol):
    """Computes ΔC, ΔS for one tide kind."""

    max_degree: int

    def deviations(
        self,
        epoch: datetime,
        bodies: Sequence[CelestialBody],
        environment: TideEnvironment,
        wobble: tuple[float, float] | None,
    ) -> CoefficientDeviations: ...


@dataclass(frozen=True)
class SolidTideCorrector:
    """Solid Earth tide coefficient corrector."""

    max_degree: int = SOLID_TIDE_MAX_DEGREE

    def deviations(
        self,
        epoch: datetime,
        bodies: Sequence[CelestialBody],
        environment: TideEnvironment,
        wobble: tuple[float, float] | None,
    ) -> CoefficientDeviations:
        constants = environment.constants
        return solid_tide_deviations(
            bodies,
            mu_earth=constants.earth_gravitational_parameter(),
            r_earth=constants.earth_radius(),
            wobble=wobble,
        )


class OceanTideCorrector:
    """Ocean tide coefficient corrector backed by a cached FES2004 table.

    Without any tide-raising body (all GM zero) no ocean tide is raised
    and only the pole tide remains.
    """

    max_degree: int = OCEAN_TIDE_MAX_DEGREE

    def __init__(self, tables: OceanTideTableLoader) -> None:
        self._tables = tables

    def deviations(
        self,
        epoch: datetime,
        bodies: Sequence[CelestialBody],
        environment: TideEnvironment,
        wobble: tuple[float, float] | None,
    ) -> CoefficientDeviations:
        table = self._tables.load()

        if all(body.gm == 0.0 for body in bodies):
            dev = CoefficientDeviations(max_degree=min(self.max_degree, table.max_degree))
            if wobble is not None:
                dev.add_pole_tide(*ocean_pole_tide(*wobble))
            return dev

        theta_g = _query(
            "sidereal time", epoch,
            lambda: sidereal_time(epoch, environment.reduction),
        )
        return ocean_tide_deviations(
            table,
            delaunay_arguments(epoch),
            theta_g,
            wobble=wobble,
            max_degree=self.max_degree,
        )


def _query(what: str, epoch: datetime, call: Callable[[], _T]) -> _T:
    """Run a collaborator call, wrapping foreign failures in BodyLookupError."""
    try:
        return call()
    except TideModelError:
        raise
    except Exception as exc:
        raise BodyLookupError(
            f"{what} lookup failed at {epoch.isoformat()}: {exc}"
        ) from exc


class TidalAccelerationModel:
    """Solid and ocean tide accelerations in the inertial frame.

    Args:
        environment: Ephemeris, reduction, constants and conversion ports.
        ocean_tables: Loader for the FES2004 table. Required for OCEAN.
    """

    def __init__(
        self,
        environment: TideEnvironment,
        ocean_tables: OceanTideTableLoader | None = None,
    ) -> None:
        self._environment = environment
        self._ocean_tables = ocean_tables
        self._initialized = False
        self._correctors: dict[TideKind, CoefficientCorrector] = {
            TideKind.SOLID: SolidTideCorrector(),
        }
        if ocean_tables is not None:
            self._correctors[TideKind.OCEAN] = OceanTideCorrector(ocean_tables)

    @property
    def environment(self) -> TideEnvironment:
        return self._environment

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self, preload_ocean_table: bool = False) -> None:
        """Mark the model ready; optionally read the ocean table now.

        Idempotent.
        """
        if preload_ocean_table and self._ocean_tables is not None:
            self._ocean_tables.load()
        self._initialized = True

    def reset(self) -> None:
        """Force re-initialization (and a fresh table read) on next use."""
        self._initialized = False
        if self._ocean_tables is not None:
            self._ocean_tables.reset()

    def corrector(self, kind: TideKind) -> CoefficientCorrector:
        try:
            return self._correctors[kind]
        except KeyError:
            raise ValueError(
                f"{kind.name} tides need an ocean tide table loader"
            ) from None

    def coefficient_deviations(
        self, kind: TideKind, epoch: datetime,
    ) -> CoefficientDeviations:
        """ΔC, ΔS for the given tide kind at an epoch.

        Raises:
            EphemerisNotInitializedError: Ephemeris not ready.
            BodyLookupError: A collaborator failed.
            CoefficientTableUnavailableError: OCEAN table unreadable.
        """
        if not self._initialized:
            self.initialize()

        env = self._environment
        corrector = self.corrector(kind)

        if not env.ephemeris.is_initialized():
            raise EphemerisNotInitializedError(
                "Ephemeris provider has not been initialized"
            )

        bodies = locate_sun_and_moon(epoch, env.ephemeris, env.reduction, env.conversion)
        wobble = _query(
            "polar motion", epoch, lambda: polar_wobble(env.reduction, epoch),
        )
        return corrector.deviations(epoch, bodies, env, wobble)

    def acceleration(
        self,
        kind: TideKind,
        epoch: datetime,
        position_inertial: tuple[float, float, float],
        position_earth_fixed: tuple[float, float, float],
        velocity_earth_fixed: tuple[float, float, float],
    ) -> np.ndarray:
        """Tidal acceleration (km/s²) in the inertial frame.

        Args:
            kind: SOLID or OCEAN.
            epoch: UTC epoch.
            position_inertial: Satellite GCRF position (km).
            position_earth_fixed: Satellite ITRF position (km).
            velocity_earth_fixed: Satellite ITRF velocity (km/s).
        """
        deviations = self.coefficient_deviations(kind, epoch)

        env = self._environment
        constants = env.constants
        radius, lat, lon = _query(
            "satellite coordinates", epoch,
            lambda: env.conversion.geocentric_radius_lat_lon(
                position_earth_fixed, velocity_earth_fixed,
            ),
        )

        partials = potential_partials(
            radius, lat, lon, deviations,
            mu_earth=constants.earth_gravitational_parameter(),
            r_earth=constants.earth_radius(),
            max_degree=kind.max_degree,
        )
        return inertial_acceleration(partials, position_inertial)


# --- Force models ---


class _TideForce:
    """ForceModel adapter: inertial state in, inertial acceleration out."""

    kind: TideKind

    def __init__(self, model: TidalAccelerationModel) -> None:
        self._model = model

    def acceleration(
        self,
        epoch: datetime,
        position: tuple[float, float, float],
        velocity: tuple[float, float, float],
    ) -> tuple[float, float, float]:
        reduction = self._model.environment.reduction
        r_itrf = np.array(reduction.inertial_to_earth_fixed(position, epoch))
        v_rot = np.array(reduction.inertial_to_earth_fixed(velocity, epoch))
        # v_itrf = R v - ω⊕ × r_itrf
        v_itrf = v_rot - np.cross((0.0, 0.0, _OMEGA_EARTH), r_itrf)

        acc = self._model.acceleration(
            self.kind,
            epoch,
            position,
            (float(r_itrf[0]), float(r_itrf[1]), float(r_itrf[2])),
            (float(v_itrf[0]), float(v_itrf[1]), float(v_itrf[2])),
        )
        return (float(acc[0]), float(acc[1]), float(acc[2]))


class SolidTideForce(_TideForce):
    """Solid Earth tide acceleration implementing the ForceModel protocol."""

    kind = TideKind.SOLID


class OceanTideForce(_TideForce):
    """Ocean tide acceleration implementing the ForceModel protocol."""

    kind = TideKind.OCEAN
