# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""
Port interfaces for the collaborators of the tidal acceleration model.

Adapters implement these to supply ephemerides, frame reduction, Earth
constants and coordinate conversions. Units: km, km/s, km³/s², radians.
"""
from datetime import datetime
from typing import Protocol, runtime_checkable

from geotide.domain.perturbing_bodies import BodyId


@runtime_checkable
class EphemerisProvider(Protocol):
    """Port for Sun and Moon positions and gravitational parameters."""

    def is_initialized(self) -> bool:
        """Whether ephemeris data is ready to be queried."""
        ...

    def body_position(
        self, epoch: datetime, body: BodyId,
    ) -> tuple[float, float, float]:
        """Geocentric inertial (GCRF) position of a body in km."""
        ...

    def body_gm(self, body: BodyId) -> float:
        """Gravitational parameter of a body in km³/s²."""
        ...


@runtime_checkable
class FrameReduction(Protocol):
    """Port for inertial/Earth-fixed reduction and Earth orientation."""

    def inertial_to_earth_fixed(
        self, vector: tuple[float, float, float], epoch: datetime,
    ) -> tuple[float, float, float]:
        """Rotate a GCRF vector into ITRF."""
        ...

    def greenwich_mean_sidereal_time(self, epoch: datetime) -> float:
        """Greenwich Mean Sidereal Time in radians."""
        ...

    def is_earth_orientation_initialized(self) -> bool:
        """Whether polar motion data is available."""
        ...

    def polar_motion(self, epoch: datetime) -> tuple[float, float]:
        """Instantaneous polar motion (xp, yp) in radians."""
        ...

    def polar_motion_running_average(
        self, epoch: datetime,
    ) -> tuple[float, float]:
        """Time-averaged polar motion (xp, yp) in radians."""
        ...


@runtime_checkable
class EarthConstants(Protocol):
    """Port for Earth reference constants."""

    def earth_radius(self) -> float:
        """Equatorial radius in km."""
        ...

    def earth_gravitational_parameter(self) -> float:
        """GM of the Earth in km³/s²."""
        ...

    def earth_mass(self) -> float:
        """Mass of the Earth in kg."""
        ...


@runtime_checkable
class CoordinateConversion(Protocol):
    """Port for Earth-fixed position to angular coordinates."""

    def geodetic_lat_lon(
        self, position_earth_fixed: tuple[float, float, float],
    ) -> tuple[float, float]:
        """Geodetic (latitude, longitude) in radians."""
        ...

    def geocentric_radius_lat_lon(
        self,
        position_earth_fixed: tuple[float, float, float],
        velocity_earth_fixed: tuple[float, float, float],
    ) -> tuple[float, float, float]:
        """Geocentric (radius km, latitude rad, longitude rad)."""
        ...
