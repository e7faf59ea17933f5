# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Self-contained collaborators for the tidal acceleration model.

Low-precision analytic implementations of the ports, accurate enough for
tidal forcing (body directions to ~1 degree):

- AnalyticEphemeris: Meeus truncated Sun and Moon series.
- GmstFrameReduction: ECI -> ECEF rotation about z by GMST, with optional
  EOP-derived polar motion for the pole tides.
- Wgs84EarthConstants: WGS84 reference values in km.
- SphericalCoordinateConversion: geodetic (Bowring) and geocentric angles.

Units: km, km/s, km³/s², radians.
"""

import logging
import math
from datetime import datetime

from geotide.domain.astronomical_arguments import gmst_rad
from geotide.domain.config import TideModelConfig
from geotide.domain.earth_orientation import (
    EOPTable,
    load_eop,
    mean_polar_motion_rad,
    polar_motion_rad,
)
from geotide.domain.ocean_tide_table import OceanTideTableLoader
from geotide.domain.perturbing_bodies import BodyId
from geotide.domain.tidal_forces import TidalAccelerationModel, TideEnvironment
from geotide.domain.time_conversion import datetime_to_jd, datetime_to_mjd

_log = logging.getLogger(__name__)

_AU_KM: float = 1.495978707e8

_R_EARTH_EQUATORIAL: float = 6378.137  # km
_R_EARTH_POLAR: float = 6356.752314245  # km
_E_SQUARED: float = 6.69437999014e-3
_GM_EARTH: float = 398600.4418  # km³/s²
_M_EARTH: float = 5.9722e24  # kg

_BODY_GM: dict[BodyId, float] = {
    BodyId.SUN: 1.32712440041e11,  # km³/s²
    BodyId.MOON: 4902.800066,  # km³/s²
}


def _centuries_since_j2000(dt: datetime) -> float:
    return (datetime_to_jd(dt) - 2451545.0) / 36525.0


def sun_position_approx(dt: datetime) -> tuple[float, float, float]:
    """Approximate Sun position in ECI (km).

    Low-precision solar coordinates based on Meeus (1991) truncated series.
    Accuracy ~1 degree in ecliptic longitude, sufficient for tidal calculations.
    """
    T = _centuries_since_j2000(dt)

    # Mean anomaly of Sun (degrees)
    M_rad = math.radians((357.5291092 + 35999.0502909 * T) % 360.0)

    # Equation of center (degrees)
    C_deg = (
        (1.9146 - 0.004817 * T) * math.sin(M_rad)
        + 0.019993 * math.sin(2.0 * M_rad)
    )

    # Sun's mean longitude (degrees)
    L0_deg = (280.46646 + 36000.76983 * T) % 360.0

    sun_lon = math.radians((L0_deg + C_deg) % 360.0)
    eps = math.radians(23.439291 - 0.0130042 * T)
    e = 0.016708634 - 0.000042037 * T
    nu = M_rad + math.radians(C_deg)

    r_au = 1.000001018 * (1.0 - e * e) / (1.0 + e * math.cos(nu))
    r = r_au * _AU_KM

    cos_lon = math.cos(sun_lon)
    sin_lon = math.sin(sun_lon)

    return (
        r * cos_lon,
        r * sin_lon * math.cos(eps),
        r * sin_lon * math.sin(eps),
    )


def moon_position_approx(dt: datetime) -> tuple[float, float, float]:
    """Low-precision Moon position in ECI (km).

    Simplified Meeus algorithm giving ~1 degree accuracy in ecliptic longitude.
    """
    T = _centuries_since_j2000(dt)

    L0 = 218.3165 + 481267.8813 * T  # mean longitude (degrees)
    M_moon = 134.9634 + 477198.8676 * T  # mean anomaly (degrees)
    F = 93.272 + 483202.0175 * T  # argument of latitude (degrees)

    L0_r = math.radians(L0 % 360.0)
    M_r = math.radians(M_moon % 360.0)

    lon_ecl = L0_r + math.radians(6.289) * math.sin(M_r)
    lat_ecl = math.radians(5.128) * math.sin(math.radians(F % 360.0))

    r = 385001.0 * (1.0 - 0.0549 * math.cos(M_r))

    eps = math.radians(23.439291 - 0.0130042 * T)

    x_ecl = r * math.cos(lat_ecl) * math.cos(lon_ecl)
    y_ecl = r * math.cos(lat_ecl) * math.sin(lon_ecl)
    z_ecl = r * math.sin(lat_ecl)

    return (
        x_ecl,
        y_ecl * math.cos(eps) - z_ecl * math.sin(eps),
        y_ecl * math.sin(eps) + z_ecl * math.cos(eps),
    )


class AnalyticEphemeris:
    """EphemerisProvider backed by the analytic Sun and Moon series."""

    def is_initialized(self) -> bool:
        return True

    def body_position(
        self, epoch: datetime, body: BodyId,
    ) -> tuple[float, float, float]:
        if body is BodyId.SUN:
            return sun_position_approx(epoch)
        if body is BodyId.MOON:
            return moon_position_approx(epoch)
        raise KeyError(body)

    def body_gm(self, body: BodyId) -> float:
        return _BODY_GM[body]


class GmstFrameReduction:
    """FrameReduction using a GMST-only rotation.

    Polar motion is only available when an EOP table is attached; without
    one the pole tides are disabled.
    """

    def __init__(
        self,
        eop_table: EOPTable | None = None,
        window_days: float = 365.25,
    ) -> None:
        self._eop = eop_table
        self._window_days = window_days

    def inertial_to_earth_fixed(
        self, vector: tuple[float, float, float], epoch: datetime,
    ) -> tuple[float, float, float]:
        theta = gmst_rad(epoch)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        x, y, z = vector
        return (
            cos_t * x + sin_t * y,
            -sin_t * x + cos_t * y,
            z,
        )

    def greenwich_mean_sidereal_time(self, epoch: datetime) -> float:
        return gmst_rad(epoch)

    def is_earth_orientation_initialized(self) -> bool:
        return self._eop is not None

    def polar_motion(self, epoch: datetime) -> tuple[float, float]:
        return polar_motion_rad(self._require_eop(), datetime_to_mjd(epoch))

    def polar_motion_running_average(
        self, epoch: datetime,
    ) -> tuple[float, float]:
        return mean_polar_motion_rad(
            self._require_eop(), datetime_to_mjd(epoch), self._window_days,
        )

    def _require_eop(self) -> EOPTable:
        if self._eop is None:
            raise RuntimeError("No EOP table attached to the frame reduction")
        return self._eop


class Wgs84EarthConstants:
    """EarthConstants with WGS84 values."""

    def earth_radius(self) -> float:
        return _R_EARTH_EQUATORIAL

    def earth_gravitational_parameter(self) -> float:
        return _GM_EARTH

    def earth_mass(self) -> float:
        return _M_EARTH


class SphericalCoordinateConversion:
    """CoordinateConversion on the WGS84 ellipsoid."""

    def geodetic_lat_lon(
        self, position_earth_fixed: tuple[float, float, float],
    ) -> tuple[float, float]:
        """Geodetic latitude and longitude by the iterative Bowring method."""
        a = _R_EARTH_EQUATORIAL
        e2 = _E_SQUARED

        x, y, z = position_earth_fixed
        p = math.sqrt(x**2 + y**2)

        lon_rad = math.atan2(y, x)
        lat_rad = math.atan2(z, p * (1.0 - e2))

        for _ in range(10):
            sin_lat = math.sin(lat_rad)
            n = a / math.sqrt(1.0 - e2 * sin_lat**2)
            lat_rad = math.atan2(z + e2 * n * sin_lat, p)

        return lat_rad, lon_rad

    def geocentric_radius_lat_lon(
        self,
        position_earth_fixed: tuple[float, float, float],
        velocity_earth_fixed: tuple[float, float, float],
    ) -> tuple[float, float, float]:
        x, y, z = position_earth_fixed
        r_xy = math.sqrt(x * x + y * y)
        return (
            math.sqrt(x * x + y * y + z * z),
            math.atan2(z, r_xy),
            math.atan2(y, x),
        )


def build_analytic_environment(
    config: TideModelConfig | None = None,
) -> TideEnvironment:
    """TideEnvironment made of the analytic adapters.

    Loads the EOP table when the configuration names one. Without a
    configuration the environment variables are consulted, as in
    build_analytic_model.
    """
    if config is None:
        config = TideModelConfig.from_env()

    eop_table = None
    if config.eop_path is not None:
        eop_table = load_eop(config.eop_path)
    else:
        _log.debug("No EOP file configured; pole tides disabled")

    return TideEnvironment(
        ephemeris=AnalyticEphemeris(),
        reduction=GmstFrameReduction(eop_table, config.polar_motion_window_days),
        constants=Wgs84EarthConstants(),
        conversion=SphericalCoordinateConversion(),
    )


def build_analytic_model(
    config: TideModelConfig | None = None,
) -> TidalAccelerationModel:
    """TidalAccelerationModel on analytic collaborators.

    The ocean table is read lazily from ``config.ocean_coefficients_path``
    on the first OCEAN evaluation.
    """
    if config is None:
        config = TideModelConfig.from_env()
    return TidalAccelerationModel(
        build_analytic_environment(config),
        ocean_tables=OceanTideTableLoader(config.ocean_coefficients_path),
    )
