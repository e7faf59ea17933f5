# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Collaborator doubles shared by the tide model tests."""

import io
import math
import threading

from geotide.domain.perturbing_bodies import BodyId
from geotide.domain.tidal_forces import TideEnvironment

R_EARTH = 6378.137
MU_EARTH = 398600.4418
GM_SUN = 1.32712440041e11
GM_MOON = 4902.800066

SUN_POSITION = (1.2e8, 8.0e7, 3.5e7)
MOON_POSITION = (-2.5e5, 2.9e5, 1.1e5)


OCEAN_TABLE_TEXT = """\
Doodson Darw  l   m    DelC+     DelS+       DelC-      DelS-
  55.565 Om1   2   0   -0.540594   0.000000    0.000000   0.000000
  55.575 Om2   2   0    0.005162   0.000000    0.000000   0.000000
  56.554 Sa    2   0    1.300000   0.210000    0.000000   0.000000
  65.455 Mm    2   0   -0.340000   0.120000    0.000000   0.000000
  65.455 Mm    1   0    9.990000   9.990000    9.990000   9.990000
 145.555 O1    2   1    0.850000  -0.440000    0.120000   0.330000
 165.555 K1    2   1    1.210000   0.570000   -0.230000   0.040000
 165.555 K1    3   1    0.310000  -0.170000    0.050000   0.020000
 255.555 M2    2   2    0.620000   1.080000   -0.150000   0.290000
 255.555 M2    4   2    0.210000  -0.090000    0.070000   0.030000
 255.555 M2    6   4    0.040000   0.030000   -0.010000   0.020000
 273.555 S2    2   2    0.180000   0.430000    0.060000  -0.080000
 273.555 S2    7   2    5.000000   5.000000    5.000000   5.000000
 100.000 XX    2   0    7.000000   7.000000    7.000000   7.000000
"""

OCEAN_TABLE_ACCEPTED = 11
OCEAN_TABLE_DISCARDED = 3


class FakeEphemeris:
    """EphemerisProvider returning fixed Sun and Moon states."""

    def __init__(
        self,
        sun=SUN_POSITION,
        moon=MOON_POSITION,
        gm_sun=GM_SUN,
        gm_moon=GM_MOON,
        initialized=True,
        error=None,
    ):
        self.positions = {BodyId.SUN: sun, BodyId.MOON: moon}
        self.gms = {BodyId.SUN: gm_sun, BodyId.MOON: gm_moon}
        self.initialized = initialized
        self.error = error

    def is_initialized(self):
        return self.initialized

    def body_position(self, epoch, body):
        if self.error is not None:
            raise self.error
        return self.positions[body]

    def body_gm(self, body):
        return self.gms[body]


class FakeReduction:
    """FrameReduction treating the inertial and Earth-fixed frames as equal."""

    def __init__(
        self,
        gmst=0.7,
        eop=False,
        polar_motion=(0.0, 0.0),
        polar_motion_average=(0.0, 0.0),
    ):
        self.gmst = gmst
        self.eop = eop
        self.pm = polar_motion
        self.pm_avg = polar_motion_average

    def inertial_to_earth_fixed(self, vector, epoch):
        return tuple(vector)

    def greenwich_mean_sidereal_time(self, epoch):
        return self.gmst

    def is_earth_orientation_initialized(self):
        return self.eop

    def polar_motion(self, epoch):
        return self.pm

    def polar_motion_running_average(self, epoch):
        return self.pm_avg


class FakeConstants:
    def earth_radius(self):
        return R_EARTH

    def earth_gravitational_parameter(self):
        return MU_EARTH

    def earth_mass(self):
        return 5.9722e24


class GeocentricConversion:
    """CoordinateConversion using geocentric angles for everything."""

    def __init__(self, error=None):
        self.error = error

    def geodetic_lat_lon(self, position_earth_fixed):
        x, y, z = position_earth_fixed
        return math.atan2(z, math.hypot(x, y)), math.atan2(y, x)

    def geocentric_radius_lat_lon(self, position_earth_fixed, velocity_earth_fixed):
        if self.error is not None:
            raise self.error
        x, y, z = position_earth_fixed
        return (
            math.sqrt(x * x + y * y + z * z),
            math.atan2(z, math.hypot(x, y)),
            math.atan2(y, x),
        )


class CountingOpener:
    """File opener double serving in-memory text and counting opens."""

    def __init__(self, text=OCEAN_TABLE_TEXT):
        self.text = text
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, path):
        with self._lock:
            self.calls += 1
        return io.StringIO(self.text)


def make_environment(ephemeris=None, reduction=None, conversion=None):
    return TideEnvironment(
        ephemeris=ephemeris or FakeEphemeris(),
        reduction=reduction or FakeReduction(),
        constants=FakeConstants(),
        conversion=conversion or GeocentricConversion(),
    )
