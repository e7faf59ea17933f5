# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Tests for the disturbing potential gradient (potential_gradient.py).

The partials are checked against central finite differences of the
potential summed directly from the coefficient deviations.
"""

import math

import numpy as np
import pytest

from geotide.domain.coefficient_deviations import CoefficientDeviations
from geotide.domain.legendre import legendre_table
from geotide.domain.potential_gradient import (
    PotentialPartials,
    _longitude_harmonics,
    inertial_acceleration,
    potential_partials,
)
from tide_doubles import MU_EARTH, R_EARTH


def _random_deviations(max_degree=6, seed=7):
    rng = np.random.default_rng(seed)
    dev = CoefficientDeviations(max_degree=max_degree)
    for l in range(2, max_degree + 1):
        for m in range(l + 1):
            dev.dc[l, m] = rng.normal(scale=1e-8)
            if m > 0:
                dev.ds[l, m] = rng.normal(scale=1e-8)
    return dev


def _potential(radius, lat, lon, dev):
    p = legendre_table(lat, dev.max_degree)
    total = 0.0
    for l in range(2, dev.max_degree + 1):
        for m in range(l + 1):
            total += (R_EARTH / radius) ** l * p[l, m] * (
                dev.dc[l, m] * math.cos(m * lon) + dev.ds[l, m] * math.sin(m * lon)
            )
    return MU_EARTH / radius * total


def _potential_xyz(pos, dev):
    x, y, z = pos
    r = math.sqrt(x * x + y * y + z * z)
    return _potential(r, math.asin(z / r), math.atan2(y, x), dev)


@pytest.fixture
def deviations():
    return _random_deviations()


class TestLongitudeHarmonics:

    @pytest.mark.parametrize("lon", [-2.9, -0.4, 0.0, 1.3, 3.1])
    def test_matches_trig(self, lon):
        cos_m, sin_m = _longitude_harmonics(lon, 6)
        for m in range(7):
            assert cos_m[m] == pytest.approx(math.cos(m * lon), abs=1e-14)
            assert sin_m[m] == pytest.approx(math.sin(m * lon), abs=1e-14)


class TestPartials:

    def test_zero_deviations_zero_partials(self):
        dev = CoefficientDeviations(max_degree=6)
        p = potential_partials(7000.0, 0.3, 1.1, dev, MU_EARTH, R_EARTH)
        assert p == PotentialPartials(0.0, 0.0, 0.0)

    @pytest.mark.parametrize("lat,lon", [(0.2, 0.7), (-0.9, 2.5), (1.3, -1.8)])
    def test_against_finite_differences(self, deviations, lat, lon):
        r = R_EARTH + 650.0
        p = potential_partials(r, lat, lon, deviations, MU_EARTH, R_EARTH)

        h_r, h_a = 1e-2, 1e-6
        du_dr = (_potential(r + h_r, lat, lon, deviations)
                 - _potential(r - h_r, lat, lon, deviations)) / (2 * h_r)
        du_dphi = (_potential(r, lat + h_a, lon, deviations)
                   - _potential(r, lat - h_a, lon, deviations)) / (2 * h_a)
        du_dlam = (_potential(r, lat, lon + h_a, deviations)
                   - _potential(r, lat, lon - h_a, deviations)) / (2 * h_a)

        # dudr carries an extra 1/r
        assert p.dudr == pytest.approx(du_dr / r, rel=1e-5, abs=1e-20)
        assert p.dudphi == pytest.approx(du_dphi, rel=1e-5, abs=1e-16)
        assert p.dudlambda == pytest.approx(du_dlam, rel=1e-5, abs=1e-16)

    def test_max_degree_truncates(self, deviations):
        full = potential_partials(7000.0, 0.4, 0.2, deviations, MU_EARTH, R_EARTH)
        low = potential_partials(7000.0, 0.4, 0.2, deviations, MU_EARTH, R_EARTH, max_degree=2)
        only2 = CoefficientDeviations(max_degree=2)
        only2.dc[2] = deviations.dc[2]
        only2.ds[2] = deviations.ds[2]
        ref = potential_partials(7000.0, 0.4, 0.2, only2, MU_EARTH, R_EARTH)
        assert low == ref
        assert low != full

    @pytest.mark.parametrize("pole", [math.pi / 2, -math.pi / 2])
    def test_continuous_at_pole(self, deviations, pole):
        near = pole - math.copysign(1e-9, pole)
        at = potential_partials(7000.0, pole, 0.3, deviations, MU_EARTH, R_EARTH)
        off = potential_partials(7000.0, near, 0.3, deviations, MU_EARTH, R_EARTH)
        assert at.dudr == pytest.approx(off.dudr, rel=1e-6)
        assert at.dudphi == pytest.approx(off.dudphi, rel=1e-6)
        assert at.dudlambda == pytest.approx(off.dudlambda, abs=1e-12)

    def test_single_tesseral_term_at_pole(self):
        dev = CoefficientDeviations(max_degree=2)
        dev.dc[2, 1] = 1e-8
        at = potential_partials(7000.0, math.pi / 2, 0.3, dev, MU_EARTH, R_EARTH)
        off = potential_partials(7000.0, math.pi / 2 - 1e-9, 0.3, dev, MU_EARTH, R_EARTH)
        assert at.dudphi == pytest.approx(off.dudphi, rel=1e-6)
        assert abs(at.dudphi) > 1e-7

    def test_zonal_only_has_no_longitude_partial(self):
        dev = CoefficientDeviations(max_degree=4)
        dev.dc[2, 0] = 3e-8
        dev.dc[4, 0] = -1e-9
        p = potential_partials(7000.0, 0.5, 1.7, dev, MU_EARTH, R_EARTH)
        assert p.dudlambda == 0.0
        assert p.dudr != 0.0


class TestInertialAcceleration:

    @pytest.mark.parametrize("pos", [
        (5200.0, 3100.0, 2700.0),
        (-4100.0, -5200.0, -1900.0),
        (6900.0, -10.0, 400.0),
    ])
    def test_is_gradient_of_potential(self, deviations, pos):
        x, y, z = pos
        r = math.sqrt(x * x + y * y + z * z)
        partials = potential_partials(
            r, math.asin(z / r), math.atan2(y, x), deviations, MU_EARTH, R_EARTH,
        )
        acc = inertial_acceleration(partials, pos)

        h = 1e-2
        expected = []
        for i in range(3):
            plus = list(pos)
            minus = list(pos)
            plus[i] += h
            minus[i] -= h
            expected.append(
                (_potential_xyz(plus, deviations) - _potential_xyz(minus, deviations)) / (2 * h)
            )

        np.testing.assert_allclose(acc, expected, rtol=1e-5, atol=1e-20)

    def test_zero_partials_zero_acceleration(self):
        acc = inertial_acceleration(PotentialPartials(0.0, 0.0, 0.0), (7000.0, 1.0, 2.0))
        assert np.all(acc == 0.0)

    def test_radial_only(self):
        acc = inertial_acceleration(PotentialPartials(-2.0e-12, 0.0, 0.0), (7000.0, 0.0, 0.0))
        assert acc[0] == pytest.approx(-1.4e-8)
        assert acc[1] == 0.0
        assert acc[2] == 0.0

    def test_polar_axis_rejected(self):
        with pytest.raises(ValueError, match="polar axis"):
            inertial_acceleration(PotentialPartials(1e-12, 1e-9, 1e-9), (0.0, 0.0, 7000.0))

    def test_returns_numpy_vector(self):
        acc = inertial_acceleration(PotentialPartials(1e-12, 1e-9, 1e-9), (7000.0, 100.0, 50.0))
        assert isinstance(acc, np.ndarray)
        assert acc.shape == (3,)
