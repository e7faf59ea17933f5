# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Fixtures for the tide model tests."""

import math
from datetime import datetime, timezone

import pytest

from tide_doubles import R_EARTH, CountingOpener, make_environment


@pytest.fixture
def epoch():
    return datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def leo_state():
    """Satellite at 500 km altitude, off the equator and the x-axis."""
    r = R_EARTH + 500.0
    lat = math.radians(35.0)
    lon = math.radians(40.0)
    pos = (
        r * math.cos(lat) * math.cos(lon),
        r * math.cos(lat) * math.sin(lon),
        r * math.sin(lat),
    )
    vel = (-4.5, 5.1, 3.2)
    return pos, vel


@pytest.fixture
def environment():
    return make_environment()


@pytest.fixture
def opener():
    return CountingOpener()
