# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Julian Date helpers shared by the tide models.

All epochs are UTC datetimes; naive datetimes are interpreted as UTC.
"""

import math
from datetime import datetime, timezone

MJD_OFFSET: float = 2400000.5  # JD = MJD + 2400000.5
MJD_J2000: float = 51544.5


def datetime_to_jd(dt: datetime) -> float:
    """Convert a UTC datetime to Julian Date.

    Uses the standard algorithm (Meeus, Astronomical Algorithms, Ch. 7).
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    y = dt.year
    m = dt.month
    d = (dt.day
         + dt.hour / 24.0
         + dt.minute / 1440.0
         + dt.second / 86400.0
         + dt.microsecond / 86400_000_000.0)

    if m <= 2:
        y -= 1
        m += 12

    A = y // 100
    B = 2 - A + A // 4

    return (math.floor(365.25 * (y + 4716))
            + math.floor(30.6001 * (m + 1))
            + d + B - 1524.5)


def datetime_to_mjd(dt: datetime) -> float:
    """Convert a UTC datetime to Modified Julian Date.

    MJD = JD - 2400000.5.
    """
    return datetime_to_jd(dt) - MJD_OFFSET


def days_since_j2000(dt: datetime) -> float:
    """Days elapsed since the J2000.0 epoch (2000-01-01 12:00 UTC)."""
    return datetime_to_mjd(dt) - MJD_J2000
