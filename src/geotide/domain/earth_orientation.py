# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Polar motion from Earth Orientation Parameters (EOP) and its mean pole.

Only the pole coordinates are kept; the pole tide corrections need the
instantaneous pole (xp, yp) and its running mean, nothing else of the
IERS finals2000A record.

References:
    IERS Conventions 2010, Chapter 7.1.4.
"""

import json
import logging
import math
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

_log = logging.getLogger(__name__)

ARCSEC_TO_RAD: float = math.pi / (180.0 * 3600.0)


@dataclass(frozen=True)
class EOPEntry:
    """Pole coordinates at one tabulated day."""

    mjd: float
    xp_arcsec: float
    yp_arcsec: float


@dataclass(frozen=True)
class EOPTable:
    """Pole coordinates sorted by MJD."""

    entries: tuple[EOPEntry, ...]

    @cached_property
    def mjds(self) -> tuple[float, ...]:
        return tuple(e.mjd for e in self.entries)


def load_eop(path: str | Path) -> EOPTable:
    """Load pole coordinates from a JSON file.

    The file has the form ``{"entries": [{"mjd": ..., "xp": ..., "yp": ...}]}``
    with xp, yp in arcseconds. Other keys of an entry are ignored.
    """
    with open(Path(path)) as f:
        data = json.load(f)

    entries = sorted(
        (
            EOPEntry(float(e["mjd"]), float(e["xp"]), float(e["yp"]))
            for e in data["entries"]
        ),
        key=lambda e: e.mjd,
    )

    _log.info("Loaded %d EOP entries from %s", len(entries), path)
    return EOPTable(entries=tuple(entries))


def interpolate_eop(table: EOPTable, mjd: float) -> EOPEntry:
    """Pole coordinates at ``mjd``, linear between tabulated days.

    Outside the table the nearest entry is held; an empty table gives a
    pole at the origin.
    """
    entries = table.entries
    if not entries:
        return EOPEntry(mjd, 0.0, 0.0)

    i = bisect_right(table.mjds, mjd)
    if i == 0:
        e = entries[0]
        return EOPEntry(mjd, e.xp_arcsec, e.yp_arcsec)
    if i == len(entries):
        e = entries[-1]
        return EOPEntry(mjd, e.xp_arcsec, e.yp_arcsec)

    e0, e1 = entries[i - 1], entries[i]
    frac = (mjd - e0.mjd) / (e1.mjd - e0.mjd)
    return EOPEntry(
        mjd,
        e0.xp_arcsec + frac * (e1.xp_arcsec - e0.xp_arcsec),
        e0.yp_arcsec + frac * (e1.yp_arcsec - e0.yp_arcsec),
    )


def polar_motion_rad(table: EOPTable, mjd: float) -> tuple[float, float]:
    """Interpolated polar motion (xp, yp) in radians."""
    e = interpolate_eop(table, mjd)
    return (e.xp_arcsec * ARCSEC_TO_RAD, e.yp_arcsec * ARCSEC_TO_RAD)


def mean_polar_motion_rad(
    table: EOPTable, mjd: float, window_days: float,
) -> tuple[float, float]:
    """Running mean of polar motion over [mjd - window_days, mjd], radians.

    Falls back to the interpolated instantaneous value when no tabulated
    entry lies inside the window.
    """
    lo = bisect_left(table.mjds, mjd - window_days)
    hi = bisect_right(table.mjds, mjd)
    if lo >= hi:
        _log.warning(
            "No EOP entries in the %.1f day window before MJD %.3f; "
            "using instantaneous polar motion as mean pole",
            window_days, mjd,
        )
        return polar_motion_rad(table, mjd)

    window = table.entries[lo:hi]
    n = hi - lo
    xp = sum(e.xp_arcsec for e in window) / n
    yp = sum(e.yp_arcsec for e in window) / n
    return (xp * ARCSEC_TO_RAD, yp * ARCSEC_TO_RAD)
