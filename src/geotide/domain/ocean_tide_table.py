# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""FES2004 ocean tide coefficient table.

The coefficient file is a flat whitespace-separated text table, one
record per (constituent, degree, order):

    Doodson  Darwin  l  m  ΔC+  ΔS+  ΔC-  ΔS-

Only 17 constituents are used. A record is assigned to a constituent
when its Doodson number falls inside the constituent's narrow inclusive
range; records outside every range, or with a degree outside
2..max_degree, are discarded. Header and comment lines (first token not
numeric) are skipped.

The parsed table is immutable. OceanTideTableLoader reads the file at
most once and shares the result between threads.

Reference: Lyard et al. (2006), FES2004 model.
"""

import logging
import pathlib
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import IO

import numpy as np

from geotide.domain.coefficient_deviations import MAX_TIDE_DEGREE
from geotide.domain.tide_errors import CoefficientTableUnavailableError

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TideConstituent:
    """A tidal constituent and its argument in terms of Delaunay variables.

    The phase of the constituent is
        θ_f = m (θ_g + π) - Σ_i N_i F_i
    with F = (l, l', F, D, Ω) and N = ``multipliers``.
    """

    slot: int
    name: str
    doodson_low: float
    doodson_high: float
    multipliers: tuple[int, int, int, int, int]

    def contains(self, doodson: float) -> bool:
        return self.doodson_low <= doodson <= self.doodson_high


# Ordered by slot. Ranges are inclusive.
CONSTITUENTS: tuple[TideConstituent, ...] = (
    TideConstituent(0, "Om1", 55.564, 55.566, (0, 0, 0, 0, 1)),
    TideConstituent(1, "Om2", 55.574, 55.576, (0, 0, 0, 0, 2)),
    TideConstituent(2, "Sa", 56.553, 56.555, (0, -1, 0, 0, 0)),
    TideConstituent(3, "Ssa", 57.554, 57.556, (0, 0, -2, 2, -2)),
    TideConstituent(4, "Mm", 65.454, 65.456, (-1, 0, 0, 0, 0)),
    TideConstituent(5, "Mf", 75.554, 75.556, (0, 0, -2, 0, -2)),
    TideConstituent(6, "Mtm", 85.454, 85.456, (-1, 0, -2, 0, -2)),
    TideConstituent(7, "Msqm", 93.554, 93.556, (0, 0, -2, -2, -2)),
    TideConstituent(8, "Q1", 135.654, 135.656, (-1, 0, -2, 0, -2)),
    TideConstituent(9, "O1", 145.554, 145.556, (0, 0, -2, 0, -2)),
    TideConstituent(10, "P1", 163.554, 163.556, (0, 0, -2, 2, -2)),
    TideConstituent(11, "K1", 165.554, 165.556, (0, 0, 0, 0, 0)),
    TideConstituent(12, "2N2", 235.754, 235.756, (-2, 0, -2, 0, -2)),
    TideConstituent(13, "N2", 245.654, 245.656, (-1, 0, -2, 0, -2)),
    TideConstituent(14, "M2", 255.554, 255.556, (0, 0, -2, 0, -2)),
    TideConstituent(15, "S2", 273.554, 273.556, (0, 0, -2, 2, -2)),
    TideConstituent(16, "K2", 275.554, 275.556, (0, 0, 0, 0, 0)),
)

N_CONSTITUENTS: int = len(CONSTITUENTS)

_DOODSON_RANGES: tuple[tuple[float, float, int], ...] = tuple(
    (c.doodson_low, c.doodson_high, c.slot) for c in CONSTITUENTS
)

# (17, 5) integer matrix of Delaunay multipliers
CONSTITUENT_MULTIPLIERS: np.ndarray = np.array(
    [c.multipliers for c in CONSTITUENTS], dtype=float,
)
CONSTITUENT_MULTIPLIERS.flags.writeable = False

_FIELDS_PER_RECORD = 8


def classify_doodson(doodson: float) -> int | None:
    """Constituent slot for a Doodson number, or None if not one of the 17."""
    for low, high, slot in _DOODSON_RANGES:
        if low <= doodson <= high:
            return slot
    return None


@dataclass(frozen=True)
class OceanTideTable:
    """Per-constituent coefficient amplitudes indexed ``[slot, l, m]``."""

    max_degree: int
    dc_plus: np.ndarray
    ds_plus: np.ndarray
    dc_minus: np.ndarray
    ds_minus: np.ndarray
    accepted: int = 0
    discarded: int = 0


def _empty_amplitudes() -> np.ndarray:
    return np.zeros((N_CONSTITUENTS, MAX_TIDE_DEGREE + 1, MAX_TIDE_DEGREE + 1))


def parse_ocean_tide_table(
    lines: Iterable[str],
    max_degree: int = MAX_TIDE_DEGREE,
    source: str = "<memory>",
) -> OceanTideTable:
    """Parse coefficient records into an OceanTideTable.

    Args:
        lines: Text lines of the coefficient file.
        max_degree: Highest degree kept (2..6).
        source: Name used in error messages.

    Raises:
        ValueError: If max_degree is outside 2..6.
        CoefficientTableUnavailableError: On a malformed data record, or
            when no record matches any constituent.
    """
    if not 2 <= max_degree <= MAX_TIDE_DEGREE:
        raise ValueError(
            f"max_degree must be in [2, {MAX_TIDE_DEGREE}], got {max_degree}"
        )

    dc_p = _empty_amplitudes()
    ds_p = _empty_amplitudes()
    dc_m = _empty_amplitudes()
    ds_m = _empty_amplitudes()
    accepted = 0
    discarded = 0

    for lineno, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            continue
        try:
            doodson = float(tokens[0])
        except ValueError:
            continue  # header

        if len(tokens) < _FIELDS_PER_RECORD:
            raise CoefficientTableUnavailableError(
                f"{source}:{lineno}: expected {_FIELDS_PER_RECORD} fields, "
                f"got {len(tokens)}"
            )
        try:
            l = int(tokens[2])
            m = int(tokens[3])
            cp, sp, cm, sm = (float(t) for t in tokens[4:8])
        except ValueError as exc:
            raise CoefficientTableUnavailableError(
                f"{source}:{lineno}: malformed record: {exc}"
            ) from exc

        if not 2 <= l <= max_degree or not 0 <= m <= l:
            discarded += 1
            continue

        slot = classify_doodson(doodson)
        if slot is None:
            discarded += 1
            continue

        dc_p[slot, l, m] = cp
        ds_p[slot, l, m] = sp
        dc_m[slot, l, m] = cm
        ds_m[slot, l, m] = sm
        accepted += 1

    if accepted == 0:
        raise CoefficientTableUnavailableError(
            f"{source}: no records for the {N_CONSTITUENTS} tide constituents"
        )

    for arr in (dc_p, ds_p, dc_m, ds_m):
        arr.flags.writeable = False

    return OceanTideTable(
        max_degree=max_degree,
        dc_plus=dc_p,
        ds_plus=ds_p,
        dc_minus=dc_m,
        ds_minus=ds_m,
        accepted=accepted,
        discarded=discarded,
    )


def _open_text(path: pathlib.Path) -> IO[str]:
    return open(path, encoding="utf-8")


class OceanTideTableLoader:
    """Loads the ocean tide table on first use and caches it.

    The first ``load()`` reads the file under a lock; later calls return
    the cached table without locking.
    """

    def __init__(
        self,
        path: str | pathlib.Path,
        max_degree: int = MAX_TIDE_DEGREE,
        opener: Callable[[pathlib.Path], IO[str]] = _open_text,
    ) -> None:
        self._path = pathlib.Path(path)
        self._max_degree = max_degree
        self._opener = opener
        self._lock = threading.Lock()
        self._table: OceanTideTable | None = None

    @property
    def path(self) -> pathlib.Path:
        return self._path

    @property
    def is_loaded(self) -> bool:
        return self._table is not None

    def load(self) -> OceanTideTable:
        """Return the cached table, reading the file on first call.

        Raises:
            CoefficientTableUnavailableError: If the file cannot be opened
                or parsed. Nothing is cached in that case.
        """
        table = self._table
        if table is not None:
            return table

        with self._lock:
            if self._table is None:
                self._table = self._read()
            return self._table

    def reset(self) -> None:
        """Drop the cached table; the next load() reads the file again."""
        with self._lock:
            self._table = None

    def _read(self) -> OceanTideTable:
        try:
            with self._opener(self._path) as f:
                table = parse_ocean_tide_table(
                    f, max_degree=self._max_degree, source=str(self._path),
                )
        except (OSError, UnicodeDecodeError) as exc:
            raise CoefficientTableUnavailableError(
                f"Cannot read ocean tide coefficients from {self._path}: {exc}"
            ) from exc

        _log.info(
            "Loaded ocean tide coefficients from %s (%d records, %d discarded)",
            self._path, table.accepted, table.discarded,
        )
        return table
