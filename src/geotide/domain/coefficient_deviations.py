# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Tide-induced deviations of the unnormalized geopotential coefficients."""

from dataclasses import dataclass, field

import numpy as np

MAX_TIDE_DEGREE: int = 6


@dataclass
class CoefficientDeviations:
    """ΔC_lm and ΔS_lm for 2 <= l <= max_degree, 0 <= m <= l.

    Arrays are indexed ``[l, m]`` with shape (7, 7) regardless of the
    degree actually populated; rows below 2 and above max_degree stay zero.
    ΔS_l0 is always zero.
    """

    max_degree: int
    dc: np.ndarray = field(
        default_factory=lambda: np.zeros((MAX_TIDE_DEGREE + 1, MAX_TIDE_DEGREE + 1))
    )
    ds: np.ndarray = field(
        default_factory=lambda: np.zeros((MAX_TIDE_DEGREE + 1, MAX_TIDE_DEGREE + 1))
    )

    def __post_init__(self) -> None:
        if not 2 <= self.max_degree <= MAX_TIDE_DEGREE:
            raise ValueError(
                f"max_degree must be in [2, {MAX_TIDE_DEGREE}], got {self.max_degree}"
            )

    def add_pole_tide(self, delta_c21: float, delta_s21: float) -> None:
        """Add a pole tide contribution to the (2, 1) terms."""
        self.dc[2, 1] += delta_c21
        self.ds[2, 1] += delta_s21

    def degrees(self) -> range:
        return range(2, self.max_degree + 1)
