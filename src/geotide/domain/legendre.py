# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Unnormalized associated Legendre functions P_lm(sin φ).

Forward-column recursion, stable for the low degrees used by the tide
models (no factorial closed forms). The same table layout serves the
Sun, the Moon and the satellite.

Storage: square array ``p[l, m]`` of size (max_degree+2)², so that the
sentinel ``p[l, l+1] = 0`` needed by the latitude derivative
``dP_lm/dφ = P_l,m+1 - m tan φ P_lm`` is always addressable.

No Condon-Shortley phase: P_11 = cos φ.
"""

import math

import numpy as np


def legendre_table(latitude: float, max_degree: int) -> np.ndarray:
    """Compute P_lm(sin φ) for 0 <= m <= l <= max_degree.

    Args:
        latitude: Latitude φ in radians, [-π/2, π/2].
        max_degree: Highest degree l (>= 1).

    Returns:
        Array of shape (max_degree+2, max_degree+2). Entries with m > l
        are zero.

    Raises:
        ValueError: If max_degree < 1.
    """
    if max_degree < 1:
        raise ValueError(f"max_degree must be >= 1, got {max_degree}")

    size = max_degree + 2
    p = np.zeros((size, size))

    p[0, 0] = 1.0
    p[0, 1] = 0.0
    p[1, 0] = math.sin(latitude)
    p[1, 1] = math.cos(latitude)

    for m in range(max_degree + 1):
        for l in range(max(2, m), max_degree + 1):
            if l == m:
                p[m, m] = (2 * m - 1) * p[1, 1] * p[m - 1, m - 1]
            elif l == m + 1:
                p[l, m] = (2 * m + 1) * p[1, 0] * p[l - 1, m]
            else:
                p[l, m] = (
                    (2 * l - 1) * p[1, 0] * p[l - 1, m]
                    - (l + m - 1) * p[l - 2, m]
                ) / (l - m)

    return p
