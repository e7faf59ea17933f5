# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Configuration of data file locations for the tide models."""

import os
import pathlib
from dataclasses import dataclass

_DATA_DIR = pathlib.Path(__file__).resolve().parent.parent / "data"

OCEAN_COEFFICIENTS_ENV: str = "GEOTIDE_OCEAN_COEFFICIENTS"
EOP_FILE_ENV: str = "GEOTIDE_EOP_FILE"

DEFAULT_OCEAN_COEFFICIENTS: pathlib.Path = _DATA_DIR / "fes2004_Cnm-Snm.dat"
DEFAULT_EOP_FILE: pathlib.Path = _DATA_DIR / "eop_finals2000a.json"


@dataclass(frozen=True)
class TideModelConfig:
    """File locations and tunables.

    Attributes:
        ocean_coefficients_path: FES2004 coefficient table.
        eop_path: EOP JSON file; None disables Earth orientation (and
            thereby the pole tides).
        polar_motion_window_days: Length of the running mean defining
            the mean pole.
    """

    ocean_coefficients_path: pathlib.Path = DEFAULT_OCEAN_COEFFICIENTS
    eop_path: pathlib.Path | None = None
    polar_motion_window_days: float = 365.25

    def __post_init__(self) -> None:
        if self.polar_motion_window_days <= 0.0:
            raise ValueError(
                "polar_motion_window_days must be positive, "
                f"got {self.polar_motion_window_days}"
            )

    @classmethod
    def from_env(cls) -> "TideModelConfig":
        """Build from GEOTIDE_OCEAN_COEFFICIENTS and GEOTIDE_EOP_FILE.

        Unset variables fall back to the bundled data directory; the EOP
        file is only used when it exists.
        """
        ocean = os.environ.get(OCEAN_COEFFICIENTS_ENV)
        eop = os.environ.get(EOP_FILE_ENV)

        if eop:
            eop_path: pathlib.Path | None = pathlib.Path(eop)
        elif DEFAULT_EOP_FILE.exists():
            eop_path = DEFAULT_EOP_FILE
        else:
            eop_path = None

        return cls(
            ocean_coefficients_path=(
                pathlib.Path(ocean) if ocean else DEFAULT_OCEAN_COEFFICIENTS
            ),
            eop_path=eop_path,
        )
