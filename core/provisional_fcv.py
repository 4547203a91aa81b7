# File: core/provisional_fcv.py
"""
Provisional volume correction factor from a tabulated alpha.

Older operational model used before the API 11.1 engine: alpha is linearly
interpolated from a fixed density table (0.870 to 0.999 g/cm³) and applied
as FCV = exp(alpha * (20 - T)). Kept for comparison with legacy reports.
"""

import math
from dataclasses import dataclass

import numpy as np

from core.exceptions import InvalidInput
from utils.helpers import is_finite_number, round_half_up

BASE_TEMP_C = 20.0

# Observed density (g/cm³) -> alpha (1/°C)
ALPHA_TABLE = (
    (0.87, 0.0009),
    (0.88, 0.00088),
    (0.89, 0.00086),
    (0.90, 0.00084),
    (0.91, 0.00082),
    (0.92, 0.0008),
    (0.93, 0.00078),
    (0.94, 0.00076),
    (0.95, 0.00074),
    (0.96, 0.00072),
    (0.97, 0.0007),
    (0.98, 0.00068),
    (0.99, 0.00066),
    (0.999, 0.00064),
)

_DENSITIES = np.array([row[0] for row in ALPHA_TABLE])
_ALPHAS = np.array([row[1] for row in ALPHA_TABLE])

MIN_DENSITY_GCC = ALPHA_TABLE[0][0]
MAX_DENSITY_GCC = ALPHA_TABLE[-1][0]


@dataclass(frozen=True)
class ProvisionalFcvResult:
    alpha_used: float
    delta_t: float
    fcv: float
    density20_gcc: float

    def to_dict(self) -> dict:
        return {
            "alpha_used": self.alpha_used,
            "delta_t": self.delta_t,
            "fcv": self.fcv,
            "density20_gcc": self.density20_gcc,
        }


def interpolate_alpha(observed_density_gcc: float) -> float:
    """Alpha for a density inside the table range; exact table points return the tabulated value."""
    if not is_finite_number(observed_density_gcc) or not (
        MIN_DENSITY_GCC <= observed_density_gcc <= MAX_DENSITY_GCC
    ):
        raise InvalidInput(
            f"Observed density ({observed_density_gcc}) is outside the supported range "
            f"({MIN_DENSITY_GCC} to {MAX_DENSITY_GCC})."
        )
    return float(np.interp(observed_density_gcc, _DENSITIES, _ALPHAS))


def calculate_provisional_fcv(fluid_temperature_c: float, observed_density_gcc: float) -> ProvisionalFcvResult:
    """
    FCV and density @ 20°C with the tabulated alpha.

    delta_t   = 20 - T
    fcv       = exp(alpha * delta_t)
    density20 = density_obs / fcv
    """
    if not is_finite_number(fluid_temperature_c):
        raise InvalidInput(f"Fluid temperature must be a valid finite number, got {fluid_temperature_c!r}.")

    alpha = interpolate_alpha(observed_density_gcc)
    delta_t = BASE_TEMP_C - fluid_temperature_c
    try:
        fcv = math.exp(alpha * delta_t)
    except OverflowError as e:
        raise InvalidInput(f"Fluid temperature {fluid_temperature_c} °C is outside the correctable range.") from e
    if fcv == 0.0:
        raise InvalidInput(f"Fluid temperature {fluid_temperature_c} °C is outside the correctable range.")
    density20 = observed_density_gcc / fcv

    return ProvisionalFcvResult(
        alpha_used=round_half_up(alpha, 6),
        delta_t=round_half_up(delta_t, 2),
        fcv=round_half_up(fcv, 6),
        density20_gcc=round_half_up(density20, 4),
    )
