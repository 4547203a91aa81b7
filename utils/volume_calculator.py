# File: utils/volume_calculator.py

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from core.calculations import ALGORITHM_VERSION, Api11CrudeInput, calculate_crude_api11_to_20
from core.coefficients import CRUDE_OIL_GROUP_A, CommodityCoefficients
from core.exceptions import InvalidInput
from utils.helpers import is_finite_number, round_half_up

logger = logging.getLogger(__name__)


def lookup_calibration_value(level_mm: float, strapping_data: Dict[float, float], default: float = 0.0) -> float:
    """
    Reads a value (volume, factor, ...) from a strapping table at a given level.

    Levels at or below the first entry return the first value. Levels above
    the last entry are extrapolated from the last two entries. Anything in
    between is linearly interpolated; exact entries are returned as stored.
    """
    if not strapping_data:
        return default

    levels = np.array(sorted(strapping_data.keys()), dtype=float)
    values = np.array([strapping_data[lvl] for lvl in sorted(strapping_data.keys())], dtype=float)

    if level_mm <= levels[0]:
        return float(values[0])

    if level_mm > levels[-1]:
        if len(levels) >= 2:
            level_span = levels[-1] - levels[-2]
            if level_span != 0:
                slope = (values[-1] - values[-2]) / level_span
                return round_half_up(float(values[-1] + (level_mm - levels[-1]) * slope), 6)
        return float(values[-1])

    exact = np.flatnonzero(levels == level_mm)
    if exact.size:
        return float(values[exact[0]])

    return round_half_up(float(np.interp(level_mm, levels, values)), 6)


@dataclass(frozen=True)
class VolumeCorrectionResult:
    """Observed tank volume carried to the 20°C base."""
    gov_litres: float
    gsv_litres: float
    fcv20: float
    density20_gcc: float
    mass_kg: float
    algorithm_version: str = ALGORITHM_VERSION

    def to_dict(self) -> dict:
        return {
            "gov_litres": round(self.gov_litres, 2),
            "gsv_litres": round(self.gsv_litres, 2),
            "fcv20": self.fcv20,
            "density20_gcc": self.density20_gcc,
            "mass_kg": round(self.mass_kg, 2),
            "algorithm_version": self.algorithm_version,
        }


class VolumeCalculator:
    """
    Handles volume calculations for storage tanks, including
    Gross Observed Volume (GOV) and Gross Standard Volume (GSV) at 20°C.
    """

    def __init__(self, coeffs: CommodityCoefficients = CRUDE_OIL_GROUP_A):
        self.coeffs = coeffs
        self.std_temp_c = coeffs.base_temp_c
        logger.info(f"VolumeCalculator initialized for '{coeffs.name}' at reference temperature {self.std_temp_c}°C")

    def calculate_gov_from_strapping(self, level_mm: float, strapping_data: Dict[float, float]) -> Optional[float]:
        """
        Calculates the Gross Observed Volume (GOV) from strapping data.

        Args:
            level_mm: The measured level in millimeters.
            strapping_data: A dictionary mapping level (mm) to volume (litres).

        Returns:
            The volume in litres, or None if table or level is missing.
        """
        if not strapping_data or level_mm is None:
            logger.warning("Strapping data is empty or level is not provided. Cannot calculate GOV.")
            return None
        return lookup_calibration_value(level_mm, strapping_data)

    def calculate_gsv(self, gov_litres: float, observed_temp_c: float, observed_density_gcc: float) -> VolumeCorrectionResult:
        """
        Corrects a Gross Observed Volume to the 20°C base.

        GSV = GOV * FCV20, mass = GSV * density @ 20°C.

        Raises:
            InvalidInput / ConvergenceError from the correction engine.
        """
        if not is_finite_number(gov_litres) or gov_litres < 0:
            raise InvalidInput(f"Observed volume must be a non-negative finite number, got {gov_litres!r}.")

        result = calculate_crude_api11_to_20(
            Api11CrudeInput(fluid_temperature_c=observed_temp_c, observed_density_gcc=observed_density_gcc),
            self.coeffs,
        )
        gsv_litres = gov_litres * result.fcv20
        # litres * g/cm³ = kg
        mass_kg = gsv_litres * result.density20_gcc

        logger.debug(
            f"GSV: {gsv_litres:.2f} L from GOV {gov_litres:.2f} L @ {observed_temp_c}°C "
            f"(density obs {observed_density_gcc} g/cm³, FCV20 {result.fcv20})"
        )
        return VolumeCorrectionResult(
            gov_litres=gov_litres,
            gsv_litres=gsv_litres,
            fcv20=result.fcv20,
            density20_gcc=result.density20_gcc,
            mass_kg=mass_kg,
        )
