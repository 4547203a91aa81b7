# File: core/calculations.py
"""
Crude oil density / volume correction to the 20°C base.

Implements the API MPMS Chapter 11.1 style correction for Crude Oil
(Commodity Group A): an observed density at any temperature is converted to
the base density at 60°F by successive substitution, then carried to 20°C.

Everything here is a pure function of its arguments. Nothing is logged and
no state is kept between calls; errors are raised to the caller unchanged.

References:
- API MPMS Chapter 11.1 (Temperature and Pressure Volume Correction Factors)
"""

import math
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any, Union

from core.coefficients import CRUDE_OIL_GROUP_A, CommodityCoefficients
from core.exceptions import ConvergenceError, InvalidInput
from utils.helpers import is_finite_number, round_half_up

# Changes only when the numerical behaviour changes (coefficients, iteration
# scheme, rounding). Golden values must be regenerated together with it.
ALGORITHM_VERSION = "api11_1_crude_v1.0.0"

MAX_ITERATIONS = 50
TOLERANCE_KGM3 = 0.000001

DENSITY_PLACES = 6
FACTOR_PLACES = 6
RHO60_PLACES = 6
ALPHA_PLACES = 7

# Wire names used by the dashboard and the HTTP endpoint.
WIRE_TEMPERATURE_KEY = "tempFluidoC"
WIRE_DENSITY_KEY = "massaEspObs_gcc"


@dataclass(frozen=True)
class Api11CrudeInput:
    """Observed condition of the sample."""
    fluid_temperature_c: float
    observed_density_gcc: float


@dataclass(frozen=True)
class Api11CrudeResult:
    """Corrected values, already rounded to their reporting precision."""
    density20_gcc: float
    fcv20: float
    rho60_kgm3: float
    ctl_60_to_20: float
    alpha60: float

    def to_dict(self) -> dict:
        return {
            "density20_gcc": self.density20_gcc,
            "fcv20": self.fcv20,
            "rho60_kgm3": self.rho60_kgm3,
            "ctl_60_to_20": self.ctl_60_to_20,
            "alpha60": self.alpha60,
        }


@dataclass(frozen=True)
class SolverState:
    """Converged 60°F base density (unrounded) and the iterations it took."""
    rho60_kgm3: float
    iterations: int


def calculate_alpha60(rho60_kgm3: float, coeffs: CommodityCoefficients = CRUDE_OIL_GROUP_A) -> float:
    """
    Thermal expansion coefficient at the 60°F base density.

    alpha60 = K0 / rho60^2 + K1 / rho60 + K2
    """
    if not is_finite_number(rho60_kgm3) or rho60_kgm3 <= 0:
        raise InvalidInput(f"Base density @ 60F must be a positive finite number, got {rho60_kgm3!r}.")
    return coeffs.k0 / (rho60_kgm3 * rho60_kgm3) + coeffs.k1 / rho60_kgm3 + coeffs.k2


def calculate_vcf20(temp_c: float, alpha60: float, coeffs: CommodityCoefficients = CRUDE_OIL_GROUP_A) -> float:
    """
    Ratio of the density at temp_c to the density at the 20°C base.

    x      = CT * alpha60 * (temp_c - 20)
    y      = CT * alpha60 * 2 * (20 - T60)
    vcf20  = exp(-x * (1 + 0.8 * x + y))
    """
    x = coeffs.ct * alpha60 * (temp_c - coeffs.base_temp_c)
    delta_t = 2 * (coeffs.base_temp_c - coeffs.t60_c)
    y = coeffs.ct * alpha60 * delta_t
    return math.exp(-x * (1 + 0.8 * x + y))


def validate_input(fluid_temperature_c: Any, observed_density_gcc: Any) -> Api11CrudeInput:
    """Rejects anything that is not a finite temperature and a finite positive density."""
    if not is_finite_number(fluid_temperature_c):
        raise InvalidInput(f"Fluid temperature must be a valid finite number, got {fluid_temperature_c!r}.")
    if not is_finite_number(observed_density_gcc) or observed_density_gcc <= 0:
        raise InvalidInput(
            f"Observed density must be a finite number greater than zero, got {observed_density_gcc!r}."
        )
    return Api11CrudeInput(
        fluid_temperature_c=float(fluid_temperature_c),
        observed_density_gcc=float(observed_density_gcc),
    )


def solve_rho60(
    observed_density_gcc: float,
    fluid_temperature_c: float,
    coeffs: CommodityCoefficients = CRUDE_OIL_GROUP_A,
    max_iterations: int = MAX_ITERATIONS,
    tolerance_kgm3: float = TOLERANCE_KGM3,
) -> SolverState:
    """
    Finds the 60°F base density consistent with the observed density.

    Relationship: rho_obs = rho60 * (vcf_obs / vcf_60), where both factors are
    relative to the 20°C base and depend on rho60 through alpha60. The guess
    starts at the observed density and is updated by direct substitution
    rho60 = rho_obs / (vcf_obs / vcf_60) until the predicted observed density
    is within tolerance_kgm3 of the real one.

    Raises:
        ConvergenceError: tolerance not met within max_iterations, or the
            iteration left float range (alpha60 or exp() overflowing, the
            correction ratio collapsing to zero).
    """
    rho_obs_kgm3 = observed_density_gcc * 1000
    rho60 = rho_obs_kgm3

    for iteration in range(1, max_iterations + 1):
        try:
            alpha = calculate_alpha60(rho60, coeffs)
            vcf_60 = calculate_vcf20(coeffs.t60_c, alpha, coeffs)
            vcf_obs = calculate_vcf20(fluid_temperature_c, alpha, coeffs)
            ratio = vcf_obs / vcf_60
        except (OverflowError, ZeroDivisionError) as e:
            # rho60^2 underflowing to zero, or exp() beyond float range
            raise ConvergenceError(
                iteration,
                f"Density @ 60F diverged at iteration {iteration}: {e}.",
            ) from e

        if ratio <= 0 or not math.isfinite(ratio):
            raise ConvergenceError(
                iteration,
                f"Density @ 60F diverged at iteration {iteration}: correction ratio {ratio!r}.",
            )

        rho_obs_calc = rho60 * ratio
        if abs(rho_obs_kgm3 - rho_obs_calc) < tolerance_kgm3:
            return SolverState(rho60_kgm3=rho60, iterations=iteration)

        rho60 = rho_obs_kgm3 / ratio
        if not math.isfinite(rho60) or rho60 <= 0:
            raise ConvergenceError(
                iteration,
                f"Density @ 60F diverged at iteration {iteration}: base density {rho60!r}.",
            )

    raise ConvergenceError(max_iterations)


def _coerce_input(data: Union[Api11CrudeInput, Mapping[str, Any]]) -> Api11CrudeInput:
    if isinstance(data, Api11CrudeInput):
        return validate_input(data.fluid_temperature_c, data.observed_density_gcc)
    if not isinstance(data, Mapping):
        raise InvalidInput(f"Expected Api11CrudeInput or a mapping, got {type(data).__name__}.")

    temperature = data.get("fluid_temperature_c", data.get(WIRE_TEMPERATURE_KEY))
    density = data.get("observed_density_gcc", data.get(WIRE_DENSITY_KEY))
    if temperature is None or density is None:
        raise InvalidInput("Both fluid temperature (°C) and observed density (g/cm³) are required.")
    return validate_input(temperature, density)


def calculate_crude_api11_to_20(
    data: Union[Api11CrudeInput, Mapping[str, Any]],
    coeffs: CommodityCoefficients = CRUDE_OIL_GROUP_A,
) -> Api11CrudeResult:
    """
    Corrects an observed crude oil density to the 20°C base.

    Args:
        data: Api11CrudeInput, or a mapping with fluid_temperature_c /
            observed_density_gcc (the wire keys tempFluidoC /
            massaEspObs_gcc are accepted too).
        coeffs: Coefficient set, Crude Oil Group A by default.

    Returns:
        Api11CrudeResult rounded to the reporting precision.

    Raises:
        InvalidInput: missing, non-numeric or non-positive input.
        ConvergenceError: the base density iteration did not converge.
    """
    obs = _coerce_input(data)
    state = solve_rho60(obs.observed_density_gcc, obs.fluid_temperature_c, coeffs)
    rho60 = state.rho60_kgm3

    alpha_final = calculate_alpha60(rho60, coeffs)
    vcf_60_final = calculate_vcf20(coeffs.t60_c, alpha_final, coeffs)
    vcf_obs_final = calculate_vcf20(obs.fluid_temperature_c, alpha_final, coeffs)

    # V20 = Vobs * FCV, FCV = rho_obs / rho20; V20 = V60 * CTL, CTL = rho60 / rho20
    rho20_kgm3 = rho60 / vcf_60_final

    return Api11CrudeResult(
        density20_gcc=round_half_up(rho20_kgm3 / 1000, DENSITY_PLACES),
        fcv20=round_half_up(vcf_obs_final, FACTOR_PLACES),
        rho60_kgm3=round_half_up(rho60, RHO60_PLACES),
        ctl_60_to_20=round_half_up(vcf_60_final, FACTOR_PLACES),
        alpha60=round_half_up(alpha_final, ALPHA_PLACES),
    )


compute = calculate_crude_api11_to_20
