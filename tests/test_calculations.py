import math

import pytest

from core.calculations import (
    ALGORITHM_VERSION,
    MAX_ITERATIONS,
    Api11CrudeInput,
    Api11CrudeResult,
    calculate_alpha60,
    calculate_crude_api11_to_20,
    calculate_vcf20,
    compute,
    solve_rho60,
)
from core.coefficients import CRUDE_OIL_GROUP_A
from core.exceptions import ConvergenceError, CorrectionError, InvalidInput

T60C = CRUDE_OIL_GROUP_A.t60_c


def test_algorithm_version_is_pinned():
    assert ALGORITHM_VERSION == "api11_1_crude_v1.0.0"


def test_golden_092_at_42c():
    result = calculate_crude_api11_to_20(Api11CrudeInput(fluid_temperature_c=42, observed_density_gcc=0.92))

    assert result.to_dict() == {
        "density20_gcc": 0.934516,
        "fcv20": 0.984467,
        "rho60_kgm3": 937.433172,
        "ctl_60_to_20": 1.003122,
        "alpha60": 0.0003881,
    }


def test_golden_097_at_42c():
    result = calculate_crude_api11_to_20(Api11CrudeInput(fluid_temperature_c=42, observed_density_gcc=0.97))

    assert result.to_dict() == {
        "density20_gcc": 0.983784,
        "fcv20": 0.985989,
        "rho60_kgm3": 986.555036,
        "ctl_60_to_20": 1.002817,
        "alpha60": 0.0003505,
    }


def test_mapping_input_accepts_snake_and_wire_keys():
    snake = compute({"fluid_temperature_c": 42, "observed_density_gcc": 0.92})
    wire = compute({"tempFluidoC": 42, "massaEspObs_gcc": 0.92})

    assert snake == wire
    assert isinstance(snake, Api11CrudeResult)
    assert snake.rho60_kgm3 == 937.433172


def test_identical_inputs_give_identical_outputs():
    for temp_c in (0.0, 15.0, 20.0, 37.5, 60.0):
        for density in (0.82, 0.87, 0.92, 0.99):
            first = calculate_crude_api11_to_20(Api11CrudeInput(temp_c, density))
            second = calculate_crude_api11_to_20(Api11CrudeInput(temp_c, density))
            assert first == second
            assert solve_rho60(density, temp_c) == solve_rho60(density, temp_c)


@pytest.mark.parametrize("temp_c", [0.0, 10.0, 20.0, 42.0, 60.0])
@pytest.mark.parametrize("density", [0.82, 0.87, 0.92, 0.97, 1.0])
def test_converged_rho60_reproduces_observed_density(temp_c, density):
    state = solve_rho60(density, temp_c)
    alpha = calculate_alpha60(state.rho60_kgm3)
    ratio = calculate_vcf20(temp_c, alpha) / calculate_vcf20(T60C, alpha)

    assert abs(state.rho60_kgm3 * ratio - density * 1000) < 1e-6
    assert 1 <= state.iterations <= MAX_ITERATIONS


@pytest.mark.parametrize("temp_c", [0.0, 15.0, 30.0, 45.0, 60.0])
@pytest.mark.parametrize("density", [0.87, 0.9, 0.93, 0.96, 0.99])
def test_results_stay_in_physical_range(temp_c, density):
    res = calculate_crude_api11_to_20(Api11CrudeInput(temp_c, density))

    assert 0.9 < res.fcv20 < 1.1
    assert 0.85 < res.density20_gcc < 1.05
    assert 850 < res.rho60_kgm3 < 1050
    assert 0 < res.alpha60 < 0.001
    assert res.rho60_kgm3 == pytest.approx(density * 1000, rel=0.05)
    for value in res.to_dict().values():
        assert math.isfinite(value)


def test_observed_at_20c_keeps_density_and_unit_factor():
    res = calculate_crude_api11_to_20(Api11CrudeInput(20.0, 0.9))

    assert res.fcv20 == 1.0
    assert res.density20_gcc == 0.9
    assert res.ctl_60_to_20 > 1.0


def test_alpha60_decreases_with_density():
    alphas = [calculate_alpha60(rho) for rho in (750.0, 850.0, 950.0, 1050.0)]

    assert alphas == sorted(alphas, reverse=True)
    assert calculate_alpha60(1000.0) == pytest.approx(341.0957 / 1e6)


def test_vcf20_is_one_at_base_and_below_one_when_hotter():
    alpha = calculate_alpha60(900.0)

    assert calculate_vcf20(20.0, alpha) == 1.0
    assert calculate_vcf20(40.0, alpha) < 1.0
    assert calculate_vcf20(T60C, alpha) > 1.0


@pytest.mark.parametrize("density", [0, 0.0, -0.5, float("nan"), float("inf"), "0.9", None, True])
def test_invalid_density_is_rejected(density):
    with pytest.raises(InvalidInput):
        calculate_crude_api11_to_20(Api11CrudeInput(20.0, density))


@pytest.mark.parametrize("temp_c", [float("nan"), float("inf"), float("-inf"), "42", None, False])
def test_invalid_temperature_is_rejected(temp_c):
    with pytest.raises(InvalidInput):
        calculate_crude_api11_to_20(Api11CrudeInput(temp_c, 0.92))


def test_missing_fields_are_rejected():
    with pytest.raises(InvalidInput):
        compute({"tempFluidoC": 42})
    with pytest.raises(InvalidInput):
        compute([42, 0.92])


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        compute({"tempFluidoC": 42, "massaEspObs_gcc": -1})


def test_alpha60_rejects_non_positive_density():
    with pytest.raises(InvalidInput):
        calculate_alpha60(0.0)


def test_exhausted_iteration_budget_raises_convergence_error():
    with pytest.raises(ConvergenceError) as exc_info:
        solve_rho60(0.92, 42.0, max_iterations=1)

    assert exc_info.value.iterations == 1
    assert isinstance(exc_info.value, CorrectionError)


def test_collapsed_correction_ratio_raises_convergence_error():
    # exp() underflows to zero this far from the base temperature
    with pytest.raises(ConvergenceError) as exc_info:
        calculate_crude_api11_to_20(Api11CrudeInput(1.0e6, 0.92))

    assert exc_info.value.iterations == 1


@pytest.mark.parametrize("density", [1e-6, 1e-200, 5e-324])
def test_tiny_positive_density_raises_convergence_error(density):
    with pytest.raises(ConvergenceError) as exc_info:
        calculate_crude_api11_to_20(Api11CrudeInput(42.0, density))

    assert exc_info.value.iterations == 1


@pytest.mark.parametrize("temp_c", [-1.0e6, 1.0e6, -1.0e300, 1.0e300])
def test_extreme_temperature_raises_correction_error(temp_c):
    with pytest.raises(CorrectionError):
        calculate_crude_api11_to_20(Api11CrudeInput(temp_c, 0.92))


@pytest.mark.parametrize("temp_c, density", [(42.0, 1e-6), (-1.0e6, 0.92), (0.0, 1e306)])
def test_out_of_domain_inputs_raise_only_engine_errors(temp_c, density):
    with pytest.raises(CorrectionError):
        calculate_crude_api11_to_20(Api11CrudeInput(temp_c, density))
