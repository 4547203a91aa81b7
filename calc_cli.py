#!/usr/bin/env python
"""
Command-line calculator for the crude oil correction to 20°C.

    python calc_cli.py --temperature 42 --density 0.92
    python calc_cli.py                      # runs the reference cases
"""
import argparse
import logging
import sys

from config import settings
from core.calculations import ALGORITHM_VERSION, Api11CrudeInput, calculate_crude_api11_to_20
from core.exceptions import CorrectionError
from utils.helpers import setup_main_logging

logger = logging.getLogger("calc_cli")

REFERENCE_CASES = [
    Api11CrudeInput(fluid_temperature_c=42.0, observed_density_gcc=0.92),
    Api11CrudeInput(fluid_temperature_c=42.0, observed_density_gcc=0.97),
]


def format_result(case: Api11CrudeInput) -> str:
    res = calculate_crude_api11_to_20(case)
    return (
        f"Input: {case.observed_density_gcc:.3f} g/cm³ @ {case.fluid_temperature_c}°C\n"
        f"  Density @20°C : {res.density20_gcc} g/cm³\n"
        f"  FCV20         : {res.fcv20}\n"
        f"  Rho60         : {res.rho60_kgm3} kg/m³\n"
        f"  CTL (60F->20C): {res.ctl_60_to_20}\n"
        f"  Alpha60       : {res.alpha60}"
    )


def main(argv=None) -> int:
    p = argparse.ArgumentParser(
        prog="calc-api11",
        description="Correct an observed crude oil density to 20°C (API 11.1, Crude Oil Group A).",
    )
    p.add_argument("--temperature", type=float, help="Observed fluid temperature, °C")
    p.add_argument("--density", type=float, help="Observed density, g/cm³")
    args = p.parse_args(argv)

    setup_main_logging(settings.LOG_LEVEL)

    if (args.temperature is None) != (args.density is None):
        p.error("--temperature and --density must be given together")

    if args.temperature is None:
        cases = REFERENCE_CASES
        print(f"--- API 11.1 Crude Oil (Group A) reference cases [{ALGORITHM_VERSION}] ---")
    else:
        cases = [Api11CrudeInput(fluid_temperature_c=args.temperature, observed_density_gcc=args.density)]

    exit_code = 0
    for case in cases:
        try:
            print(format_result(case))
        except CorrectionError as e:
            logger.error(f"Calculation failed for {case}: {e}")
            exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
