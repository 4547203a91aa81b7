# File: core/__init__.py
"""
Correction Engine for crude oil density and volume

- Coefficients: commodity group constants for the API 11.1 alpha formula
- Calculations: alpha60, VCF to 20°C, base density solver and result assembly
- Provisional FCV: legacy table-interpolated correction factor
"""

from .exceptions import CorrectionError, InvalidInput, ConvergenceError
from .coefficients import CommodityCoefficients, CRUDE_OIL_GROUP_A, get_coefficients
from .calculations import (
    ALGORITHM_VERSION,
    Api11CrudeInput,
    Api11CrudeResult,
    calculate_alpha60,
    calculate_vcf20,
    calculate_crude_api11_to_20,
    compute,
    solve_rho60,
)
from .provisional_fcv import ProvisionalFcvResult, calculate_provisional_fcv

__all__ = [
    # Errors
    'CorrectionError',
    'InvalidInput',
    'ConvergenceError',
    # Coefficients
    'CommodityCoefficients',
    'CRUDE_OIL_GROUP_A',
    'get_coefficients',
    # Engine
    'ALGORITHM_VERSION',
    'Api11CrudeInput',
    'Api11CrudeResult',
    'calculate_alpha60',
    'calculate_vcf20',
    'calculate_crude_api11_to_20',
    'compute',
    'solve_rho60',
    # Provisional
    'ProvisionalFcvResult',
    'calculate_provisional_fcv',
]
