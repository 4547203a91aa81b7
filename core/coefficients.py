# File: core/coefficients.py
"""
Coefficient sets for the API MPMS Chapter 11.1 thermal expansion formula.

alpha60 = K0 / rho60^2 + K1 / rho60 + K2

Only Crude Oil (Commodity Group A) is shipped. Records are frozen and the
lookup table is a read-only mapping, so the same instance can be shared by
any number of concurrent calculations.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from core.exceptions import InvalidInput


@dataclass(frozen=True)
class CommodityCoefficients:
    """Constants needed to correct one commodity group to the 20°C base."""
    name: str
    k0: float
    k1: float
    k2: float
    base_temp_c: float = 20.0
    t60_c: float = 15.555556  # 60°F expressed in °C
    ct: float = 1.8  # 9/5, °C -> °F interval scale

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "k0": self.k0,
            "k1": self.k1,
            "k2": self.k2,
            "base_temp_c": self.base_temp_c,
            "t60_c": self.t60_c,
            "ct": self.ct,
        }


CRUDE_OIL_GROUP_A = CommodityCoefficients(
    name="Crude Oil, Group A",
    k0=341.0957,
    k1=0.0,
    k2=0.0,
)

COMMODITY_COEFFICIENTS: Mapping[str, CommodityCoefficients] = MappingProxyType({
    "A": CRUDE_OIL_GROUP_A,
})

DEFAULT_COMMODITY = "A"


def get_coefficients(commodity: str = DEFAULT_COMMODITY) -> CommodityCoefficients:
    """Return the coefficient record for a commodity group key (case-insensitive)."""
    key = str(commodity).strip().upper()
    if key not in COMMODITY_COEFFICIENTS:
        raise InvalidInput(
            f"Unknown commodity group '{commodity}'. "
            f"Available: {', '.join(sorted(COMMODITY_COEFFICIENTS))}"
        )
    return COMMODITY_COEFFICIENTS[key]


def get_commodity_options():
    """Return the list of supported commodity group keys."""
    return list(COMMODITY_COEFFICIENTS.keys())
