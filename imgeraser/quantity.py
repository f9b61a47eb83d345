"""Resource quantities such as ``"25Mi"`` or ``"1500m"``."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from fractions import Fraction

__all__ = ["Quantity", "parse_quantity"]

_FORMATS = ("BinarySI", "DecimalSI", "DecimalExponent")
_BINARY = ["", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei"]
_DECIMAL = {"n": -9, "u": -6, "m": -3, "": 0, "k": 3, "M": 6, "G": 9, "T": 12, "P": 15, "E": 18}
_SUFFIX_OF = {exponent: suffix for suffix, exponent in _DECIMAL.items()}
_NUMBER = re.compile(r"([+-]?)([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(.*)", re.DOTALL)
_EXPONENT = re.compile(r"[eE]([+-]?[0-9]+)")
_NANO = 10**9


@dataclass(frozen=True, eq=False)
class Quantity:
    """An exact amount with its notation; equality depends on the amount only."""

    value: Fraction = Fraction(0)
    format: str = "DecimalSI"

    def __post_init__(self) -> None:
        if self.format not in _FORMATS:
            raise ValueError(f"unknown quantity format: {self.format!r}")
        object.__setattr__(self, "value", Fraction(self.value))

    def is_zero(self) -> bool:
        return self.value == 0

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        sign = "-" if self.value < 0 else ""
        if self.format == "BinarySI" and self.value.denominator == 1 and abs(self.value) >= 1024:
            mantissa, exponent = abs(int(self.value)), 0
            while mantissa % 1024 == 0 and exponent < len(_BINARY) - 1:
                mantissa, exponent = mantissa // 1024, exponent + 1
            return f"{sign}{mantissa}{_BINARY[exponent]}"
        mantissa, exponent = int(abs(self.value) * _NANO), -9
        if mantissa == 0:
            return "0"
        exponent_form = self.format == "DecimalExponent"
        while mantissa % 1000 == 0 and (exponent_form or exponent < 18):
            mantissa, exponent = mantissa // 1000, exponent + 3
        if not exponent_form:
            return f"{sign}{mantissa}{_SUFFIX_OF[exponent]}"
        return f"{sign}{mantissa}{f'e{exponent}' if exponent else ''}"


def parse_quantity(text: str) -> Quantity:
    """Parse a quantity string; raise ValueError if it is malformed."""
    match = _NUMBER.fullmatch(text)
    if match is None:
        raise ValueError(f"quantities must match the regular expression: {text!r}")
    sign, number, suffix = match.groups()
    value = Fraction(number) * (-1 if sign == "-" else 1)
    if suffix and suffix in _BINARY:
        value *= 1024 ** _BINARY.index(suffix)
        notation = "BinarySI"
    elif suffix in _DECIMAL:
        value *= Fraction(10) ** _DECIMAL[suffix]
        notation = "DecimalSI"
    else:
        exponent = _EXPONENT.fullmatch(suffix)
        if exponent is None:
            raise ValueError(f"unable to parse quantity's suffix: {text!r}")
        value *= Fraction(10) ** int(exponent.group(1))
        notation = "DecimalExponent"
    scaled = value * _NANO
    if scaled.denominator != 1:
        magnitude = math.ceil(abs(scaled))
        value = Fraction(magnitude if value > 0 else -magnitude, _NANO)
    return Quantity(value, notation)