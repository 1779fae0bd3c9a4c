"""
Unit conversion to and from canonical units.
Volume is stored in milliliters, mass in kilograms, length in centimeters.
All ratios below are exact by definition, so Decimal arithmetic round-trips without drift.
Unknown unit tags raise UnknownUnitError; there is no fallback unit.
"""

from __future__ import annotations

import enum
from decimal import Decimal, InvalidOperation

from hydration_tracker.core.exceptions import UnknownUnitError


class VolumeUnit(str, enum.Enum):
    ML = "ML"
    L = "L"
    FL_OZ = "FL_OZ"  # US customary fluid ounce


class MassUnit(str, enum.Enum):
    KG = "KG"
    G = "G"
    LB = "LB"


class LengthUnit(str, enum.Enum):
    CM = "CM"
    M = "M"
    IN = "IN"


# Canonical units per family: factor is "how many canonical units in one of this unit"
_FACTORS: dict[type[enum.Enum], dict[enum.Enum, Decimal]] = {
    VolumeUnit: {
        VolumeUnit.ML: Decimal("1"),
        VolumeUnit.L: Decimal("1000"),
        VolumeUnit.FL_OZ: Decimal("29.5735295625"),
    },
    MassUnit: {
        MassUnit.KG: Decimal("1"),
        MassUnit.G: Decimal("0.001"),
        MassUnit.LB: Decimal("0.45359237"),
    },
    LengthUnit: {
        LengthUnit.CM: Decimal("1"),
        LengthUnit.M: Decimal("100"),
        LengthUnit.IN: Decimal("2.54"),
    },
}

_ALIASES: dict[type[enum.Enum], dict[str, enum.Enum]] = {
    VolumeUnit: {
        "MILLILITER": VolumeUnit.ML,
        "MILLILITRE": VolumeUnit.ML,
        "LITER": VolumeUnit.L,
        "LITRE": VolumeUnit.L,
        "LTR": VolumeUnit.L,
        "OZ": VolumeUnit.FL_OZ,
        "FLOZ": VolumeUnit.FL_OZ,
        "FL OZ": VolumeUnit.FL_OZ,
        "FLUID_OUNCE": VolumeUnit.FL_OZ,
    },
    MassUnit: {
        "KILOGRAM": MassUnit.KG,
        "GRAM": MassUnit.G,
        "LBS": MassUnit.LB,
        "POUND": MassUnit.LB,
    },
    LengthUnit: {
        "CENTIMETER": LengthUnit.CM,
        "METER": LengthUnit.M,
        "INCH": LengthUnit.IN,
    },
}


def parse_unit(tag: str | enum.Enum, family: type[enum.Enum] = VolumeUnit) -> enum.Enum:
    """Resolve a unit tag (enum member, value or alias, any case) within `family`."""
    if isinstance(tag, family):
        return tag
    if isinstance(tag, enum.Enum):
        # a member of another family
        raise UnknownUnitError(tag.value, family.__name__)
    if not isinstance(tag, str) or not tag.strip():
        raise UnknownUnitError(tag, family.__name__)
    key = tag.strip().upper()
    try:
        return family(key)
    except ValueError:
        pass
    unit = _ALIASES.get(family, {}).get(key)
    if unit is None:
        raise UnknownUnitError(tag, family.__name__)
    return unit


def is_known_unit(tag: str | enum.Enum, family: type[enum.Enum] = VolumeUnit) -> bool:
    try:
        parse_unit(tag, family)
    except UnknownUnitError:
        return False
    return True


def _as_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 0.1 becomes Decimal("0.1") rather than its binary expansion
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(value)
        except InvalidOperation as e:
            raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Quantity must be finite, got {value!r}")
    if result < 0:
        raise ValueError(f"Quantity must not be negative, got {value!r}")
    return result


def to_canonical(
    value: Decimal | int | float | str,
    unit: str | enum.Enum,
    family: type[enum.Enum] = VolumeUnit,
) -> Decimal:
    """Convert `value` expressed in `unit` to the canonical unit of `family`."""
    parsed = parse_unit(unit, family)
    return _as_decimal(value) * _FACTORS[family][parsed]


def from_canonical(
    value: Decimal | int | float | str,
    unit: str | enum.Enum,
    family: type[enum.Enum] = VolumeUnit,
) -> Decimal:
    """Convert a canonical quantity of `family` back into `unit`."""
    parsed = parse_unit(unit, family)
    factor = _FACTORS[family][parsed]
    return normalize_quantity(_as_decimal(value) / factor)


def normalize_quantity(value: Decimal | int | float | str) -> Decimal:
    """Drop trailing zeros left over from a stored scale: 250.0000000000 -> 250, 0.2500 -> 0.25."""
    result = _as_decimal(value)
    if result == result.to_integral_value():
        return result.quantize(Decimal(1))
    return result.normalize()


def to_milliliters(value, unit: str | VolumeUnit) -> Decimal:
    return to_canonical(value, unit, VolumeUnit)


def from_milliliters(value, unit: str | VolumeUnit) -> Decimal:
    return from_canonical(value, unit, VolumeUnit)


def to_kilograms(value, unit: str | MassUnit) -> Decimal:
    return to_canonical(value, unit, MassUnit)


def from_kilograms(value, unit: str | MassUnit) -> Decimal:
    return from_canonical(value, unit, MassUnit)


def to_centimeters(value, unit: str | LengthUnit) -> Decimal:
    return to_canonical(value, unit, LengthUnit)


def from_centimeters(value, unit: str | LengthUnit) -> Decimal:
    return from_canonical(value, unit, LengthUnit)
