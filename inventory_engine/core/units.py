# inventory_engine/core/units.py

import enum
from decimal import Decimal, ROUND_HALF_UP

from inventory_engine.core.config import settings
from inventory_engine.core.exceptions import IncompatibleUnitsError


# Stock is persisted with six decimal places; nothing is rounded before that.
STOCK_SCALE = 6
STOCK_QUANTUM = Decimal(1).scaleb(-STOCK_SCALE)


class Unit(str, enum.Enum):
    GRAM = "gram"
    KG = "Kg"
    ML = "ml"
    LITRE = "Litre"
    PCS = "Pcs"
    BOX = "Box"


# Each unit maps to (dimension, how many base units one of it holds)
_MASS = "mass"
_VOLUME = "volume"
_COUNT = "count"

_DIMENSIONS = {
    Unit.GRAM: _MASS,
    Unit.KG: _MASS,
    Unit.ML: _VOLUME,
    Unit.LITRE: _VOLUME,
    Unit.PCS: _COUNT,
    Unit.BOX: _COUNT,
}


def _factor(unit: Unit) -> Decimal:
    if unit in (Unit.KG, Unit.LITRE):
        return Decimal(1000)
    if unit == Unit.BOX:
        return Decimal(settings.PCS_PER_BOX)
    return Decimal(1)


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.2 as 0.2 instead of its binary float expansion
    return Decimal(str(value))


def _parse(unit) -> Unit:
    try:
        return Unit(unit)
    except ValueError:
        raise IncompatibleUnitsError(str(unit), "a known unit") from None


def convert(quantity, from_unit, to_unit) -> Decimal:
    """
    Convert ``quantity`` expressed in ``from_unit`` into ``to_unit``.

    Units of different dimensions (mass, volume, count) never convert into
    each other; that raises IncompatibleUnitsError. The result is not
    rounded, callers round once when writing stock.
    """
    quantity = to_decimal(quantity)
    source = _parse(from_unit)
    target = _parse(to_unit)

    if source == target:
        return quantity

    if _DIMENSIONS[source] != _DIMENSIONS[target]:
        raise IncompatibleUnitsError(source.value, target.value)

    return quantity * _factor(source) / _factor(target)


def quantize_stock(quantity) -> Decimal:
    return to_decimal(quantity).quantize(STOCK_QUANTUM, rounding=ROUND_HALF_UP)
