"""
Lift Coach — Display units

Everything is stored in lbs. Conversion happens only when text is rendered.
"""
from typing import Callable

from src.config import LBS_PER_KG


def lbs_to_kg(weight: float) -> float:
    return round(weight / LBS_PER_KG, 1)


def kg_to_lbs(weight: float) -> float:
    return round(weight * LBS_PER_KG, 1)


def weight_unit(use_kg: bool) -> str:
    return "kg" if use_kg else "lbs"


def make_converter(use_kg: bool) -> Callable[[float], float]:
    """The `convert_weight` callable the engine expects for a unit preference."""
    if use_kg:
        return lbs_to_kg
    return lambda weight: weight


def _trim(value: float):
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_weight(weight: float, use_kg: bool, convert_weight: Callable[[float], float]) -> str:
    """'225lbs' / '49.9kg' style label. Integral values drop the '.0'."""
    return f"{_trim(convert_weight(weight))}{weight_unit(use_kg)}"
