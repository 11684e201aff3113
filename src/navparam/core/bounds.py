"""Inclusive range checks for scalar and sequence parameters"""

import numbers
import operator
from typing import Any, Sequence

import numpy as np

from .errors import ValidationError


def widen(value: Any) -> Any:
    """Promote an integral value to a Python int so comparisons never truncate"""
    if isinstance(value, (bool, np.bool_)):
        return int(value)
    if isinstance(value, (numbers.Integral, np.integer)):
        return operator.index(value)
    return value


def check_min(value: Any, minimum: Any, name: str) -> None:
    """Raise ValidationError if value is below minimum"""
    if widen(value) < widen(minimum):
        raise ValidationError(
            f"Invalid settings: {name} must be >= {minimum}",
            name=name,
            value=value,
            minimum=minimum,
        )


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, np.ndarray))


def check_range(value: Any, minimum: Any, maximum: Any, name: str) -> None:
    """Raise ValidationError if value (or any element of it) is outside [minimum, maximum]"""
    if _is_sequence(value):
        check_range_each(value, minimum, maximum, name)
        return

    wide = widen(value)
    if wide < widen(minimum) or wide > widen(maximum):
        raise ValidationError(
            f"Invalid settings: {name} must be in range [{minimum}, {maximum}].",
            name=name,
            value=value,
            minimum=minimum,
            maximum=maximum,
        )


def check_range_each(values: Sequence[Any], minimum: Any, maximum: Any, name: str) -> None:
    """Check every element in index order, stopping at the first violation"""
    for i, element in enumerate(values):
        check_range(element, minimum, maximum, f"{name}[{i}]")
