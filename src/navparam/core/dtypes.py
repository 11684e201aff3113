"""Integer target types: representable spans and narrowing"""

from typing import Any, Iterable, Tuple

import numpy as np


def resolve_dtype(dtype: Any) -> np.dtype:
    """Resolve a dtype name, numpy scalar type or dtype to an integer np.dtype"""
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise ValueError(f"Not an integer type: {dtype!r}") from e
    if resolved.kind not in ("i", "u"):
        raise ValueError(f"Not an integer type: {dtype!r} (kind '{resolved.kind}')")
    return resolved


def type_bounds(dtype: Any) -> Tuple[int, int]:
    """Return the inclusive (lowest, max) span of an integer type"""
    info = np.iinfo(resolve_dtype(dtype))
    return int(info.min), int(info.max)


def is_signed(dtype: Any) -> bool:
    """True for signed integer types"""
    return resolve_dtype(dtype).kind == "i"


def narrow(value: int, dtype: Any) -> np.integer:
    """Convert an already validated value to a scalar of the target type"""
    return resolve_dtype(dtype).type(value)


def narrow_sequence(values: Iterable[int], dtype: Any) -> np.ndarray:
    """Convert already validated values to an array of the target type"""
    return np.array(list(values), dtype=resolve_dtype(dtype))
