"""Typed, range-checked access to integer and boolean parameters

Integer accessors read the store's native value, check it against the span
of the requested numpy integer type (optionally tightened by a caller range)
and only then narrow it to that type. Nothing is clamped: an out-of-range
value raises ValidationError, a wrongly typed one raises TypeMismatchError.
"""

import logging
import numbers
from typing import Any, Optional, Tuple

import numpy as np

from ..core.bounds import check_range, check_range_each
from ..core.dtypes import is_signed, narrow, narrow_sequence, resolve_dtype, type_bounds
from ..core.errors import TypeMismatchError
from .store import ParameterStore

logger = logging.getLogger(__name__)


def _is_integer(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (numbers.Integral, np.integer))


def _effective_bounds(
    dtype: Any, minimum: Optional[int], maximum: Optional[int]
) -> Tuple[int, int]:
    """Intersect the type span with an optional caller range"""
    lowest, highest = type_bounds(dtype)
    if minimum is not None:
        lowest = max(lowest, int(minimum))
    if maximum is not None:
        highest = min(highest, int(maximum))
    if lowest > highest:
        raise ValueError(
            f"Empty range [{lowest}, {highest}] for type {resolve_dtype(dtype).name}"
        )
    return lowest, highest


def get_integer(
    store: ParameterStore,
    key: str,
    dtype: Any,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Tuple[Optional[np.integer], bool]:
    """Read an integer parameter as dtype. Returns (value, found)"""
    lowest, highest = _effective_bounds(dtype, minimum, maximum)

    param, found = store.get_param(key)
    if not found:
        return None, False
    if not _is_integer(param):
        raise TypeMismatchError(
            f"Parameter '{key}' has the wrong type (expected integer, got {type(param).__name__})",
            name=key,
            expected="integer",
            value=param,
        )

    check_range(param, lowest, highest, key)
    value = narrow(param, dtype)
    logger.debug(f"Read {key} = {value} as {resolve_dtype(dtype).name}")
    return value, True


def get_integer_default(
    store: ParameterStore,
    key: str,
    dtype: Any,
    default: Any,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Any:
    """Read an integer parameter, falling back to default when the key is absent"""
    value, found = get_integer(store, key, dtype, minimum, maximum)
    if not found:
        return default
    return value


def get_integer_sequence(
    store: ParameterStore,
    key: str,
    dtype: Any,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Tuple[Optional[np.ndarray], bool]:
    """Read a list of integers as an array of dtype. Returns (values, found)"""
    lowest, highest = _effective_bounds(dtype, minimum, maximum)

    param, found = store.get_param(key)
    if not found:
        return None, False
    if not isinstance(param, (list, tuple, np.ndarray)):
        raise TypeMismatchError(
            f"Parameter '{key}' has the wrong type (expected list of integers, got {type(param).__name__})",
            name=key,
            expected="list of integers",
            value=param,
        )
    for i, element in enumerate(param):
        if not _is_integer(element):
            raise TypeMismatchError(
                f"Parameter '{key}[{i}]' has the wrong type (expected integer, got {type(element).__name__})",
                name=f"{key}[{i}]",
                expected="integer",
                value=element,
            )

    check_range_each(param, lowest, highest, key)
    values = narrow_sequence(param, dtype)
    logger.debug(f"Read {key} = {values.tolist()} as {resolve_dtype(dtype).name}[]")
    return values, True


def get_integer_sequence_default(
    store: ParameterStore,
    key: str,
    dtype: Any,
    default: Any,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Any:
    values, found = get_integer_sequence(store, key, dtype, minimum, maximum)
    if not found:
        return default
    return values


def get_signed(store: ParameterStore, key: str, dtype: Any, **kwargs) -> Tuple[Optional[np.integer], bool]:
    """get_integer restricted to signed target types"""
    if not is_signed(dtype):
        raise ValueError(f"Expected a signed integer type, got {resolve_dtype(dtype).name}")
    return get_integer(store, key, dtype, **kwargs)


def get_unsigned(store: ParameterStore, key: str, dtype: Any, **kwargs) -> Tuple[Optional[np.integer], bool]:
    """get_integer restricted to unsigned target types"""
    if is_signed(dtype):
        raise ValueError(f"Expected an unsigned integer type, got {resolve_dtype(dtype).name}")
    return get_integer(store, key, dtype, **kwargs)


def _wrong_boolean(name: str, value: Any = None) -> TypeMismatchError:
    return TypeMismatchError(
        f"Required parameter '{name}' has the wrong type (expected bool)",
        name=name,
        expected="bool",
        value=value,
    )


def get_boolean(store: ParameterStore, name: str) -> bool:
    """Read a boolean that must already be present in the store"""
    value, found = store.get_param(name)
    if not found or not isinstance(value, (bool, np.bool_)):
        raise _wrong_boolean(name, value)
    return bool(value)


def declare_boolean(store: ParameterStore, name: str, default: bool) -> bool:
    """Seed name with default if absent, then read it back as a boolean"""
    if not store.has_key(name):
        store.set_param(name, bool(default))
        logger.debug(f"Declared {name} = {bool(default)}")
    # implicit else: an existing value is left untouched

    return get_boolean(store, name)
