# linreg/numeric.py
from __future__ import annotations

from typing import Any, Optional

import numpy as np


def working_type(dtype: Any = np.float64) -> type:
    """
    Resolve the floating-point working type (float16/32/64, or anything
    np.dtype() understands) to its numpy scalar type.
    """
    dt = np.dtype(dtype)
    if dt.kind != "f":
        raise ValueError(f"Working type must be a floating dtype, got: {dt}")
    return dt.type


def to_float(value: Any, ftype: type) -> np.floating:
    return ftype(value)


def count_as(n: int, ftype: type) -> Optional[np.floating]:
    """
    Element count as the working type, or None when n has no exact
    representation (too large for the mantissa, or overflows to inf).
    """
    with np.errstate(over="ignore"):
        c = ftype(n)
    if not np.isfinite(c) or int(c) != n:
        return None
    return c


def is_undefined(value: np.floating) -> bool:
    # NaN from 0/0, inf from a vanishing denominator
    return not np.isfinite(value)
