# linreg/regression.py
from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Tuple

import numpy as np

from .numeric import working_type, to_float, count_as, is_undefined


def predict(slope, intercept, x):
    return slope * x + intercept


def mean(values: Iterable[Any], dtype: Any = np.float64) -> Optional[np.floating]:
    """
    Arithmetic mean of `values` in the working float type.

    Single lazy pass (generators are fine), plain left-to-right summation.
    Returns None for an empty input or a count the float type cannot hold.
    """
    ftype = working_type(dtype)
    total = ftype(0)
    n = 0
    with np.errstate(over="ignore", invalid="ignore"):
        for v in values:
            total = total + to_float(v, ftype)
            n += 1

    if n == 0:
        return None
    count = count_as(n, ftype)
    if count is None:
        return None
    return total / count


def lin_reg(xys: Iterable[Tuple[Any, Any]], x_mean, y_mean) -> Optional[Tuple[np.floating, np.floating]]:
    """
    Least-squares slope/intercept given precomputed means.

    xys must already be converted to the working type. Returns None when the
    slope is not finite (zero x-variance, or too steep to represent).
    """
    ftype = np.result_type(x_mean, y_mean).type
    x_mean = ftype(x_mean)
    y_mean = ftype(y_mean)

    # SUM (x - mean(x))^2
    xxm2 = ftype(0)
    # SUM (x - mean(x)) * (y - mean(y))
    xmym2 = ftype(0)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for x, y in xys:
            dx = x - x_mean
            xxm2 = xxm2 + dx * dx
            xmym2 = xmym2 + dx * (y - y_mean)

        # divide-by-zero is checked after the fact
        slope = xmym2 / xxm2
        if is_undefined(slope):
            return None

        intercept = y_mean - slope * x_mean

    return slope, intercept


def linear_regression(
    xs: Sequence[Any],
    ys: Sequence[Any],
    dtype: Any = np.float64,
) -> Optional[Tuple[np.floating, np.floating]]:
    """
    Fit y = slope*x + intercept from two parallel sequences.

    Returns None if the lengths differ, either side is empty, the count is
    not representable in `dtype`, or the slope is undefined.
    """
    if len(xs) != len(ys):
        return None

    ftype = working_type(dtype)

    # an empty axis has no mean
    x_mean = mean(xs, ftype)
    if x_mean is None:
        return None
    y_mean = mean(ys, ftype)
    if y_mean is None:
        return None

    return lin_reg(
        zip(
            (to_float(x, ftype) for x in xs),
            (to_float(y, ftype) for y in ys),
        ),
        x_mean,
        y_mean,
    )


def linear_regression_of(
    xys: Sequence[Tuple[Any, Any]],
    dtype: Any = np.float64,
) -> Optional[Tuple[np.floating, np.floating]]:
    """
    Fit y = slope*x + intercept from a sequence of (x, y) pairs.

    Both means come from one pass over the pairs rather than one pass per
    component. Same None cases as linear_regression(), minus the length check.
    """
    ftype = working_type(dtype)

    if len(xys) == 0:
        return None
    n = count_as(len(xys), ftype)
    if n is None:
        return None

    x_sum = ftype(0)
    y_sum = ftype(0)
    with np.errstate(over="ignore", invalid="ignore"):
        for x, y in xys:
            x_sum = x_sum + to_float(x, ftype)
            y_sum = y_sum + to_float(y, ftype)
        x_mean = x_sum / n
        y_mean = y_sum / n

    return lin_reg(
        ((to_float(x, ftype), to_float(y, ftype)) for x, y in xys),
        x_mean,
        y_mean,
    )
