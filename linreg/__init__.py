from .numeric import working_type, to_float, count_as
from .regression import mean, lin_reg, linear_regression, linear_regression_of, predict

__all__ = [
    "working_type",
    "to_float",
    "count_as",
    "mean",
    "lin_reg",
    "linear_regression",
    "linear_regression_of",
    "predict",
]
