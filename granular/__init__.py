"""
Granular - Addressing for Data of Varying Granularity

Models numeric values that vary across a dynamically discovered set of
named, categorical dimensions, and works out where the value for a
given combination of categories lives in a flat buffer.
"""

__version__ = "0.1.0"

from .errors import (
    GranularError,
    UnknownDimension,
    UnknownCategoryValue,
    DuplicateDimension,
    DimensionConflict,
    GranularityMismatch,
)
from .dimensions import DimensionValues, DimensionRegistry, combine_dimensions
from .flags import VariationEncoding, compute_run_lengths
from .granularity import Granularity
from .query import Query
from .data import Data
from .operators import add, add_strict, add_scalar, mul, mul_strict, mul_scalar

__all__ = [
    "GranularError",
    "UnknownDimension",
    "UnknownCategoryValue",
    "DuplicateDimension",
    "DimensionConflict",
    "GranularityMismatch",
    "DimensionValues",
    "DimensionRegistry",
    "combine_dimensions",
    "VariationEncoding",
    "compute_run_lengths",
    "Granularity",
    "Query",
    "Data",
    "add",
    "add_strict",
    "add_scalar",
    "mul",
    "mul_strict",
    "mul_scalar",
]
