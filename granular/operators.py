"""
Operators Module

Arithmetic on Data. Every operator comes in three flavours:

- scalar: combine each value with a single number
- strict: both operands must have exactly the same granularity
- broadcasting: the granularity of either operand is expanded as required

Whether it is correct to broadcast depends on what the data represents,
so the strict versions are provided for callers who want a mismatch to
be an error.
"""

import logging
from typing import Callable

import numpy as np

from .constants import VALUE_DTYPE
from .data import Data
from .errors import GranularityMismatch

logger = logging.getLogger(__name__)

BinaryOp = Callable[[np.ndarray, np.ndarray], np.ndarray]


def scalar_binary_op(values: np.ndarray, scalar: float, op: BinaryOp) -> np.ndarray:
    """Apply `op` between every element of `values` and `scalar`."""
    return np.asarray(op(values, VALUE_DTYPE(scalar)), dtype=VALUE_DTYPE)


def array_binary_op(lhs: np.ndarray, rhs: np.ndarray, op: BinaryOp) -> np.ndarray:
    """Apply `op` elementwise. Both arrays must be the same length."""
    if len(lhs) != len(rhs):
        raise ValueError(f"a ({len(lhs)}) and b ({len(rhs)}) have different lengths.")
    return np.asarray(op(lhs, rhs), dtype=VALUE_DTYPE)


def _strict(lhs: Data, rhs: Data, op: BinaryOp, name: str) -> Data:
    if lhs.granularity != rhs.granularity:
        raise GranularityMismatch(
            f"When using the strict version of operators ({name} in this case) "
            f"the granularity must match."
        )
    values = array_binary_op(lhs.values, rhs.values, op)
    return Data.from_parts(lhs.granularity, values)


def _broadcasting(lhs: Data, rhs: Data, op: BinaryOp, name: str) -> Data:
    granularity = lhs.granularity.broadcast(rhs.granularity)
    lhs_values = lhs.values[lhs.granularity.gather_offsets(granularity)]
    rhs_values = rhs.values[rhs.granularity.gather_offsets(granularity)]
    logger.debug("%s broadcast %d x %d values to %d",
                 name, len(lhs), len(rhs), granularity.element_count())
    return Data.from_parts(granularity, array_binary_op(lhs_values, rhs_values, op))


def add(lhs: Data, rhs: Data) -> Data:
    """
    Performs an add operation (+) expanding the granularity of either
    operand as required.

    This is often called "broadcasting" in other contexts.
    """
    return _broadcasting(lhs, rhs, np.add, "add")


def add_strict(lhs: Data, rhs: Data) -> Data:
    """
    Performs an add operation (+) but only if the level of granularity
    is the same.

    Raises:
        GranularityMismatch: the granularity of the operands differs
    """
    return _strict(lhs, rhs, np.add, "add")


def add_scalar(data: Data, amount: float) -> Data:
    """Adds a scalar `amount` to every value of `data`."""
    return Data.from_parts(data.granularity, scalar_binary_op(data.values, amount, np.add))


def mul(lhs: Data, rhs: Data) -> Data:
    """Performs a multiplication (*) expanding the granularity of either operand as required."""
    return _broadcasting(lhs, rhs, np.multiply, "mul")


def mul_strict(lhs: Data, rhs: Data) -> Data:
    """
    Performs a multiplication (*) but only if the level of granularity
    is the same.

    Raises:
        GranularityMismatch: the granularity of the operands differs
    """
    return _strict(lhs, rhs, np.multiply, "mul")


def mul_scalar(data: Data, amount: float) -> Data:
    """Multiplies every value of `data` by a scalar `amount`."""
    return Data.from_parts(data.granularity, scalar_binary_op(data.values, amount, np.multiply))
