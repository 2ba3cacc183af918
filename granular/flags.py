"""
Variation Encoding Module

Tracks which dimensions a piece of data "varies by" and the run-length
(stride) of each of them within the flat value buffer.

The available dimensions themselves are tracked by DimensionRegistry;
an encoding is only meaningful alongside the registry it was computed
against.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from .constants import RUN_LENGTH_DTYPE

logger = logging.getLogger(__name__)


def compute_run_lengths(flags: Sequence[bool], sizes: Sequence[int]) -> np.ndarray:
    """
    Compute the run-length of every dimension represented in `flags` / `sizes`.

    `flags` indicates which dimensions are in use and `sizes` the number
    of values in each dimension. Both must have the same length and the
    same ordering.

    A dimension that does not vary is treated as a virtual axis of length
    one: it does not grow the addressable space and its run-length is 0,
    so every index along it maps to the same stored value.

    Example:
        >>> compute_run_lengths([True, False, True], [3, 2, 4]).tolist()
        [4, 0, 1]
    """
    flags = np.asarray(flags, dtype=bool)
    sizes = np.asarray(sizes, dtype=RUN_LENGTH_DTYPE)
    if flags.shape != sizes.shape:
        raise ValueError(f"Flags ({len(flags)}) and sizes ({len(sizes)}) have different lengths")

    if np.any(flags & (sizes == 0)):
        raise ValueError("A varying dimension must have at least one value")

    extents = np.where(flags, sizes, 1)
    current_size = int(np.prod(extents, dtype=RUN_LENGTH_DTYPE))

    run_lengths = np.zeros(len(flags), dtype=RUN_LENGTH_DTYPE)
    for idx, (flag, extent) in enumerate(zip(flags, extents)):
        if flag:
            run_length = current_size // int(extent)
            run_lengths[idx] = run_length
            current_size = run_length
    return run_lengths


class VariationEncoding:
    """
    Per-dimension variation flags plus the derived run-lengths.

    Invariant: `run_length(i) == 0` whenever `varies_by(i)` is False.
    The default encoding describes a single varying dimension with a
    run-length of 1.
    """

    def __init__(self, flags: Optional[Sequence[bool]] = None,
                 run_lengths: Optional[Sequence[int]] = None):
        if flags is None:
            flags, run_lengths = [True], [1]
        self._flags = np.array(flags, dtype=bool)
        self._run_lengths = np.array(run_lengths, dtype=RUN_LENGTH_DTYPE)
        if self._flags.shape != self._run_lengths.shape:
            raise ValueError("Flags and run-lengths must have the same length")

    @classmethod
    def from_flags(cls, flags: Sequence[bool], sizes: Sequence[int]) -> VariationEncoding:
        """Build an encoding for `flags`, computing run-lengths against `sizes`."""
        return cls(flags, compute_run_lengths(flags, sizes))

    def size(self) -> int:
        """Number of dimensions."""
        return len(self._run_lengths)

    def varies_by(self, idx: int) -> bool:
        return bool(self._flags[idx])

    def flags(self) -> List[bool]:
        return self._flags.tolist()

    def run_lengths(self) -> List[int]:
        return self._run_lengths.tolist()

    def run_length(self, idx: int) -> int:
        return int(self._run_lengths[idx])

    def drop(self, idx: int) -> None:
        """Stop varying by dimension `idx`. Other run-lengths are left untouched."""
        self._flags[idx] = False
        self._run_lengths[idx] = 0

    def broadcast(self, other: VariationEncoding, sizes: Sequence[int]) -> VariationEncoding:
        """
        Combine two encodings computed against the same dimensions.

        A dimension varies in the result if it varies in either operand.
        Run-lengths depend on the whole flag vector, so they are recomputed
        rather than merged.
        """
        if self.size() != other.size():
            raise ValueError(
                f"Cannot broadcast encodings of {self.size()} and {other.size()} dimensions"
            )
        flags = self._flags | other._flags
        result = VariationEncoding(flags, compute_run_lengths(flags, sizes))
        logger.debug("broadcast %s | %s -> run-lengths %s",
                     self.flags(), other.flags(), result.run_lengths())
        return result

    def copy(self) -> VariationEncoding:
        return VariationEncoding(self._flags.copy(), self._run_lengths.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VariationEncoding):
            return NotImplemented
        return (np.array_equal(self._flags, other._flags)
                and np.array_equal(self._run_lengths, other._run_lengths))

    __hash__ = None

    def __repr__(self) -> str:
        return f"VariationEncoding(flags={self.flags()}, run_lengths={self.run_lengths()})"
