"""
Granularity Module

A Granularity pairs a DimensionRegistry with a VariationEncoding. It is
the meta-data that makes a flat value buffer addressable: which
dimensions exist, which of them the data actually varies by, and the
run-length of each within the buffer.

Addressing follows row-major order with broadcast semantics. The flat
offset of an element is the sum over dimensions of

    category_index * run_length

where a dimension that does not vary has run-length 0, so every one of
its categories resolves to the same stored value.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .constants import RUN_LENGTH_DTYPE
from .dimensions import DimensionRegistry
from .errors import GranularityMismatch
from .flags import VariationEncoding
from .query import Query

logger = logging.getLogger(__name__)


class Granularity:
    """
    Holds meta-data that allows the actual data array to be interpreted.

    Attributes:
        dimensions: The dimensions the data could vary by
        encoding: The dimensions the data actually varies by, with run-lengths
    """

    def __init__(self, dimension_name: str, dimension_values: Iterable[str]):
        self._encoding = VariationEncoding()
        self._dims = DimensionRegistry().add_dimension(dimension_name, dimension_values)

    @classmethod
    def from_parts(cls, dimensions: DimensionRegistry, encoding: VariationEncoding) -> Granularity:
        """Assemble a granularity from an existing registry and encoding."""
        if len(dimensions) != encoding.size():
            raise ValueError(
                f"Registry has {len(dimensions)} dimensions but encoding has {encoding.size()}"
            )
        granularity = cls.__new__(cls)
        granularity._dims = dimensions
        granularity._encoding = encoding
        return granularity

    @property
    def dimensions(self) -> DimensionRegistry:
        return self._dims

    @property
    def encoding(self) -> VariationEncoding:
        return self._encoding

    def size(self) -> int:
        """Number of dimensions tracked, varying or not."""
        return self._encoding.size()

    def dimension_index(self, dimension_name: str) -> int:
        return self._dims.index_of(dimension_name)

    def dimension_index_maybe(self, dimension_name: str) -> Optional[int]:
        return self._dims.maybe_index_of(dimension_name)

    def varies_by(self, dimension_name: str) -> bool:
        return self._encoding.varies_by(self._dims.index_of(dimension_name))

    def run_length(self, dimension_name: str) -> int:
        return self._encoding.run_length(self._dims.index_of(dimension_name))

    def element_count(self) -> int:
        """
        Number of values a buffer with this granularity holds.

        This is one past the largest reachable offset. After `drop` the
        remaining run-lengths still step over the dropped dimension, so
        the buffer keeps gaps and can be longer than the product of the
        varying sizes.
        """
        count = 1
        for varies, size, run_length in zip(self._encoding.flags(), self._dims.sizes(),
                                            self._encoding.run_lengths()):
            if not varies:
                continue
            if size == 0:
                return 0
            count += (size - 1) * run_length
        return count

    def broadcast(self, other: Granularity) -> Granularity:
        """
        Expand the granularity to vary by every dimension either operand varies by.

        Both operands must track the same dimensions in the same order
        with the same values. Reconciling different registries would
        change the layout of the underlying buffers, which broadcasting
        does not do.

        Raises:
            GranularityMismatch: the registries differ
        """
        if self._dims != other._dims:
            raise GranularityMismatch(
                f"Cannot broadcast granularities over different dimensions: "
                f"{self._dims!r} vs {other._dims!r}"
            )
        encoding = self._encoding.broadcast(other._encoding, self._dims.sizes())
        return Granularity.from_parts(self._dims, encoding)

    def drop(self, dimension_name: str) -> None:
        """Stop varying by `dimension_name`, in place."""
        self._encoding.drop(self._dims.index_of(dimension_name))

    def without(self, dimension_name: str) -> Granularity:
        """Return a copy that no longer varies by `dimension_name`, laid out compactly."""
        idx = self._dims.index_of(dimension_name)
        flags = self._encoding.flags()
        flags[idx] = False
        return Granularity.from_parts(
            self._dims, VariationEncoding.from_flags(flags, self._dims.sizes())
        )

    def data_offset(self, query: Query) -> int:
        """
        Resolve `query` to an offset within the value buffer.

        A dimension that is not tracked, or that the data does not vary by,
        contributes nothing: every value along it maps to the same stored
        value.

        Raises:
            UnknownCategoryValue: the dimension varies but has no such value
        """
        idx = self._dims.maybe_index_of(query.dimension_name)
        if idx is None or not self._encoding.varies_by(idx):
            return 0
        value_idx = self._dims.index_of_value(idx, query.dimension_value)
        return value_idx * self._encoding.run_length(idx)

    def gather_offsets(self, target: Granularity) -> np.ndarray:
        """
        Offsets into this granularity's buffer for every element of `target`.

        Elements of `target` are enumerated in row-major order. Dimensions
        this granularity does not vary by are broadcast, i.e. read from
        the same stored value for every category.

        Raises:
            GranularityMismatch: registries differ, or this granularity
                varies by a dimension that `target` does not
        """
        if self._dims != target._dims:
            raise GranularityMismatch("Cannot gather across different dimensions")
        for name, mine, theirs in zip(self._dims, self._encoding.flags(), target._encoding.flags()):
            if mine and not theirs:
                raise GranularityMismatch(
                    f"Target does not vary by '{name}', which this granularity varies by"
                )
        return self._offsets(target._encoding.flags(), 0)

    def select(self, query: Query) -> Tuple[Granularity, np.ndarray]:
        """
        Narrow to a single category along one dimension.

        Returns the granularity of the selection together with the offsets,
        into this granularity's buffer, of every selected element. A query
        on a dimension that is not tracked or does not vary selects
        everything.
        """
        idx = self._dims.maybe_index_of(query.dimension_name)
        if idx is None or not self._encoding.varies_by(idx):
            return self.compact()
        base = self.data_offset(query)
        selected = self.without(query.dimension_name)
        logger.debug("selecting %s=%s at base offset %d",
                     query.dimension_name, query.dimension_value, base)
        return selected, self._offsets(selected._encoding.flags(), base)

    def compact(self) -> Tuple[Granularity, np.ndarray]:
        """
        Lay the same variation out without gaps.

        Returns a granularity with run-lengths recomputed from the flags,
        together with the offsets, into this granularity's buffer, of
        every element of the compact layout.
        """
        flags = self._encoding.flags()
        compacted = Granularity.from_parts(
            self._dims, VariationEncoding.from_flags(flags, self._dims.sizes())
        )
        return compacted, self._offsets(flags, 0)

    def _offsets(self, flags: Sequence[bool], base: int) -> np.ndarray:
        offsets = np.full(1, base, dtype=RUN_LENGTH_DTYPE)
        run_lengths: List[int] = self._encoding.run_lengths()
        for varies, size, run_length in zip(flags, self._dims.sizes(), run_lengths):
            if not varies:
                continue
            # Outer dimensions first keeps the enumeration row-major
            steps = np.arange(size, dtype=RUN_LENGTH_DTYPE) * run_length
            offsets = (offsets[:, None] + steps[None, :]).ravel()
        return offsets

    def copy(self) -> Granularity:
        return Granularity.from_parts(self._dims, self._encoding.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Granularity):
            return NotImplemented
        return self._encoding == other._encoding and self._dims == other._dims

    __hash__ = None

    def __repr__(self) -> str:
        return f"Granularity(dimensions={self._dims!r}, encoding={self._encoding!r})"
