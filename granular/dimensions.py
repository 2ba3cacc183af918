"""
Dimension Registry Module

Tracks the dimensions a value **could** vary by, together with the
category values possible within each of them.

The order of dimensions is the addressing order: the first dimension
is the outermost one. Higher cardinality dimensions are pushed toward
the tail, which keeps the regions obtained by fixing outer dimensions
contiguous and so allows slicing large regions without copying.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import (
    DimensionConflict,
    DuplicateDimension,
    UnknownCategoryValue,
    UnknownDimension,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DimensionValues:
    """The ordered category values possible within a single dimension."""
    values: Tuple[str, ...] = ()

    @classmethod
    def of(cls, values: Iterable[str]) -> DimensionValues:
        return cls(tuple(values))

    def index(self, value: str) -> Optional[int]:
        """
        Position of `value`, or None if it is not a category of this dimension.

        This is a linear scan, O(k) in the number of categories. Category
        counts are expected to be small.
        """
        for idx, candidate in enumerate(self.values):
            if candidate == value:
                return idx
        return None

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __getitem__(self, idx: int) -> str:
        return self.values[idx]


class DimensionRegistry:
    """
    The collection of all possible dimensions that a value could vary by.

    Registries are built fluently and never change once built:

        >>> dims = (DimensionRegistry()
        ...         .add_dimension("region", ["north", "south"])
        ...         .add_dimension("product", ["a", "b", "c"]))
        >>> dims.sizes()
        [2, 3]

    Two registries are equal when they hold the same dimensions, in the
    same order, with the same values.
    """

    def __init__(self, dimensions: Optional[Dict[str, DimensionValues]] = None):
        self._dimensions: Dict[str, DimensionValues] = {
            name: values if isinstance(values, DimensionValues) else DimensionValues.of(values)
            for name, values in (dimensions or {}).items()
        }
        self._names: List[str] = list(self._dimensions)
        self._positions: Dict[str, int] = {name: idx for idx, name in enumerate(self._names)}

    def add_dimension(self, name: str, values: Iterable[str]) -> DimensionRegistry:
        """Return a new registry with `name` appended as the innermost dimension."""
        if name in self._dimensions:
            raise DuplicateDimension(name)
        dimensions = dict(self._dimensions)
        dimensions[name] = values if isinstance(values, DimensionValues) else DimensionValues.of(values)
        return DimensionRegistry(dimensions)

    def index_of(self, name: str) -> int:
        """Return the index of the dimension `name`, raising UnknownDimension if absent."""
        idx = self.maybe_index_of(name)
        if idx is None:
            raise UnknownDimension(name)
        return idx

    def maybe_index_of(self, name: str) -> Optional[int]:
        """Return the index of the dimension `name`, or None if absent."""
        return self._positions.get(name)

    def index_of_value(self, dim_index: int, value: str) -> int:
        """Return the position of `value` within the values of dimension `dim_index`."""
        name = self._names[dim_index]
        idx = self._dimensions[name].index(value)
        if idx is None:
            raise UnknownCategoryValue(name, value)
        return idx

    def sizes(self) -> List[int]:
        """Cardinality of each dimension, in registry order."""
        return [len(values) for values in self._dimensions.values()]

    def names(self) -> List[str]:
        return list(self._names)

    def values(self, name: str) -> DimensionValues:
        """Return the values of dimension `name`, raising UnknownDimension if absent."""
        if name not in self._dimensions:
            raise UnknownDimension(name)
        return self._dimensions[name]

    def items(self) -> List[Tuple[str, DimensionValues]]:
        return list(self._dimensions.items())

    def __len__(self) -> int:
        return len(self._dimensions)

    def __contains__(self, name: object) -> bool:
        return name in self._dimensions

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DimensionRegistry):
            return NotImplemented
        return self.items() == other.items()

    def __hash__(self):
        return hash(tuple(self.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{name!r}: {list(values)!r}" for name, values in self._dimensions.items())
        return f"DimensionRegistry({{{inner}}})"


def combine_dimensions(lhs: DimensionRegistry, rhs: DimensionRegistry) -> DimensionRegistry:
    """
    Combine two registries into one that contains the dimensions of both.

    Both registries are walked with independent cursors. Shared dimensions
    must have identical values and are emitted once. When the heads differ
    the dimension with fewer values goes first, ties broken by name, so the
    combined order keeps low cardinality dimensions toward the front.

    Args:
        lhs: First registry
        rhs: Second registry

    Returns:
        New registry holding the union of dimensions

    Raises:
        DimensionConflict: a dimension appears in both with different values
    """
    combined: Dict[str, DimensionValues] = {}

    def emit(name: str, values: DimensionValues) -> None:
        existing = combined.get(name)
        if existing is None:
            combined[name] = values
        elif existing != values:
            raise DimensionConflict(name)

    left = lhs.items()
    right = rhs.items()
    l_pos = 0
    r_pos = 0

    while l_pos < len(left) and r_pos < len(right):
        l_name, l_values = left[l_pos]
        r_name, r_values = right[r_pos]

        if l_name == r_name:
            if l_values != r_values:
                raise DimensionConflict(l_name)
            emit(l_name, l_values)
            l_pos += 1
            r_pos += 1
        elif (len(l_values), l_name) <= (len(r_values), r_name):
            emit(l_name, l_values)
            l_pos += 1
        else:
            emit(r_name, r_values)
            r_pos += 1

    # One side is exhausted, flush the other in its original order
    for name, values in left[l_pos:] + right[r_pos:]:
        emit(name, values)

    logger.debug("combined dimensions %s and %s into %s", lhs.names(), rhs.names(), list(combined))
    return DimensionRegistry(combined)
