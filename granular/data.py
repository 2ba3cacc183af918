"""
Data Module

The main type used to model data of varying granularity: a flat
buffer of values together with the Granularity needed to interpret it.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, Tuple

import numpy as np

from .constants import VALUE_DTYPE
from .granularity import Granularity
from .query import Query

logger = logging.getLogger(__name__)


class Data:
    """
    Values that vary by a set of named, categorical dimensions.

    The buffer length always equals `granularity.element_count()`.

    Example:
        >>> data = Data.from_iter("region", [("north", 1.0), ("south", 2.0)])
        >>> data.value_at(Query("region", "south"))
        2.0
    """

    def __init__(self, dimension_name: str, dimension_values: Sequence[str],
                 values: Sequence[float]):
        if len(dimension_values) != len(values):
            raise ValueError(
                f"Dimension '{dimension_name}' has {len(dimension_values)} values "
                f"but {len(values)} data values were given"
            )
        self._granularity = Granularity(dimension_name, dimension_values)
        self._values = np.array(values, dtype=VALUE_DTYPE)

    @classmethod
    def from_iter(cls, dimension_name: str, pairs: Iterable[Tuple[str, float]]) -> Data:
        """Create single-dimension data from (category value, value) pairs."""
        dimension_values = []
        values = []
        for dimension_value, value in pairs:
            dimension_values.append(dimension_value)
            values.append(value)
        return cls(dimension_name, dimension_values, values)

    @classmethod
    def from_parts(cls, granularity: Granularity, values) -> Data:
        """Wrap an existing buffer, checking it matches `granularity`."""
        values = np.asarray(values, dtype=VALUE_DTYPE)
        if values.ndim != 1 or len(values) != granularity.element_count():
            raise ValueError(
                f"Granularity addresses {granularity.element_count()} values "
                f"but the buffer has shape {values.shape}"
            )
        data = cls.__new__(cls)
        data._granularity = granularity
        data._values = values
        return data

    @property
    def granularity(self) -> Granularity:
        """A copy of the granularity; changing it does not affect this data."""
        return self._granularity.copy()

    def drop(self, dimension_name: str) -> None:
        """
        Stop varying by `dimension_name`, in place.

        Only the values at the first category of the dropped dimension
        are kept, and the buffer is repacked to match.
        """
        dropped = self._granularity.copy()
        dropped.drop(dimension_name)
        self._granularity, offsets = dropped.compact()
        self._values = self._values[offsets]

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the value buffer."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    def value_at(self, query: Query) -> float:
        return float(self._values[self._granularity.data_offset(query)])

    def query(self, query: Query) -> Data:
        """
        Select the values for a single category of one dimension.

        The result no longer varies by the queried dimension. Querying a
        dimension the data does not vary by returns all of the data.
        """
        granularity, offsets = self._granularity.select(query)
        logger.debug("query %s selected %d of %d values", query, len(offsets), len(self._values))
        return Data.from_parts(granularity, self._values[offsets])

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Data(granularity={self._granularity!r}, values={self._values.tolist()!r})"
