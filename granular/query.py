"""
Point queries against a single dimension.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Query:
    """Selects the value `dimension_value` along the dimension `dimension_name`."""
    dimension_name: str
    dimension_value: str
