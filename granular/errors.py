"""
Error Types

All lookup and compatibility failures raised by the addressing engine.
Every error derives from ValueError so callers that already guard
against bad input keep working.
"""


class GranularError(ValueError):
    """Base class for all granular errors."""


class UnknownDimension(GranularError, KeyError):
    """A dimension name is not present in the registry."""

    def __init__(self, dimension_name: str):
        self.dimension_name = dimension_name
        super().__init__(f"Un-recognised dimension: '{dimension_name}'")

    def __str__(self):
        return self.args[0]


class UnknownCategoryValue(GranularError, KeyError):
    """A category label is not one of the values of a dimension."""

    def __init__(self, dimension_name: str, value: str):
        self.dimension_name = dimension_name
        self.value = value
        super().__init__(f"Dimension '{dimension_name}' has no value '{value}'")

    def __str__(self):
        return self.args[0]


class DuplicateDimension(GranularError):
    """A dimension with the same name was already registered."""

    def __init__(self, dimension_name: str):
        self.dimension_name = dimension_name
        super().__init__(f"Dimension '{dimension_name}' already exists")


class DimensionConflict(GranularError):
    """The same dimension name is bound to different values."""

    def __init__(self, dimension_name: str):
        self.dimension_name = dimension_name
        super().__init__(f"Dimension '{dimension_name}' has conflicting values")


class GranularityMismatch(GranularError):
    """Two granularities are not compatible for the requested operation."""
