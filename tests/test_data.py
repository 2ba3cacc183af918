"""
Tests for Data construction and queries
"""

import pytest
import numpy as np

from granular import (
    Data,
    DimensionRegistry,
    Granularity,
    Query,
    UnknownCategoryValue,
    VariationEncoding,
    add,
    add_scalar,
    add_strict,
)


class TestData:
    def test_single_element(self):
        data = Data.from_iter("test", [("A", 1.0)])
        assert data.granularity.size() == 1
        assert data.granularity.varies_by("test")
        assert data.granularity.run_length("test") == 1
        assert len(data) == 1

    def test_simple_single_dimension(self):
        data = Data.from_iter("test", [("A", 1.0), ("B", 2.0)])
        assert data.granularity.size() == 1
        assert data.granularity.varies_by("test")
        assert data.granularity.run_length("test") == 1
        assert data.values.tolist() == [1.0, 2.0]
        assert data.values.dtype == np.float64

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            Data("test", ["A", "B"], [1.0])

    def test_from_parts_checks_length(self):
        granularity = Granularity("test", ["A", "B"])
        with pytest.raises(ValueError):
            Data.from_parts(granularity, [1.0, 2.0, 3.0])

    def test_values_are_read_only(self):
        data = Data("test", ["A", "B"], [1.0, 2.0])
        with pytest.raises(ValueError):
            data.values[0] = 5.0


class TestQuery:
    def test_data_offset(self):
        data = Data.from_iter("test", [("A", 1.0), ("B", 2.0)])
        offset = data.granularity.data_offset(Query("test", "B"))
        assert offset == 1
        assert data.values[offset] == 2.0

    def test_single_dimension(self):
        data = Data.from_iter("test", [("A", 1.0), ("B", 2.0)])

        result = data.query(Query("test", "B"))

        assert len(result) == 1
        assert result.values[0] == 2.0
        assert not result.granularity.varies_by("test")

    def test_value_at(self):
        data = Data.from_iter("test", [("A", 1.0), ("B", 2.0)])
        assert data.value_at(Query("test", "A")) == 1.0
        assert data.value_at(Query("other", "X")) == 1.0

    def test_unknown_value(self):
        data = Data.from_iter("test", [("A", 1.0), ("B", 2.0)])
        with pytest.raises(UnknownCategoryValue):
            data.query(Query("test", "C"))

    def test_foreign_dimension_returns_everything(self):
        data = Data.from_iter("test", [("A", 1.0), ("B", 2.0)])
        result = data.query(Query("other", "X"))
        assert result.values.tolist() == [1.0, 2.0]
        assert result.granularity == data.granularity

    def test_multiple_dimensions(self):
        registry = (DimensionRegistry()
                    .add_dimension("region", ["north", "south"])
                    .add_dimension("product", ["a", "b", "c"]))
        granularity = Granularity.from_parts(
            registry, VariationEncoding.from_flags([True, True], registry.sizes())
        )
        data = Data.from_parts(granularity, [11.0, 12.0, 13.0, 21.0, 22.0, 23.0])

        south = data.query(Query("region", "south"))
        assert south.values.tolist() == [21.0, 22.0, 23.0]

        product_b = data.query(Query("product", "b"))
        assert product_b.values.tolist() == [12.0, 22.0]

        # Queries compose by issuing them one dimension at a time
        single = south.query(Query("product", "c"))
        assert single.values.tolist() == [23.0]


def make_data(flags, values):
    registry = (DimensionRegistry()
                .add_dimension("region", ["north", "south"])
                .add_dimension("product", ["a", "b", "c"]))
    granularity = Granularity.from_parts(
        registry, VariationEncoding.from_flags(flags, registry.sizes())
    )
    return Data.from_parts(granularity, values)


class TestDrop:
    def test_granularity_is_a_copy(self):
        data = make_data([True, True], [11.0, 12.0, 13.0, 21.0, 22.0, 23.0])

        data.granularity.drop("product")

        assert data.granularity.varies_by("product")
        assert data.query(Query("product", "b")).values.tolist() == [12.0, 22.0]
        assert add_scalar(data, 1.0).values.tolist() == [12.0, 13.0, 14.0, 22.0, 23.0, 24.0]

    def test_drop_repacks_values(self):
        data = make_data([True, True], [11.0, 12.0, 13.0, 21.0, 22.0, 23.0])

        data.drop("product")

        assert not data.granularity.varies_by("product")
        assert data.granularity.run_length("region") == 1
        assert data.values.tolist() == [11.0, 21.0]

    def test_query_after_drop(self):
        data = make_data([True, True], [11.0, 12.0, 13.0, 21.0, 22.0, 23.0])
        data.drop("product")

        result = data.query(Query("product", "b"))

        assert result.values.tolist() == [11.0, 21.0]
        assert result.value_at(Query("region", "south")) == 21.0
        assert data.value_at(Query("region", "south")) == 21.0

    def test_operators_after_drop(self):
        data = make_data([True, True], [11.0, 12.0, 13.0, 21.0, 22.0, 23.0])
        data.drop("product")
        region = make_data([True, False], [1.0, 2.0])

        assert add_scalar(data, 1.0).values.tolist() == [12.0, 22.0]
        assert add(data, region).values.tolist() == [12.0, 23.0]
        assert add_strict(data, region).values.tolist() == [12.0, 23.0]

    def test_from_parts_with_dropped_granularity(self):
        registry = (DimensionRegistry()
                    .add_dimension("region", ["north", "south"])
                    .add_dimension("product", ["a", "b", "c"]))
        granularity = Granularity.from_parts(
            registry, VariationEncoding.from_flags([True, True], registry.sizes())
        )
        granularity.drop("product")

        # Regions are still 3 apart, so the buffer keeps the gap between them
        data = Data.from_parts(granularity, [11.0, 0.0, 0.0, 21.0])

        assert data.value_at(Query("region", "south")) == 21.0
        assert data.query(Query("product", "b")).values.tolist() == [11.0, 21.0]
        assert add_scalar(data, 1.0).values.tolist() == [12.0, 1.0, 1.0, 22.0]
        assert add(data, make_data([True, False], [1.0, 2.0])).values.tolist() == [12.0, 23.0]

        with pytest.raises(ValueError):
            Data.from_parts(granularity, [11.0, 12.0, 13.0, 21.0, 22.0, 23.0])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
